"""FastAPI entrypoint exposing CRUD routes over the in-memory movie store."""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movies_api.core.config import Settings, get_settings
from movies_api.core.cors import install_cors
from movies_api.models import MessageResponse, Movie
from movies_api.services.store import MovieStore
from movies_api.services.validation import format_errors, validate_movie, validate_partial_movie

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Movie not found"


class MovieNotFound(Exception):
    """Raised by a handler when the requested movie id is not in the store."""

    def __init__(self, movie_id: str) -> None:
        super().__init__(movie_id)
        self.movie_id = movie_id


router = APIRouter()


def get_store(request: Request) -> MovieStore:
    return request.app.state.store


@router.get("/", response_model=MessageResponse)
def root() -> MessageResponse:
    return MessageResponse(message="hola mundo")


@router.get("/movies", response_model=list[Movie])
def list_movies(
    genre: str | None = None,
    store: MovieStore = Depends(get_store),
) -> list[dict[str, Any]]:
    """All movies, or only those tagged with ``genre`` (case-insensitive)."""

    if genre:
        return store.list_by_genre(genre)
    return store.list_all()


@router.get("/movies/{movie_id}", response_model=Movie)
def get_movie(movie_id: str, store: MovieStore = Depends(get_store)) -> dict[str, Any]:
    movie = store.find_by_id(movie_id)
    if movie is None:
        raise MovieNotFound(movie_id)
    return movie


@router.post("/movies", response_model=Movie, status_code=status.HTTP_201_CREATED)
def create_movie(
    payload: Any = Body(default=None),
    store: MovieStore = Depends(get_store),
) -> Any:
    result = validate_movie(payload)
    if not result.ok:
        return _unprocessable(result.errors)

    new_movie = {"id": str(uuid.uuid4()), **result.data}
    created = store.insert(new_movie)
    logger.info("Created movie %s (%s)", created["id"], created["title"])
    return created


@router.patch("/movies/{movie_id}", response_model=Movie)
def update_movie(
    movie_id: str,
    payload: Any = Body(default=None),
    store: MovieStore = Depends(get_store),
) -> Any:
    """Merge the supplied fields into an existing movie."""

    result = validate_partial_movie(payload)
    if not result.ok:
        return _unprocessable(result.errors)

    updated = store.update_by_id(movie_id, result.data)
    if updated is None:
        raise MovieNotFound(movie_id)
    return updated


@router.delete("/movies/{movie_id}", response_model=MessageResponse)
def delete_movie(movie_id: str, store: MovieStore = Depends(get_store)) -> MessageResponse:
    if not store.remove_by_id(movie_id):
        raise MovieNotFound(movie_id)
    logger.info("Deleted movie %s", movie_id)
    return MessageResponse(message="Movie deleted")


def _unprocessable(errors: list[dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": errors},
    )


async def _movie_not_found_handler(_: Request, exc: MovieNotFound) -> JSONResponse:
    logger.debug("Movie %s not found", exc.movie_id)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": NOT_FOUND_MESSAGE},
    )


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON bodies share the 422 envelope used for schema failures.
    return _unprocessable(format_errors(exc.errors()))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report the seeded store size before serving."""

    logger.info("Serving %d movies", len(app.state.store))
    yield


def create_app(
    *,
    settings: Settings | None = None,
    store: MovieStore | None = None,
) -> FastAPI:
    """Build the application around ``store`` (or the configured seed file)."""

    settings = settings or get_settings()
    if store is None:
        store = MovieStore.from_file(settings.movies_data_path)

    app = FastAPI(title="Movies API", lifespan=lifespan)
    app.state.store = store
    install_cors(app)
    app.include_router(router)
    app.add_exception_handler(MovieNotFound, _movie_not_found_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    return app


app = create_app()


def run() -> None:
    """Serve ``app`` with uvicorn on the configured host and port."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Server running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, server_header=False)


if __name__ == "__main__":
    run()
