"""In-memory movie store seeded from a JSON file."""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from movies_api.models import Movie


logger = logging.getLogger(__name__)


class SeedDataError(Exception):
    """Raised when the seed file cannot be turned into a valid store."""


class MovieStore:
    """Ordered collection of movie records guarded by a single lock.

    Handlers run on a thread pool, so every access goes through ``_lock``.
    Records are copied in and out; callers never see the internal dicts.
    """

    def __init__(self, records: Iterable[dict[str, Any]] | None = None) -> None:
        self._lock = threading.RLock()
        self._movies: list[dict[str, Any]] = [copy.deepcopy(record) for record in records or ()]

    @classmethod
    def from_file(cls, path: str | Path) -> MovieStore:
        """Load and validate a JSON array of movies."""

        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SeedDataError(f"cannot read seed file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise SeedDataError(f"seed file {path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise SeedDataError(f"seed file {path} must contain a JSON array")

        records: list[dict[str, Any]] = []
        seen: set[str] = set()
        for index, item in enumerate(raw):
            try:
                movie = Movie.model_validate(item)
            except ValidationError as exc:
                raise SeedDataError(f"seed record #{index} is invalid: {exc}") from exc
            if movie.id in seen:
                raise SeedDataError(f"duplicate movie id in seed file: {movie.id}")
            seen.add(movie.id)
            records.append(movie.model_dump())

        logger.info("Loaded %d movies from %s", len(records), path)
        return cls(records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def list_all(self) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._movies)

    def list_by_genre(self, genre: str) -> list[dict[str, Any]]:
        needle = genre.lower()
        with self._lock:
            return [
                copy.deepcopy(movie)
                for movie in self._movies
                if any(g.lower() == needle for g in movie.get("genre", []))
            ]

    def find_by_id(self, movie_id: str) -> dict[str, Any] | None:
        with self._lock:
            index = self._index_of(movie_id)
            if index is None:
                return None
            return copy.deepcopy(self._movies[index])

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(record)
        with self._lock:
            self._movies.append(stored)
        logger.debug("Inserted movie %s", stored.get("id"))
        return copy.deepcopy(stored)

    def remove_by_id(self, movie_id: str) -> bool:
        with self._lock:
            index = self._index_of(movie_id)
            if index is None:
                return False
            del self._movies[index]
        logger.debug("Removed movie %s", movie_id)
        return True

    def update_by_id(self, movie_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        """Shallow-merge ``fields`` into the record; ``None`` if the id is unknown."""

        with self._lock:
            index = self._index_of(movie_id)
            if index is None:
                return None
            updated = {**self._movies[index], **copy.deepcopy(fields)}
            self._movies[index] = updated
            result = copy.deepcopy(updated)
        logger.debug("Updated movie %s fields=%s", movie_id, sorted(fields))
        return result

    def _index_of(self, movie_id: str) -> int | None:
        for index, movie in enumerate(self._movies):
            if movie.get("id") == movie_id:
                return index
        return None
