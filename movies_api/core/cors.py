"""Cross-origin policy: a fixed allow-list checked before routing."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Collection

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from movies_api.core.config import ACCEPTED_ORIGINS

logger = logging.getLogger(__name__)


def is_origin_allowed(origin: str | None, accepted: Collection[str] = ACCEPTED_ORIGINS) -> bool:
    """Requests without an Origin header are same-origin or non-browser clients."""

    return not origin or origin in accepted


def install_cors(app: FastAPI, accepted: Collection[str] = ACCEPTED_ORIGINS) -> None:
    """Attach CORS headers for accepted origins and reject every other origin."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(accepted),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registered last so it wraps CORSMiddleware and runs first.
    @app.middleware("http")
    async def reject_unknown_origins(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, accepted):
            logger.warning("Rejected %s %s from origin %s", request.method, request.url.path, origin)
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"message": "Not allowed by CORS"},
            )
        return await call_next(request)
