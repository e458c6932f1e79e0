"""Pydantic schemas for movie records.

``MovieCreate`` describes a full payload accepted by ``POST /movies``,
``MovieUpdate`` the same fields with nothing required (``PATCH``) and
``Movie`` a stored record carrying its server-generated ``id``.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

Genre = Literal[
    "Action",
    "Adventure",
    "Crime",
    "Comedy",
    "Drama",
    "Fantasy",
    "Horror",
    "Thriller",
    "Sci-Fi",
]

MIN_YEAR = 1900
MAX_YEAR = 2030
MIN_RATE = 0.0
MAX_RATE = 10.0
DEFAULT_RATE = 5.0

_HTTP_URL = TypeAdapter(HttpUrl)
_HOST_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def _is_valid_poster_url(value: str) -> bool:
    try:
        url = _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    host = url.host or ""
    if host.startswith("["):
        return True
    return all(_HOST_LABEL.match(label) for label in host.rstrip(".").split("."))


class MovieBase(BaseModel):
    """Per-field rules shared by the create and update schemas."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("poster", check_fields=False)
    @classmethod
    def _check_poster_url(cls, value: str | None) -> str | None:
        # Stored exactly as sent; HttpUrl would normalize it.
        if value is not None and not _is_valid_poster_url(value):
            raise ValueError("Poster must be a valid URL")
        return value

    @field_validator("genre", check_fields=False)
    @classmethod
    def _dedupe_genres(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return list(dict.fromkeys(value))


class MovieCreate(MovieBase):
    title: StrictStr = Field(..., min_length=1)
    year: StrictInt = Field(..., ge=MIN_YEAR, le=MAX_YEAR)
    director: StrictStr = Field(..., min_length=1)
    duration: StrictInt = Field(..., gt=0)
    rate: StrictFloat = Field(default=DEFAULT_RATE, ge=MIN_RATE, le=MAX_RATE)
    poster: StrictStr
    genre: list[Genre] = Field(..., min_length=1)


class MovieUpdate(MovieBase):
    """Every field optional; an explicit ``null`` is still rejected.

    Defaults are not validated, so ``_reject_null`` only sees values the
    client sent. Dump with ``exclude_unset``.
    """

    title: StrictStr | None = Field(default=None, min_length=1)
    year: StrictInt | None = Field(default=None, ge=MIN_YEAR, le=MAX_YEAR)
    director: StrictStr | None = Field(default=None, min_length=1)
    duration: StrictInt | None = Field(default=None, gt=0)
    rate: StrictFloat | None = Field(default=None, ge=MIN_RATE, le=MAX_RATE)
    poster: StrictStr | None = None
    genre: list[Genre] | None = Field(default=None, min_length=1)

    @field_validator("*")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value


class Movie(MovieCreate):
    id: StrictStr = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str
