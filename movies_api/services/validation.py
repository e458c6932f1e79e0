"""Payload validation for movie create/update requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from movies_api.models import MovieCreate, MovieUpdate


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a payload: either ``data`` or ``errors``."""

    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.data is not None


def validate_movie(payload: Any) -> ValidationResult:
    """Check a full movie payload; every field rule applies."""

    return _validate(MovieCreate, payload, partial=False)


def validate_partial_movie(payload: Any) -> ValidationResult:
    """Check only the fields present in ``payload``."""

    return _validate(MovieUpdate, payload, partial=True)


def _validate(schema: type[BaseModel], payload: Any, *, partial: bool) -> ValidationResult:
    try:
        model = schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(errors=format_errors(exc.errors(include_url=False)))
    return ValidationResult(data=model.model_dump(exclude_unset=partial))


def format_errors(raw_errors: Any) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into the public ``{path, message, code}`` shape."""

    return [
        {
            "path": list(error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
            "code": error.get("type", "invalid"),
        }
        for error in raw_errors
    ]
