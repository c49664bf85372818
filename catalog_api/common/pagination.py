"""Pagination parameters and their validation.

Query strings deliver ``limit`` and ``offset`` as text; both are coerced to
integers before the bounds are checked. Missing values are valid and mean
"use the default", which the consumer applies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from catalog_api.domain.exceptions import InvalidPaginationError


class PaginationParams(BaseModel):
    """Optional page bounds.

    Attributes:
        limit: Maximum number of items, positive when given.
        offset: Number of items to skip, non-negative when given.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    limit: int | None = Field(default=None, gt=0)
    offset: int | None = Field(default=None, ge=0)

    def resolve(self, default_limit: int = 10) -> tuple[int, int]:
        """Apply defaults for missing bounds.

        Args:
            default_limit: Limit used when none was given.

        Returns:
            ``(limit, offset)`` pair.
        """
        limit = self.limit if self.limit is not None else default_limit
        offset = self.offset if self.offset is not None else 0
        return limit, offset


@dataclass(frozen=True)
class FieldError:
    """A single rejected field."""

    field: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason}


@dataclass(frozen=True)
class PaginationResult:
    """Outcome of validating raw pagination input.

    Exactly one of ``params`` or ``errors`` is meaningful: ``params`` is set
    when validation succeeded, ``errors`` lists every failing field otherwise.
    """

    params: PaginationParams | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_pagination(raw: Mapping[str, Any]) -> PaginationResult:
    """Validate raw ``limit``/``offset`` values.

    Args:
        raw: Mapping with optional ``limit`` and ``offset`` entries, as
            strings or numbers. ``None`` counts as absent.

    Returns:
        Result holding either the parsed parameters or the field errors.
    """
    values = {
        key: raw[key]
        for key in ("limit", "offset")
        if key in raw and raw[key] is not None
    }

    try:
        params = PaginationParams.model_validate(values)
    except PydanticValidationError as e:
        errors = [
            FieldError(field=str(err["loc"][0]), reason=err["msg"])
            for err in e.errors()
        ]
        return PaginationResult(errors=errors)

    return PaginationResult(params=params)


def parse_pagination(raw: Mapping[str, Any]) -> PaginationParams:
    """Validate raw pagination input or raise.

    Args:
        raw: Mapping with optional ``limit`` and ``offset`` entries.

    Returns:
        Parsed pagination parameters.

    Raises:
        InvalidPaginationError: If any field fails validation.
    """
    result = validate_pagination(raw)
    if not result.ok or result.params is None:
        raise InvalidPaginationError([e.to_dict() for e in result.errors])
    return result.params
