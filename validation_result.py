"""Shared result model for the NZ validators."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValidationResult(BaseModel):
    """Outcome of a single validation call.

    ``error`` is set exactly when ``is_valid`` is false.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    error: Optional[str] = None

    @model_validator(mode="after")
    def _error_matches_validity(self) -> "ValidationResult":
        if self.is_valid and self.error is not None:
            raise ValueError("A valid result must not carry an error.")
        if not self.is_valid and not self.error:
            raise ValueError("An invalid result requires an error message.")
        return self

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)

    def to_payload(self) -> dict[str, Any]:
        """Return the wire shape: ``{"isValid": ..., "error"?: ...}``."""

        return self.model_dump(by_alias=True, exclude_none=True)
