"""Base schema shared by transim settings, models and log entries."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Strict pydantic base for every transim schema.

    Unknown keys are dropped so settings files may carry keys of other
    backends. Raw TOML tables are validated with ``strict=False``.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        strict=True,
    )

    def updated(self, **changes: object) -> Self:
        """Return a copy with the given fields replaced and validated.

        Args:
            **changes: Field values to assign on the copy.

        Returns:
            Self: Updated copy; the original is left untouched.
        """
        copy = self.model_copy()
        for name, value in changes.items():
            setattr(copy, name, value)
        return copy
