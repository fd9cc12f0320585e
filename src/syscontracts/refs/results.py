# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# invalid_reference and stale_reference are reserved; nothing emits them yet.
ErrorType = Literal["missing_reference", "invalid_reference", "circular_reference"]
WarningType = Literal["unverified_reference", "stale_reference"]


class ReferenceErrorEntry(BaseModel):
    type: ErrorType
    source_schema: str
    source_id: str
    target_schema: str
    target_id: str
    field: str = Field(..., description="Path of the offending reference field")
    message: str


class ReferenceWarningEntry(BaseModel):
    type: WarningType
    message: str


class CrossValidationResult(BaseModel):
    valid: bool = True
    errors: list[ReferenceErrorEntry] = Field(default_factory=list)
    warnings: list[ReferenceWarningEntry] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        errors: list[ReferenceErrorEntry],
        warnings: list[ReferenceWarningEntry],
    ) -> CrossValidationResult:
        """Result whose validity is derived from ``errors`` alone."""
        return cls(valid=not errors, errors=errors, warnings=warnings)

    def merge(self, other: CrossValidationResult) -> CrossValidationResult:
        return CrossValidationResult.build(
            [*self.errors, *other.errors], [*self.warnings, *other.warnings]
        )
