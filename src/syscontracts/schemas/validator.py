# SPDX-License-Identifier: Apache-2.0
"""Structural contract validation.

Checks that a raw document has its published shape (required fields,
allowed states, identifier formats) before any cross-document checking
happens. Defects are returned, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from .contracts import (
    AmbientPayloadContract,
    EnvelopeContract,
    MessageIntentContract,
    PackManifestContract,
    PlanContract,
    ReceiptContract,
    RunBundleContract,
    WeatherContract,
)

SCHEMA_MODELS: dict[str, type[BaseModel]] = {
    "envelope": EnvelopeContract,
    "plan": PlanContract,
    "receipt": ReceiptContract,
    "weather": WeatherContract,
    "intent": MessageIntentContract,
    "run_bundle": RunBundleContract,
    "pack": PackManifestContract,
    "ambient": AmbientPayloadContract,
}


@dataclass
class SchemaError:
    path: str
    message: str
    keyword: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message, "keyword": self.keyword}


@dataclass
class ValidationResult:
    valid: bool
    errors: list[SchemaError] = field(default_factory=list)


def _pointer(loc: tuple[Any, ...]) -> str:
    if not loc:
        return "/"
    return "/" + "/".join(str(part) for part in loc)


def _from_validation_error(exc: ValidationError) -> list[SchemaError]:
    out: list[SchemaError] = []
    for err in exc.errors():
        out.append(
            SchemaError(
                path=_pointer(tuple(err.get("loc") or ())),
                message=str(err.get("msg") or "Unknown error"),
                keyword=str(err.get("type") or "unknown"),
            )
        )
    return out


class ContractValidator:
    """Validate raw documents against the contract models by kind name."""

    def __init__(self, models: dict[str, type[BaseModel]] | None = None) -> None:
        self._models = dict(models or SCHEMA_MODELS)

    @property
    def kinds(self) -> list[str]:
        return sorted(self._models)

    def validate(self, kind: str, data: Any) -> ValidationResult:
        """Validate ``data`` against the model registered for ``kind``.

        Raises ``KeyError`` for an unknown kind; bad data only ever yields
        an invalid result.
        """
        model = self._models[kind]
        if not isinstance(data, dict):
            return ValidationResult(
                valid=False,
                errors=[
                    SchemaError(
                        path="/",
                        message=f"expected an object, got {type(data).__name__}",
                        keyword="type",
                    )
                ],
            )
        try:
            model.model_validate(data)
        except ValidationError as exc:
            return ValidationResult(valid=False, errors=_from_validation_error(exc))
        return ValidationResult(valid=True)

    def validate_envelope(self, data: Any) -> ValidationResult:
        return self.validate("envelope", data)

    def validate_plan(self, data: Any) -> ValidationResult:
        return self.validate("plan", data)

    def validate_receipt(self, data: Any) -> ValidationResult:
        return self.validate("receipt", data)

    def validate_weather(self, data: Any) -> ValidationResult:
        return self.validate("weather", data)

    def validate_intent(self, data: Any) -> ValidationResult:
        return self.validate("intent", data)

    def validate_run_bundle(self, data: Any) -> ValidationResult:
        return self.validate("run_bundle", data)

    def validate_pack(self, data: Any) -> ValidationResult:
        return self.validate("pack", data)

    def validate_ambient(self, data: Any) -> ValidationResult:
        return self.validate("ambient", data)
