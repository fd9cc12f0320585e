# SPDX-License-Identifier: Apache-2.0
"""Structural contracts for every document kind.

These models describe the full published shape of each document and are
only used to reject malformed input. The reference engine works on the
lenient projections in :mod:`syscontracts.schemas.models`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

VERSION_PATTERN = r"^\d+\.\d+\.\d+$"
PACK_ID_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"

# Tools allowed to emit evidence envelopes.
SourceTool = Literal["big-up"]
ReceiptStatus = Literal["completed", "partial", "failed", "cancelled"]
WeatherState = Literal["calm", "watch", "act"]


def _rfc3339(v: str) -> str:
    s = v.strip()
    if "T" not in s:
        raise ValueError("must contain 'T' date/time separator")
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        datetime.fromisoformat(s)
    except ValueError as exc:
        raise ValueError("invalid RFC3339 timestamp") from exc
    return v


class _Contract(BaseModel):
    model_config = ConfigDict(extra="allow")

    version: str = Field(..., pattern=VERSION_PATTERN)


class _Timestamped(_Contract):
    created_at: str = Field(..., description="RFC3339 creation time")

    @field_validator("created_at")
    @classmethod
    def _created_at_rfc3339(cls, v: str) -> str:
        return _rfc3339(v)


class SourceHost(BaseModel):
    model_config = ConfigDict(extra="allow")

    hostname: str = Field(..., min_length=1)


class EnvelopeSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    tool: SourceTool
    host: SourceHost


class ArtifactEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    artifact_id: str | None = None


class FindingEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    finding_id: str | None = None
    evidence_refs: list[str] = Field(default_factory=list)


class ProvenanceEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    parent_envelope_id: str | None = None


class EnvelopeContract(_Timestamped):
    envelope_id: str = Field(..., min_length=1)
    source: EnvelopeSource
    artifacts: list[ArtifactEntry]
    findings: list[FindingEntry] = Field(default_factory=list)
    provenance: ProvenanceEntry | None = None


class PlanStep(BaseModel):
    model_config = ConfigDict(extra="allow")

    step_id: str = Field(..., min_length=1)
    order: int = Field(..., ge=1)
    action: str = Field(..., min_length=1)
    title: str


class PlanContract(_Timestamped):
    plan_id: str = Field(..., min_length=1)
    envelope_ref: str | None = Field(
        None, validation_alias=AliasChoices("envelope_ref", "source_envelope_id")
    )
    steps: list[PlanStep] = Field(..., min_length=1)


class ReceiptContract(_Timestamped):
    receipt_id: str = Field(..., min_length=1)
    plan_ref: str | None = Field(
        None, validation_alias=AliasChoices("plan_ref", "plan_id")
    )
    envelope_ref: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "envelope_ref", "source_envelope_id", "envelope_id"
        ),
    )
    status: ReceiptStatus
    steps_executed: list[dict[str, Any]] = Field(default_factory=list)


class WeatherContract(_Contract):
    timestamp: str
    state: WeatherState
    summary: str

    @field_validator("timestamp")
    @classmethod
    def _timestamp_rfc3339(cls, v: str) -> str:
        return _rfc3339(v)


class MessageIntentContract(_Timestamped):
    intent_id: str = Field(..., min_length=1)
    intent: str = Field(..., min_length=1)


class RunBundleContract(_Timestamped):
    bundle_id: str = Field(..., min_length=1)
    envelope_ref: str | None = None
    plan_ref: str | None = None
    receipt_ref: str | None = None


class PackPlatform(BaseModel):
    model_config = ConfigDict(extra="allow")

    os: list[str] = Field(..., min_length=1)


class PackManifestContract(_Contract):
    pack_id: str = Field(..., pattern=PACK_ID_PATTERN)
    name: str = Field(..., min_length=1)
    platform: PackPlatform
    checks: list[dict[str, Any]]


class AmbientIndicator(BaseModel):
    model_config = ConfigDict(extra="allow")

    state: WeatherState


class AmbientPayloadContract(_Contract):
    timestamp: str
    indicator: AmbientIndicator

    @field_validator("timestamp")
    @classmethod
    def _timestamp_rfc3339(cls, v: str) -> str:
        return _rfc3339(v)


__all__ = [
    "AmbientPayloadContract",
    "EnvelopeContract",
    "MessageIntentContract",
    "PackManifestContract",
    "PlanContract",
    "ReceiptContract",
    "RunBundleContract",
    "WeatherContract",
]
