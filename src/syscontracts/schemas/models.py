# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

ENVELOPE_SCHEMA = "evidence-envelope"
PLAN_SCHEMA = "procedure-plan"
RECEIPT_SCHEMA = "receipt"
ARTIFACT_SCHEMA = "artifact"


class _Document(BaseModel):
    # Contract documents carry many fields the reference engine never reads.
    model_config = ConfigDict(extra="allow")


class Artifact(_Document):
    artifact_id: str | None = Field(
        None, description="Identifier other documents use to cite this artifact"
    )


class Finding(_Document):
    finding_id: str | None = None
    evidence_refs: list[str] = Field(
        default_factory=list,
        description="Artifact ids of the owning envelope supporting this finding",
    )

    @field_validator("evidence_refs", mode="before")
    @classmethod
    def _refs_default(cls, v: Any) -> Any:
        return [] if v is None else v


class Provenance(_Document):
    parent_envelope_id: str | None = None


class EvidenceEnvelope(_Document):
    envelope_id: str
    artifacts: list[Artifact] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    provenance: Provenance | None = None

    @field_validator("artifacts", "findings", mode="before")
    @classmethod
    def _list_default(cls, v: Any) -> Any:
        return [] if v is None else v

    def artifact_ids(self) -> list[str]:
        """Declared artifact ids in order, without empty ids."""
        return [a.artifact_id for a in self.artifacts if a.artifact_id]

    @property
    def parent_envelope_id(self) -> str | None:
        if self.provenance is None:
            return None
        return self.provenance.parent_envelope_id or None


class ProcedurePlan(_Document):
    plan_id: str
    source_envelope_id: str | None = Field(
        None, validation_alias=AliasChoices("source_envelope_id", "envelope_ref")
    )
    receipt_id: str | None = None


class Receipt(_Document):
    receipt_id: str
    plan_id: str | None = Field(
        None, validation_alias=AliasChoices("plan_id", "plan_ref")
    )
    source_envelope_id: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "source_envelope_id", "envelope_id", "envelope_ref"
        ),
    )


class DocumentSet(BaseModel):
    """Grouped documents checked together in one validation pass."""

    envelopes: list[EvidenceEnvelope] = Field(default_factory=list)
    plans: list[ProcedurePlan] = Field(default_factory=list)
    receipts: list[Receipt] = Field(default_factory=list)

    @field_validator("envelopes", "plans", "receipts", mode="before")
    @classmethod
    def _absent_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def extend(self, other: DocumentSet) -> None:
        self.envelopes.extend(other.envelopes)
        self.plans.extend(other.plans)
        self.receipts.extend(other.receipts)

    def __len__(self) -> int:
        return len(self.envelopes) + len(self.plans) + len(self.receipts)


def as_envelope(doc: EvidenceEnvelope | dict[str, Any]) -> EvidenceEnvelope:
    """Coerce a raw mapping to an envelope; models pass through untouched."""
    if isinstance(doc, EvidenceEnvelope):
        return doc
    return EvidenceEnvelope.model_validate(doc)


def as_plan(doc: ProcedurePlan | dict[str, Any]) -> ProcedurePlan:
    if isinstance(doc, ProcedurePlan):
        return doc
    return ProcedurePlan.model_validate(doc)


def as_receipt(doc: Receipt | dict[str, Any]) -> Receipt:
    if isinstance(doc, Receipt):
        return doc
    return Receipt.model_validate(doc)


def as_document_set(docs: DocumentSet | dict[str, Any] | None) -> DocumentSet:
    if docs is None:
        return DocumentSet()
    if isinstance(docs, DocumentSet):
        return docs
    return DocumentSet.model_validate(docs)


__all__ = [
    "ARTIFACT_SCHEMA",
    "ENVELOPE_SCHEMA",
    "PLAN_SCHEMA",
    "RECEIPT_SCHEMA",
    "Artifact",
    "DocumentSet",
    "EvidenceEnvelope",
    "Finding",
    "ProcedurePlan",
    "Provenance",
    "Receipt",
    "ValidationError",
    "as_document_set",
    "as_envelope",
    "as_plan",
    "as_receipt",
]
