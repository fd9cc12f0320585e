# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class EnvelopeRef:
    """Reference-relevant projection of an evidence envelope."""

    artifact_ids: tuple[str, ...] = field(default_factory=tuple)
    parent_envelope_id: str | None = None


@dataclass(slots=True, frozen=True)
class PlanRef:
    envelope_id: str | None = None
    receipt_id: str | None = None


@dataclass(slots=True, frozen=True)
class ReceiptRef:
    plan_id: str | None = None
    envelope_id: str | None = None


@dataclass(slots=True, frozen=True)
class ArtifactRef:
    envelope_id: str


class EntityRegistry:
    """Index of the documents known to one validation pass.

    An identifier is known only when a document of the matching kind was
    registered; artifact entries are derived from envelope registrations.
    Registering an id again replaces the previous entry.
    """

    def __init__(self) -> None:
        self._envelopes: dict[str, EnvelopeRef] = {}
        self._plans: dict[str, PlanRef] = {}
        self._receipts: dict[str, ReceiptRef] = {}
        self._artifacts: dict[str, ArtifactRef] = {}

    def register_envelope(self, envelope_id: str, envelope: EnvelopeRef) -> None:
        previous = self._envelopes.get(envelope_id)
        if previous is not None:
            for artifact_id in previous.artifact_ids:
                owner = self._artifacts.get(artifact_id)
                if owner is not None and owner.envelope_id == envelope_id:
                    del self._artifacts[artifact_id]
        self._envelopes[envelope_id] = envelope
        for artifact_id in envelope.artifact_ids:
            self._artifacts[artifact_id] = ArtifactRef(envelope_id=envelope_id)

    def register_plan(self, plan_id: str, plan: PlanRef) -> None:
        self._plans[plan_id] = plan

    def register_receipt(self, receipt_id: str, receipt: ReceiptRef) -> None:
        self._receipts[receipt_id] = receipt

    def has_envelope(self, envelope_id: str) -> bool:
        return envelope_id in self._envelopes

    def has_plan(self, plan_id: str) -> bool:
        return plan_id in self._plans

    def has_receipt(self, receipt_id: str) -> bool:
        return receipt_id in self._receipts

    def has_artifact(self, artifact_id: str) -> bool:
        return artifact_id in self._artifacts

    def get_envelope(self, envelope_id: str) -> EnvelopeRef | None:
        return self._envelopes.get(envelope_id)

    def clear(self) -> None:
        self._envelopes.clear()
        self._plans.clear()
        self._receipts.clear()
        self._artifacts.clear()

    def stats(self) -> dict[str, int]:
        """Entry counts per index, for logging."""
        return {
            "envelopes": len(self._envelopes),
            "plans": len(self._plans),
            "receipts": len(self._receipts),
            "artifacts": len(self._artifacts),
        }

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        s = self.stats()
        return (
            f"<EntityRegistry envelopes={s['envelopes']} plans={s['plans']} "
            f"receipts={s['receipts']} artifacts={s['artifacts']}>"
        )
