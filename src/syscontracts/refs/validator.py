# SPDX-License-Identifier: Apache-2.0
"""Cross-document reference validation.

Three entry points share the same result shape:

- ``validate_envelope_internal_refs``: one envelope on its own; finding
  evidence refs must resolve to artifacts of the same envelope.
- ``validate_cross_references``: a whole document set; everything is
  registered first so forward references resolve regardless of order.
- ``validate_document_refs``: one document against an already populated
  registry, without registering it.

Data defects are reported in the result, never raised.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Mapping

from syscontracts.schemas.models import (
    ARTIFACT_SCHEMA,
    ENVELOPE_SCHEMA,
    PLAN_SCHEMA,
    RECEIPT_SCHEMA,
    DocumentSet,
    EvidenceEnvelope,
    ProcedurePlan,
    Receipt,
    as_document_set,
    as_envelope,
    as_plan,
    as_receipt,
)

from .registry import EntityRegistry, EnvelopeRef, PlanRef, ReceiptRef
from .results import CrossValidationResult, ReferenceErrorEntry, ReferenceWarningEntry

PARENT_FIELD = "provenance.parent_envelope_id"
SOURCE_ENVELOPE_FIELD = "source_envelope_id"
PLAN_FIELD = "plan_id"


class DocumentKind(str, Enum):
    ENVELOPE = "envelope"
    PLAN = "plan"
    RECEIPT = "receipt"


def _missing(
    source_schema: str,
    source_id: str,
    target_schema: str,
    target_id: str,
    field: str,
    message: str,
) -> ReferenceErrorEntry:
    return ReferenceErrorEntry(
        type="missing_reference",
        source_schema=source_schema,
        source_id=source_id,
        target_schema=target_schema,
        target_id=target_id,
        field=field,
        message=message,
    )


def _unverified(message: str) -> ReferenceWarningEntry:
    return ReferenceWarningEntry(type="unverified_reference", message=message)


def validate_envelope_internal_refs(
    envelope: EvidenceEnvelope | Mapping[str, Any],
) -> CrossValidationResult:
    """Check that every finding cites artifacts declared by its own envelope.

    A declared parent envelope cannot be resolved here and only produces an
    ``unverified_reference`` warning.
    """
    env = as_envelope(envelope)
    errors: list[ReferenceErrorEntry] = []
    warnings: list[ReferenceWarningEntry] = []

    artifact_ids = set(env.artifact_ids())
    for index, finding in enumerate(env.findings):
        # Findings without an id are addressed by position.
        if finding.finding_id:
            key, label = finding.finding_id, f'"{finding.finding_id}"'
        else:
            key, label = str(index), f"#{index}"
        for ref in finding.evidence_refs:
            if ref in artifact_ids:
                continue
            errors.append(
                _missing(
                    ENVELOPE_SCHEMA,
                    env.envelope_id,
                    ARTIFACT_SCHEMA,
                    ref,
                    f"findings[{key}].evidence_refs",
                    f'Finding {label} references non-existent artifact "{ref}"',
                )
            )

    parent_id = env.parent_envelope_id
    if parent_id:
        warnings.append(
            _unverified(
                f'Parent envelope "{parent_id}" cannot be verified without registry'
            )
        )
    return CrossValidationResult.build(errors, warnings)


def register_documents(
    registry: EntityRegistry, documents: DocumentSet | Mapping[str, Any] | None
) -> None:
    """Register envelopes, then plans, then receipts, without checking anything."""
    docs = as_document_set(documents)
    for env in docs.envelopes:
        registry.register_envelope(
            env.envelope_id,
            EnvelopeRef(
                artifact_ids=tuple(env.artifact_ids()),
                parent_envelope_id=env.parent_envelope_id,
            ),
        )
    for plan in docs.plans:
        registry.register_plan(
            plan.plan_id,
            PlanRef(envelope_id=plan.source_envelope_id, receipt_id=plan.receipt_id),
        )
    for receipt in docs.receipts:
        registry.register_receipt(
            receipt.receipt_id,
            ReceiptRef(plan_id=receipt.plan_id, envelope_id=receipt.source_envelope_id),
        )


def _check_envelope_parent(
    registry: EntityRegistry, env: EvidenceEnvelope
) -> list[ReferenceErrorEntry]:
    errors: list[ReferenceErrorEntry] = []
    parent_id = env.parent_envelope_id
    if not parent_id:
        return errors
    if not registry.has_envelope(parent_id):
        errors.append(
            _missing(
                ENVELOPE_SCHEMA,
                env.envelope_id,
                ENVELOPE_SCHEMA,
                parent_id,
                PARENT_FIELD,
                f'Envelope "{env.envelope_id}" references non-existent parent '
                f'envelope "{parent_id}"',
            )
        )
    if parent_id == env.envelope_id:
        errors.append(
            ReferenceErrorEntry(
                type="circular_reference",
                source_schema=ENVELOPE_SCHEMA,
                source_id=env.envelope_id,
                target_schema=ENVELOPE_SCHEMA,
                target_id=parent_id,
                field=PARENT_FIELD,
                message=f'Envelope "{env.envelope_id}" references itself as parent',
            )
        )
    return errors


def _check_plan(
    registry: EntityRegistry, plan: ProcedurePlan, message: str
) -> list[ReferenceErrorEntry]:
    envelope_id = plan.source_envelope_id
    if envelope_id and not registry.has_envelope(envelope_id):
        return [
            _missing(
                PLAN_SCHEMA,
                plan.plan_id,
                ENVELOPE_SCHEMA,
                envelope_id,
                SOURCE_ENVELOPE_FIELD,
                message.format(id=plan.plan_id, target=envelope_id),
            )
        ]
    return []


def _check_receipt_plan(
    registry: EntityRegistry, receipt: Receipt, message: str
) -> list[ReferenceErrorEntry]:
    plan_id = receipt.plan_id
    if plan_id and not registry.has_plan(plan_id):
        return [
            _missing(
                RECEIPT_SCHEMA,
                receipt.receipt_id,
                PLAN_SCHEMA,
                plan_id,
                PLAN_FIELD,
                message.format(id=receipt.receipt_id, target=plan_id),
            )
        ]
    return []


def _check_receipt_envelope(
    registry: EntityRegistry, receipt: Receipt
) -> list[ReferenceErrorEntry]:
    envelope_id = receipt.source_envelope_id
    if envelope_id and not registry.has_envelope(envelope_id):
        return [
            _missing(
                RECEIPT_SCHEMA,
                receipt.receipt_id,
                ENVELOPE_SCHEMA,
                envelope_id,
                SOURCE_ENVELOPE_FIELD,
                f'Receipt "{receipt.receipt_id}" references non-existent '
                f'envelope "{envelope_id}"',
            )
        ]
    return []


def validate_cross_references(
    registry: EntityRegistry,
    documents: DocumentSet | Mapping[str, Any] | None,
) -> CrossValidationResult:
    """Register every document, then check all references across the set.

    The registry is populated as a side effect. Errors are ordered envelopes
    first (input order), then plans, then receipts.
    """
    docs = as_document_set(documents)
    register_documents(registry, docs)
    logging.getLogger(__name__).debug("Registered documents: %s", registry.stats())

    errors: list[ReferenceErrorEntry] = []
    warnings: list[ReferenceWarningEntry] = []

    for env in docs.envelopes:
        errors.extend(_check_envelope_parent(registry, env))
        internal = validate_envelope_internal_refs(env)
        errors.extend(internal.errors)
        warnings.extend(internal.warnings)

    for plan in docs.plans:
        errors.extend(
            _check_plan(
                registry, plan, 'Plan "{id}" references non-existent envelope "{target}"'
            )
        )

    for receipt in docs.receipts:
        errors.extend(
            _check_receipt_plan(
                registry,
                receipt,
                'Receipt "{id}" references non-existent plan "{target}"',
            )
        )
        errors.extend(_check_receipt_envelope(registry, receipt))

    result = CrossValidationResult.build(errors, warnings)
    logging.getLogger(__name__).debug(
        "Cross-reference pass: %d error(s), %d warning(s)",
        len(result.errors),
        len(result.warnings),
    )
    return result


def _document_envelope(
    registry: EntityRegistry, document: Mapping[str, Any] | Any
) -> CrossValidationResult:
    env = as_envelope(document)
    internal = validate_envelope_internal_refs(env)
    warnings = list(internal.warnings)
    parent_id = env.parent_envelope_id
    # Partial histories are expected here, so an unknown parent only warns.
    if parent_id and not registry.has_envelope(parent_id):
        warnings.append(_unverified(f'Parent envelope "{parent_id}" not in registry'))
    return CrossValidationResult.build(list(internal.errors), warnings)


def _document_plan(
    registry: EntityRegistry, document: Mapping[str, Any] | Any
) -> CrossValidationResult:
    plan = as_plan(document)
    errors = _check_plan(
        registry, plan, 'Plan references non-existent envelope "{target}"'
    )
    return CrossValidationResult.build(errors, [])


def _document_receipt(
    registry: EntityRegistry, document: Mapping[str, Any] | Any
) -> CrossValidationResult:
    receipt = as_receipt(document)
    errors = _check_receipt_plan(
        registry, receipt, 'Receipt references non-existent plan "{target}"'
    )
    return CrossValidationResult.build(errors, [])


_DOCUMENT_ROUTINES: dict[
    DocumentKind, Callable[[EntityRegistry, Any], CrossValidationResult]
] = {
    DocumentKind.ENVELOPE: _document_envelope,
    DocumentKind.PLAN: _document_plan,
    DocumentKind.RECEIPT: _document_receipt,
}


def validate_document_refs(
    registry: EntityRegistry,
    kind: DocumentKind | str,
    document: EvidenceEnvelope | ProcedurePlan | Receipt | Mapping[str, Any],
) -> CrossValidationResult:
    """Validate one document against an existing registry without registering it.

    ``kind`` must be one of ``envelope``, ``plan`` or ``receipt``; any other
    tag raises ``ValueError``.

    A receipt is checked against its plan reference only. Its envelope
    reference is left unchecked here, whereas ``validate_cross_references``
    reports it. An envelope whose parent is not registered yields an
    ``unverified_reference`` warning rather than an error.
    """
    return _DOCUMENT_ROUTINES[DocumentKind(kind)](registry, document)


__all__ = [
    "DocumentKind",
    "register_documents",
    "validate_cross_references",
    "validate_document_refs",
    "validate_envelope_internal_refs",
]
