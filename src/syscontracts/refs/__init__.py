# SPDX-License-Identifier: Apache-2.0
"""Referential-integrity checks between contract documents."""

from .registry import ArtifactRef, EntityRegistry, EnvelopeRef, PlanRef, ReceiptRef
from .results import CrossValidationResult, ReferenceErrorEntry, ReferenceWarningEntry
from .validator import (
    DocumentKind,
    register_documents,
    validate_cross_references,
    validate_document_refs,
    validate_envelope_internal_refs,
)

__all__ = [
    "ArtifactRef",
    "CrossValidationResult",
    "DocumentKind",
    "EntityRegistry",
    "EnvelopeRef",
    "PlanRef",
    "ReceiptRef",
    "ReferenceErrorEntry",
    "ReferenceWarningEntry",
    "register_documents",
    "validate_cross_references",
    "validate_document_refs",
    "validate_envelope_internal_refs",
]
