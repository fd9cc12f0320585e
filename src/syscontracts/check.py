# SPDX-License-Identifier: Apache-2.0
"""Structural pass followed by the reference pass over a raw bundle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from syscontracts.loader import BUNDLE_KEYS
from syscontracts.refs import (
    CrossValidationResult,
    EntityRegistry,
    validate_cross_references,
)
from syscontracts.schemas import ContractValidator, DocumentSet, SchemaError

_ID_KEYS = {"envelope": "envelope_id", "plan": "plan_id", "receipt": "receipt_id"}


@dataclass
class StructuralIssue:
    kind: str
    index: int
    document_id: str | None
    errors: list[SchemaError]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "index": self.index,
            "document_id": self.document_id,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass
class CheckReport:
    structural: list[StructuralIssue] = field(default_factory=list)
    references: CrossValidationResult | None = None

    @property
    def ok(self) -> bool:
        if self.structural:
            return False
        return self.references is None or self.references.valid

    @property
    def warning_count(self) -> int:
        return len(self.references.warnings) if self.references else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "structural": [s.to_dict() for s in self.structural],
            "references": (
                self.references.model_dump() if self.references is not None else None
            ),
        }


def _document_id(kind: str, doc: Any) -> str | None:
    if isinstance(doc, dict):
        value = doc.get(_ID_KEYS[kind])
        return value if isinstance(value, str) else None
    return None


def structural_issues(
    bundle: Mapping[str, list[Any]],
    validator: ContractValidator | None = None,
) -> list[StructuralIssue]:
    """Validate the shape of every envelope, plan and receipt in a bundle."""
    validator = validator or ContractValidator()
    issues: list[StructuralIssue] = []
    for kind, key in BUNDLE_KEYS.items():
        for index, doc in enumerate(bundle.get(key) or []):
            res = validator.validate(kind, doc)
            if not res.valid:
                issues.append(
                    StructuralIssue(kind, index, _document_id(kind, doc), res.errors)
                )
    return issues


def run_checks(
    bundle: Mapping[str, list[Any]],
    registry: EntityRegistry | None = None,
    validator: ContractValidator | None = None,
) -> CheckReport:
    """Validate document shapes, then cross-document references.

    References are only checked once every document is structurally valid.
    A provided registry is cleared first so earlier passes cannot leak into
    this one.
    """
    report = CheckReport(structural=structural_issues(bundle, validator))
    if report.structural:
        logging.getLogger(__name__).debug(
            "Skipping reference pass: %d structurally invalid document(s)",
            len(report.structural),
        )
        return report

    if registry is None:
        registry = EntityRegistry()
    else:
        registry.clear()
    docs = DocumentSet.model_validate(
        {key: list(bundle.get(key) or []) for key in BUNDLE_KEYS.values()}
    )
    report.references = validate_cross_references(registry, docs)
    return report
