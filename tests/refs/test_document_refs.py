# SPDX-License-Identifier: Apache-2.0
import pytest

from syscontracts.refs import (
    DocumentKind,
    EntityRegistry,
    register_documents,
    validate_document_refs,
)


@pytest.fixture
def registry():
    reg = EntityRegistry()
    register_documents(
        reg,
        {
            "envelopes": [{"envelope_id": "E1", "artifacts": [{"artifact_id": "A1"}]}],
            "plans": [{"plan_id": "P1", "source_envelope_id": "E1"}],
        },
    )
    return reg


def test_envelope_with_unknown_parent_warns(registry):
    doc = {
        "envelope_id": "E2",
        "artifacts": [{"artifact_id": "A2"}],
        "findings": [{"finding_id": "F1", "evidence_refs": ["A2"]}],
        "provenance": {"parent_envelope_id": "E0"},
    }
    res = validate_document_refs(registry, "envelope", doc)
    assert res.valid is True
    assert res.errors == []
    assert [w.type for w in res.warnings] == [
        "unverified_reference",
        "unverified_reference",
    ]
    assert "not in registry" in res.warnings[1].message


def test_envelope_with_known_parent(registry):
    doc = {"envelope_id": "E2", "provenance": {"parent_envelope_id": "E1"}}
    res = validate_document_refs(registry, DocumentKind.ENVELOPE, doc)
    assert res.valid is True
    # Only the internal pass warning remains
    assert len(res.warnings) == 1


def test_envelope_internal_errors_still_reported(registry):
    doc = {
        "envelope_id": "E2",
        "findings": [{"finding_id": "F1", "evidence_refs": ["A1"]}],
    }
    res = validate_document_refs(registry, "envelope", doc)
    # A1 belongs to E1, not E2
    assert res.valid is False
    assert res.errors[0].target_id == "A1"


def test_document_is_not_registered(registry):
    validate_document_refs(registry, "envelope", {"envelope_id": "E5"})
    assert not registry.has_envelope("E5")


def test_plan_with_unknown_envelope(registry):
    res = validate_document_refs(
        registry, "plan", {"plan_id": "P2", "source_envelope_id": "E9"}
    )
    assert res.valid is False
    err = res.errors[0]
    assert err.source_schema == "procedure-plan"
    assert err.source_id == "P2"
    assert err.target_id == "E9"


def test_receipt_checks_plan_reference(registry):
    res = validate_document_refs(
        registry, "receipt", {"receipt_id": "R1", "plan_id": "P9"}
    )
    assert res.valid is False
    assert res.errors[0].target_schema == "procedure-plan"
    assert res.errors[0].field == "plan_id"


def test_receipt_envelope_reference_not_checked(registry):
    res = validate_document_refs(
        registry,
        "receipt",
        {"receipt_id": "R1", "plan_id": "P1", "source_envelope_id": "E404"},
    )
    assert res.valid is True
    assert res.errors == []


def test_unknown_kind_raises(registry):
    with pytest.raises(ValueError):
        validate_document_refs(registry, "bundle", {})


def test_receipt_contract_keys_check_plan_only(registry):
    res = validate_document_refs(
        registry,
        DocumentKind.RECEIPT,
        {"receipt_id": "R1", "plan_ref": "P404", "envelope_ref": "E404"},
    )
    assert [(e.field, e.target_id) for e in res.errors] == [("plan_id", "P404")]
    assert "plan reference only" in validate_document_refs.__doc__
