# SPDX-License-Identifier: Apache-2.0
import pytest

from syscontracts.schemas import ContractValidator

ENVELOPE_ID = "550e8400-e29b-41d4-a716-446655440000"
PLAN_ID = "550e8400-e29b-41d4-a716-446655440001"
RECEIPT_ID = "550e8400-e29b-41d4-a716-446655440002"
CREATED = "2026-01-02T20:00:00Z"


def _envelope(**overrides):
    data = {
        "version": "1.0.0",
        "envelope_id": ENVELOPE_ID,
        "created_at": CREATED,
        "source": {"tool": "big-up", "host": {"hostname": "test-machine"}},
        "artifacts": [],
    }
    data.update(overrides)
    return data


def _plan(**overrides):
    data = {
        "version": "1.0.0",
        "plan_id": PLAN_ID,
        "created_at": CREATED,
        "envelope_ref": ENVELOPE_ID,
        "steps": [
            {
                "step_id": "step-1",
                "order": 1,
                "action": "clear_temp",
                "title": "Clear temporary files",
            }
        ],
    }
    data.update(overrides)
    return data


def _receipt(**overrides):
    data = {
        "version": "1.0.0",
        "receipt_id": RECEIPT_ID,
        "created_at": CREATED,
        "plan_ref": PLAN_ID,
        "envelope_ref": ENVELOPE_ID,
        "status": "completed",
        "steps_executed": [],
    }
    data.update(overrides)
    return data


@pytest.fixture
def validator():
    return ContractValidator()


def test_all_kinds_registered(validator):
    assert validator.kinds == [
        "ambient",
        "envelope",
        "intent",
        "pack",
        "plan",
        "receipt",
        "run_bundle",
        "weather",
    ]


def test_valid_envelope(validator):
    res = validator.validate_envelope(_envelope())
    assert res.valid is True, res.errors
    assert res.errors == []


def test_envelope_without_required_fields(validator):
    res = validator.validate_envelope({"version": "1.0.0"})
    assert res.valid is False
    paths = {e.path for e in res.errors}
    assert {"/envelope_id", "/created_at", "/source", "/artifacts"} <= paths
    assert all(e.keyword == "missing" for e in res.errors)


def test_envelope_rejects_unknown_tool(validator):
    source = {"tool": "invalid-tool", "host": {"hostname": "test"}}
    res = validator.validate_envelope(_envelope(source=source))
    assert res.valid is False
    assert [e.path for e in res.errors] == ["/source/tool"]
    assert res.errors[0].keyword == "literal_error"


def test_envelope_rejects_bad_timestamp(validator):
    res = validator.validate_envelope(_envelope(created_at="2026-01-02"))
    assert res.valid is False
    assert res.errors[0].path == "/created_at"


def test_nested_paths_use_indexes(validator):
    res = validator.validate_envelope(
        _envelope(findings=[{"finding_id": "F1", "evidence_refs": 3}])
    )
    assert res.valid is False
    assert res.errors[0].path == "/findings/0/evidence_refs"


def test_valid_plan(validator):
    res = validator.validate_plan(_plan())
    assert res.valid is True, res.errors


def test_plan_requires_a_step(validator):
    res = validator.validate_plan(_plan(steps=[]))
    assert res.valid is False
    assert res.errors[0].path == "/steps"
    assert res.errors[0].keyword == "too_short"


def test_valid_receipt(validator):
    res = validator.validate_receipt(_receipt())
    assert res.valid is True, res.errors


def test_receipt_rejects_unknown_status(validator):
    res = validator.validate_receipt(_receipt(status="invalid-status"))
    assert res.valid is False
    assert [e.path for e in res.errors] == ["/status"]


def test_valid_weather(validator):
    res = validator.validate_weather(
        {
            "version": "1.0.0",
            "timestamp": CREATED,
            "state": "calm",
            "summary": "All systems operating normally",
        }
    )
    assert res.valid is True, res.errors


@pytest.mark.parametrize("state", ["calm", "watch", "act"])
def test_weather_states(validator, state):
    doc = {"version": "1.0.0", "timestamp": CREATED, "state": state, "summary": "s"}
    assert validator.validate_weather(doc).valid is True


def test_weather_rejects_other_states(validator):
    res = validator.validate_weather(
        {
            "version": "1.0.0",
            "timestamp": CREATED,
            "state": "critical",
            "summary": "Invalid state",
        }
    )
    assert res.valid is False
    assert res.errors[0].path == "/state"


def test_valid_pack_manifest(validator):
    res = validator.validate_pack(
        {
            "version": "1.0.0",
            "pack_id": "windows-tech-support",
            "name": "Windows Tech Support Pack",
            "platform": {"os": ["windows"]},
            "checks": [],
        }
    )
    assert res.valid is True, res.errors


def test_pack_rejects_bad_id(validator):
    res = validator.validate_pack(
        {
            "version": "1.0.0",
            "pack_id": "Invalid Pack ID",
            "name": "Test Pack",
            "platform": {"os": ["windows"]},
            "checks": [],
        }
    )
    assert res.valid is False
    assert res.errors[0].path == "/pack_id"
    assert res.errors[0].keyword == "string_pattern_mismatch"


def test_valid_ambient_payload(validator):
    res = validator.validate_ambient(
        {"version": "1.0.0", "timestamp": CREATED, "indicator": {"state": "calm"}}
    )
    assert res.valid is True, res.errors


def test_ambient_rejects_unknown_state(validator):
    res = validator.validate_ambient(
        {"version": "1.0.0", "timestamp": CREATED, "indicator": {"state": "loud"}}
    )
    assert res.valid is False
    assert res.errors[0].path == "/indicator/state"


def test_intent_and_run_bundle(validator):
    intent = {
        "version": "1.0.0",
        "intent_id": "I1",
        "created_at": CREATED,
        "intent": "clean_disk",
    }
    assert validator.validate_intent(intent).valid is True
    assert validator.validate_intent({"version": "1.0.0"}).valid is False
    bundle = {
        "version": "1.0.0",
        "bundle_id": "B1",
        "created_at": CREATED,
        "envelope_ref": ENVELOPE_ID,
    }
    assert validator.validate_run_bundle(bundle).valid is True
    assert validator.validate_run_bundle({**bundle, "version": "one"}).valid is False


def test_non_mapping_document(validator):
    res = validator.validate_receipt(["not", "a", "receipt"])
    assert res.valid is False
    assert res.errors[0].path == "/"
    assert res.errors[0].keyword == "type"


def test_unknown_kind_raises(validator):
    with pytest.raises(KeyError):
        validator.validate("forecast", {})
