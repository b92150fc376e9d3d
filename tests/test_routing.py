import json

import pytest

from telemetry_gate.core.constants import Destination, OutcomeKind
from telemetry_gate.validation.models import (
    Accepted,
    Batch,
    EmptyBatch,
    MissingFields,
    ParseFailure,
    Rejected,
    Schema,
    Valid,
)
from telemetry_gate.validation.routing import decide, evaluate


# ─── decide ────────────────────────────────────────────

def test_parse_failure_wins_over_outcome():
    failure = ParseFailure("boom")
    assert decide(failure, Valid()) == Rejected(failure)
    assert decide(failure) == Rejected(failure)


def test_valid_is_accepted(good_record):
    assert decide(Batch.of([good_record]), Valid()) == Accepted()


@pytest.mark.parametrize("outcome", [EmptyBatch(), MissingFields(0, ("City",))])
def test_failed_outcomes_are_rejected(outcome):
    verdict = decide(Batch(), outcome)
    assert verdict == Rejected(outcome)
    assert verdict.destination == Destination.REJECTED
    assert not verdict.accepted


def test_decide_is_total_without_outcome(good_record):
    assert decide(Batch.of([good_record])) == Rejected(EmptyBatch())


# ─── evaluate: concrete scenarios ──────────────────────

def test_scenario_single_complete_record():
    raw = b'{"VehicleID":"V1","latitude":1,"longitude":2,"City":"X","temperature":20,"speed":30}'
    verdict = evaluate(raw)
    assert verdict == Accepted()
    assert verdict.destination == Destination.STAGING


def test_scenario_second_record_missing_four_fields(good_record, as_bytes):
    raw = as_bytes([good_record, {"VehicleID": "V2", "latitude": 1}])
    assert evaluate(raw) == Rejected(
        MissingFields(1, ("longitude", "City", "temperature", "speed"))
    )


def test_scenario_empty_string():
    verdict = evaluate(b"")
    assert isinstance(verdict, Rejected)
    assert isinstance(verdict.reason, ParseFailure)


def test_scenario_empty_array():
    assert evaluate(b"[]") == Rejected(EmptyBatch())


def test_scenario_missing_only_city(good_record, as_bytes):
    record = {k: v for k, v in good_record.items() if k != "City"}
    assert evaluate(as_bytes(record)) == Rejected(MissingFields(0, ("City",)))


def test_malformed_text():
    verdict = evaluate(b"{not json")
    assert verdict.reason.kind == OutcomeKind.PARSE_FAILURE


# ─── properties ────────────────────────────────────────

@pytest.mark.parametrize("size", [1, 2, 10, 250])
def test_complete_batches_always_accepted(good_record, as_bytes, size):
    records = [{**good_record, "VehicleID": f"V{i}"} for i in range(size)]
    assert evaluate(as_bytes(records)) == Accepted()


@pytest.mark.parametrize("bad_index", [0, 1, 5])
def test_lowest_bad_index_reported(good_record, as_bytes, bad_index):
    records = [dict(good_record) for _ in range(8)]
    records[bad_index] = {"VehicleID": "broken"}
    for later in range(bad_index + 1, 8):
        records[later] = {}
    verdict = evaluate(as_bytes(records))
    assert verdict.reason.record_index == bad_index


@pytest.mark.parametrize("raw", [
    b"",
    b"[]",
    b"{not json",
    b'{"VehicleID":"V1"}',
    b'{"VehicleID":"V1","latitude":1,"longitude":2,"City":"X","temperature":20,"speed":30}',
])
def test_evaluate_is_idempotent(raw):
    assert evaluate(raw) == evaluate(raw)
    assert evaluate(raw).to_dict() == evaluate(raw).to_dict()


def test_evaluate_uses_injected_schema(good_record, as_bytes):
    legacy_record = {
        "VehicleID": "V1",
        "latitiude": 1,
        "longitude": 2,
        "City": "X",
        "temeprature": 20,
        "speed": 30,
    }
    assert evaluate(as_bytes(legacy_record), Schema.legacy()) == Accepted()
    assert isinstance(evaluate(as_bytes(good_record), Schema.legacy()), Rejected)


def test_verdict_dicts_are_json_safe(good_record, as_bytes):
    rejected = evaluate(as_bytes([good_record, {"VehicleID": "V2"}]))
    payload = json.loads(json.dumps(rejected.to_dict()))
    assert payload["verdict"] == "REJECTED"
    assert payload["destination"] == "rejected"
    assert payload["reason"]["kind"] == "MISSING_FIELDS"
    assert payload["reason"]["record_index"] == 1
    assert payload["detail"].startswith("Record[1] missing fields: latitude")

    accepted = json.loads(json.dumps(evaluate(as_bytes(good_record)).to_dict()))
    assert accepted == {"verdict": "ACCEPTED", "destination": "staging"}


def test_nan_speed_is_rejected():
    raw = b'{"VehicleID":"V1","latitude":1,"longitude":2,"City":"X","temperature":20,"speed":NaN}'
    verdict = evaluate(raw)
    assert verdict.reason.kind == OutcomeKind.PARSE_FAILURE
