import pytest

from telemetry_gate.core.constants import LEGACY_REQUIRED_FIELDS, REQUIRED_FIELDS
from telemetry_gate.validation.models import Batch, EmptyBatch, MissingFields, Schema, Valid
from telemetry_gate.validation.schema_validator import validate


@pytest.fixture
def schema() -> Schema:
    return Schema.default()


def test_all_records_conform(good_record, schema):
    batch = Batch.of([good_record, {**good_record, "VehicleID": "V2"}])
    assert validate(batch, schema) == Valid()


def test_empty_batch(schema):
    assert validate(Batch(), schema) == EmptyBatch()


def test_first_bad_record_reported(good_record, schema):
    batch = Batch.of([good_record, {"VehicleID": "V2", "latitude": 1}])
    assert validate(batch, schema) == MissingFields(
        record_index=1,
        missing_fields=("longitude", "City", "temperature", "speed"),
    )


def test_stops_at_first_bad_record(good_record, schema):
    batch = Batch.of([
        good_record,
        {k: v for k, v in good_record.items() if k != "speed"},
        {},
    ])
    outcome = validate(batch, schema)
    assert outcome == MissingFields(1, ("speed",))


def test_later_records_do_not_change_outcome(good_record, schema):
    bad = {k: v for k, v in good_record.items() if k != "City"}
    first = validate(Batch.of([good_record, bad, good_record]), schema)
    second = validate(Batch.of([good_record, bad, {}, "junk"]), schema)
    assert first == second == MissingFields(1, ("City",))


def test_missing_fields_follow_schema_order(schema):
    outcome = validate(Batch.of([{"speed": 1, "City": "X"}]), schema)
    assert outcome.missing_fields == ("VehicleID", "latitude", "longitude", "temperature")


@pytest.mark.parametrize("value", [None, "", 0, [], {}, "not-a-number"])
def test_presence_only(good_record, schema, value):
    record = {**good_record, "temperature": value}
    assert validate(Batch.of([record]), schema) == Valid()


def test_extra_fields_are_fine(good_record, schema):
    record = {**good_record, "fuel": 0.4, "odometer": 12345}
    assert validate(Batch.of([record]), schema) == Valid()


@pytest.mark.parametrize("record", [1, "text", None, ["VehicleID"]])
def test_non_object_record_is_missing_everything(schema, record):
    outcome = validate(Batch.of([record]), schema)
    assert outcome == MissingFields(0, REQUIRED_FIELDS)


def test_legacy_schema_spellings(good_record):
    legacy = Schema.legacy()
    assert legacy.required_fields == LEGACY_REQUIRED_FIELDS
    outcome = validate(Batch.of([good_record]), legacy)
    assert outcome == MissingFields(0, ("latitiude", "temeprature"))


def test_custom_schema_injection():
    schema = Schema(("a", "b", "a"))
    assert schema.required_fields == ("a", "b")
    assert validate(Batch.of([{"a": 1, "b": 2}]), schema) == Valid()
    assert validate(Batch.of([{"b": 2}]), schema) == MissingFields(0, ("a",))


def test_schema_from_settings_flag():
    assert Schema.from_settings(False) == Schema.default()
    assert Schema.from_settings(True) == Schema.legacy()
