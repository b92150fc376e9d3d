import pytest

from telemetry_gate.validation.models import Batch, ParseFailure
from telemetry_gate.validation.payload_parser import normalize, parse


def test_single_object_is_one_element_batch(good_record, as_bytes):
    result = parse(as_bytes(good_record))
    assert isinstance(result, Batch)
    assert len(result) == 1
    assert result.records[0] == good_record


def test_array_keeps_order(good_record, as_bytes):
    records = [{**good_record, "VehicleID": f"V{i}"} for i in range(3)]
    result = parse(as_bytes(records))
    assert [r["VehicleID"] for r in result] == ["V0", "V1", "V2"]


def test_empty_array_parses_to_empty_batch():
    result = parse(b"[]")
    assert isinstance(result, Batch)
    assert result.is_empty


def test_empty_input_is_parse_failure():
    result = parse(b"")
    assert isinstance(result, ParseFailure)
    assert "Expecting value" in result.message


def test_malformed_json_is_parse_failure():
    result = parse(b"{not json")
    assert isinstance(result, ParseFailure)
    assert result.message


def test_non_utf8_is_parse_failure():
    result = parse(b"\xff\xfe{")
    assert isinstance(result, ParseFailure)
    assert "UTF-8" in result.message


def test_surrounding_whitespace_is_trimmed(good_record, as_bytes):
    result = parse(b"\n\n  " + as_bytes(good_record) + b"  \r\n")
    assert isinstance(result, Batch)
    assert len(result) == 1


def test_newlines_inside_strings_are_collapsed():
    # A raw newline inside a JSON string is invalid for a strict parser.
    raw = b'{"VehicleID": "V1", "City": "New\nYork"}'
    result = parse(raw)
    assert isinstance(result, Batch)
    assert result.records[0]["City"] == "New York"


def test_pretty_printed_array():
    raw = b'[\n  {\n    "VehicleID": "V1"\n  },\n  {\n    "VehicleID": "V2"\n  }\n]\n'
    result = parse(raw)
    assert [r["VehicleID"] for r in result] == ["V1", "V2"]


def test_normalize():
    assert normalize("  a\nb\n\nc \n") == "a b  c"


def test_deeply_nested_payload_is_parse_failure():
    raw = b"[" * 100000 + b"]" * 100000
    result = parse(raw)
    assert isinstance(result, ParseFailure)
    assert "nested too deeply" in result.message


@pytest.mark.parametrize("literal", [b"NaN", b"Infinity", b"-Infinity"])
def test_non_json_number_literals_are_parse_failures(good_record, as_bytes, literal):
    raw = as_bytes(good_record).replace(b'"speed": 30', b'"speed": ' + literal)
    assert literal in raw
    result = parse(raw)
    assert isinstance(result, ParseFailure)
    assert "Invalid JSON literal" in result.message


def test_utf8_bom_is_trimmed(good_record, as_bytes):
    result = parse(b"\xef\xbb\xbf" + as_bytes(good_record))
    assert isinstance(result, Batch)
    assert result.records[0] == good_record


def test_bom_inside_string_is_kept():
    result = parse('{"City": "\ufeffX"}'.encode("utf-8"))
    assert result.records[0]["City"] == "\ufeffX"
