from unittest.mock import patch

import pytest

from telemetry_gate.pipeline.errors import StorageError
from telemetry_gate.tasks import gate_tasks
from telemetry_gate.tasks.gate_tasks import GateRunFailed, run_gate, validate_document
from telemetry_gate.validation.models import Schema


class BrokenStore:
    bucket = "input"

    def get_bytes(self, key):
        raise StorageError("minio unreachable")

    def put_bytes(self, key, data, content_type="application/json"):
        raise StorageError("minio unreachable")


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    async def _sleep(seconds):
        return None

    monkeypatch.setattr("telemetry_gate.pipeline.engine.asyncio.sleep", _sleep)


def test_run_gate_accepts(local_store, layout, land, good_record, as_bytes):
    land("v.json", as_bytes(good_record))

    summary = run_gate("v.json", store=local_store, layout=layout, schema=Schema.default())

    assert summary["document_name"] == "v.json"
    assert summary["status"] == "COMPLETED"
    assert summary["verdict"]["verdict"] == "ACCEPTED"
    assert summary["destination_key"] == "staging/v.json"


def test_run_gate_rejects(local_store, layout, land):
    land("e.json", b"")

    summary = run_gate("e.json", store=local_store, layout=layout, schema=Schema.default())

    assert summary["verdict"]["verdict"] == "REJECTED"
    assert summary["verdict"]["reason"]["kind"] == "PARSE_FAILURE"
    assert summary["destination_key"] == "rejected/e.json"
    assert local_store.get_bytes("rejected/e.json") == b""


def test_run_gate_same_result_twice(local_store, layout, land):
    land("dup.json", b"[]")
    first = run_gate("dup.json", store=local_store, layout=layout)
    second = run_gate("dup.json", store=local_store, layout=layout)
    assert first["verdict"] == second["verdict"]
    assert first["destination_key"] == second["destination_key"]


def test_run_gate_missing_document_not_retryable(local_store, layout):
    with pytest.raises(GateRunFailed) as exc_info:
        run_gate("ghost.json", store=local_store, layout=layout)
    assert exc_info.value.retryable is False


def test_run_gate_storage_outage_retryable(layout):
    with pytest.raises(GateRunFailed) as exc_info:
        run_gate("v.json", store=BrokenStore(), layout=layout)
    assert exc_info.value.retryable is True
    assert exc_info.value.execution_id


def test_task_returns_summary():
    summary = {
        "execution_id": "e-1",
        "document_name": "v.json",
        "status": "COMPLETED",
        "verdict": {"verdict": "ACCEPTED", "destination": "staging"},
        "destination_key": "staging/v.json",
        "duration_ms": 3,
    }
    with patch.object(gate_tasks, "run_gate", return_value=summary) as run:
        result = validate_document.apply(args=["v.json"])

    assert result.successful()
    assert result.get() == summary
    run.assert_called_once_with("v.json")


def test_task_does_not_retry_missing_document():
    failure = GateRunFailed("Document not found", retryable=False)
    with patch.object(gate_tasks, "run_gate", side_effect=failure) as run:
        result = validate_document.apply(args=["ghost.json"])

    assert result.failed()
    assert run.call_count == 1


def test_task_retries_storage_faults():
    failure = GateRunFailed("minio unreachable", retryable=True)
    with patch.object(gate_tasks, "run_gate", side_effect=failure) as run:
        result = validate_document.apply(args=["v.json"])

    assert result.failed()
    assert run.call_count == validate_document.max_retries + 1
