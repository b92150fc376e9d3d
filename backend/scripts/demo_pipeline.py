#!/usr/bin/env python3
"""
Demo script — run the gate pipeline locally without MinIO/Celery.

Drops a handful of sample documents into a temporary landing area,
runs each through the pipeline against a LocalObjectStore, and prints
where each one ended up.

Usage:
    cd backend
    python -m scripts.demo_pipeline
"""

import asyncio
import json
import os
import sys
import tempfile

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

GOOD_RECORD = {
    "VehicleID": "V1",
    "latitude": 12.97,
    "longitude": 77.59,
    "City": "Bengaluru",
    "temperature": 31,
    "speed": 42,
}

SAMPLES: dict[str, bytes] = {
    "single.json": json.dumps(GOOD_RECORD).encode(),
    "pretty-array.json": json.dumps([GOOD_RECORD, {**GOOD_RECORD, "VehicleID": "V2"}], indent=2).encode(),
    "second-bad.json": json.dumps([GOOD_RECORD, {"VehicleID": "V2", "latitude": 1}]).encode(),
    "no-city.json": json.dumps({k: v for k, v in GOOD_RECORD.items() if k != "City"}).encode(),
    "empty-array.json": b"[]",
    "broken.json": b"{not json",
    "empty.json": b"",
}


async def run_document(store, layout, name: str):
    from telemetry_gate.pipeline.context import DocumentInfo
    from telemetry_gate.pipeline.engine import PipelineEngine
    from telemetry_gate.pipeline.flow import gate_flow

    engine = PipelineEngine(flow_builder=lambda: gate_flow(store, layout))
    return await engine.run(DocumentInfo(name=name, source_key=layout.landing_key(name)))


def _print_result(name: str, result) -> None:
    verdict = result.verdict or {}
    destination = result.context_summary["document"]["destination_key"]
    print(f"  {name:<20} {result.status:<10} {verdict.get('verdict', '-'):<9} → {destination}")
    if verdict.get("detail"):
        print(f"  {'':<20} {verdict['detail']}")


async def main():
    from telemetry_gate.core.logging import setup_logging
    from telemetry_gate.storage.keys import KeyLayout
    from telemetry_gate.storage.object_store import LocalObjectStore

    setup_logging("WARNING")     # quiet logs, show formatted output only

    print("\n" + "=" * 70)
    print("  TELEMETRY INGESTION GATE — LOCAL DEMO")
    print("=" * 70)

    with tempfile.TemporaryDirectory() as root:
        store = LocalObjectStore(root)
        layout = KeyLayout()

        for name, payload in SAMPLES.items():
            store.put_bytes(layout.landing_key(name), payload)

        for name in SAMPLES:
            result = await run_document(store, layout, name)
            _print_result(name, result)

        for area in ("staging", "rejected"):
            path = os.path.join(root, area)
            files = sorted(os.listdir(path)) if os.path.isdir(path) else []
            print(f"\n  {area}/: {', '.join(files) or '(empty)'}")

    print()


if __name__ == "__main__":
    asyncio.run(main())
