"""Telemetry ingestion gate — validates landing documents and routes them."""

__version__ = "0.1.0"
