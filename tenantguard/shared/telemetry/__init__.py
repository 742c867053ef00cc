"""Logging setup, OpenTelemetry tracer provider and span helpers."""
