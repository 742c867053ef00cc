"""OpenTelemetry tracer provider for the service.

One provider per process, installed by the app lifespan and shut down with it.
The exporter is ``console``, ``otlp`` (gRPC) or ``none``.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from tenantguard.core.config import Settings

logger = logging.getLogger(__name__)

_provider: TracerProvider | None = None


def _build_exporter(settings: Settings) -> SpanExporter | None:
    kind = settings.telemetry_exporter
    if kind == "none":
        return None
    if kind == "otlp":
        endpoint = settings.telemetry_otlp_endpoint
        return OTLPSpanExporter(
            endpoint=endpoint, insecure=bool(endpoint and endpoint.startswith("http://"))
        )
    return ConsoleSpanExporter()


def configure_tracing(
    settings: Settings, app: FastAPI, engine: AsyncEngine
) -> TracerProvider | None:
    """Install the tracer provider and instrument FastAPI, SQLAlchemy and logging.

    Instrumentation failures are logged and tracing stays off; the service
    runs the same with or without spans.
    """
    global _provider
    if not settings.telemetry_enabled:
        return None

    resource = Resource(
        attributes={
            SERVICE_NAME: settings.app_name,
            SERVICE_VERSION: settings.app_version,
            "deployment.environment": settings.environment,
        }
    )
    provider = TracerProvider(
        resource=resource, sampler=TraceIdRatioBased(settings.telemetry_sample_rate)
    )
    exporter = _build_exporter(settings)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))

    try:
        trace.set_tracer_provider(provider)
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=provider, excluded_urls="/health"
        )
        # The grant lookup is a single statement, so each check is one db span.
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine, tracer_provider=provider
        )
        LoggingInstrumentor().instrument(
            tracer_provider=provider, set_logging_format=False
        )
    except Exception:
        logger.exception("Tracing setup failed; continuing without spans")
        provider.shutdown()
        return None

    _provider = provider
    logger.info(
        "Tracing enabled: exporter=%s sample_rate=%s",
        settings.telemetry_exporter,
        settings.telemetry_sample_rate,
    )
    return provider


def shutdown_tracing() -> None:
    """Flush pending spans. Safe to call when tracing was never configured."""
    global _provider
    if _provider is None:
        return
    provider, _provider = _provider, None
    try:
        provider.shutdown()
    except Exception:
        logger.exception("Error flushing spans on shutdown")
