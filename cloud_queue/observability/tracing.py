"""
OpenTelemetry tracing for queue operations.

Spans are always recorded so log lines carry trace ids. They are only
shipped anywhere when OTEL_ENABLED is set.
"""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer

from cloud_queue import __version__
from cloud_queue.config import Settings, get_settings

# Global tracer instance
_tracer: Tracer | None = None


def build_tracer_provider(settings: Settings) -> TracerProvider:
    """
    Build a tracer provider for this service.

    Args:
        settings: Application settings.

    Returns:
        TracerProvider exporting over OTLP when tracing is enabled.
    """
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.otel_service_name,
                "service.version": __version__,
            }
        )
    )
    if settings.otel_enabled:
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=settings.otel_exporter_otlp_endpoint,
                    insecure=True,
                )
            )
        )
    return provider


def setup_tracing() -> Tracer:
    """Install the tracer provider globally and return the service tracer."""
    global _tracer

    settings = get_settings()
    trace.set_tracer_provider(build_tracer_provider(settings))
    _tracer = trace.get_tracer(settings.otel_service_name)
    return _tracer


def instrument_fastapi(app: FastAPI) -> None:
    """Emit a server span for every request handled by the app."""
    FastAPIInstrumentor.instrument_app(app)


def get_tracer() -> Tracer:
    """
    Get the tracer instance.

    Falls back to the globally registered provider (a no-op one unless
    `setup_tracing` ran) so routes never need to check.
    """
    if _tracer is None:
        return trace.get_tracer(get_settings().otel_service_name)
    return _tracer
