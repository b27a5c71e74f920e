from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource

import config
from logger import setup_logger

logger = setup_logger(__name__)


def setup_telemetry(service_name: str = config.SERVICE_NAME):
    """
    Sets up OpenTelemetry tracing.

    Defaults to Console exporter if OTEL_EXPORTER_OTLP_ENDPOINT is not set.
    Without this call the engine's spans go to the no-op provider.
    """
    resource = Resource.create(attributes={
        "service.name": service_name,
    })

    provider = TracerProvider(resource=resource)

    if config.OTEL_ENDPOINT:
        otlp_exporter = OTLPSpanExporter(endpoint=config.OTEL_ENDPOINT)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
        logger.info("OTLP exporter configured", extra={"event": "telemetry_setup", "url": config.OTEL_ENDPOINT})
    else:
        console_exporter = ConsoleSpanExporter()
        provider.add_span_processor(BatchSpanProcessor(console_exporter))
        logger.info("Console exporter configured", extra={"event": "telemetry_setup"})

    trace.set_tracer_provider(provider)

    return trace.get_tracer(service_name)
