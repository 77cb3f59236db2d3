from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

from .src.config import GatewayConfig, settings

def _span_exporter(config: GatewayConfig) -> SpanExporter:
    if not config.use_cloud_trace:
        return ConsoleSpanExporter()
    # Ships with the optional "gcp" extra
    from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
    return CloudTraceSpanExporter()

def init_tracing(app, service_name: str, service_version: str = "v1", config: GatewayConfig = settings):
    """Install the process tracer provider and instrument the FastAPI app."""
    provider = TracerProvider(
        resource=Resource.create({
            "service.name": service_name,
            "service.version": service_version,
            "deployment.environment": config.environment,
            "gateway.provider": config.ai_provider,
        })
    )
    provider.add_span_processor(BatchSpanProcessor(_span_exporter(config)))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor().instrument_app(app)
    return trace.get_tracer(service_name)
