from opentelemetry import trace
import logging, time, json

from .config import settings
from ..common.context import get_context

logging.basicConfig(level=settings.log_level)
_logger = logging.getLogger(settings.service_name)

def jlog(event: str = "", severity: str = "INFO", **fields):
    span = trace.get_current_span()
    ctx = span.get_span_context() if span else None
    trace_id = f"{ctx.trace_id:032x}" if ctx and ctx.trace_id else None
    span_id = f"{ctx.span_id:016x}" if ctx and ctx.span_id else None

    record = {
        "event": event,
        "severity": severity,
        "service": settings.service_name,
        "env": settings.environment,
        "ts": time.time(),
        "trace_id": trace_id,
        "span_id": span_id,
        "correlation_id": get_context(),
    }
    record.update(fields)
    _logger.log(getattr(logging, severity, logging.INFO), json.dumps(record, ensure_ascii=False, default=str))
