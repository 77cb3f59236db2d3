from fastapi import FastAPI

from .src.routers import gateway
from .src.config import settings
from .otel import init_tracing

app = FastAPI(title="AI Gateway API", version="1.0.0")

app.include_router(gateway.router, prefix="/api/v1")

tracer = init_tracing(app, service_name=settings.service_name, service_version="v1")

@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": settings.service_name,
        "provider": settings.ai_provider,
        "hipaa_mode": settings.hipaa_mode,
        "deidentify_before_call": settings.deidentify_before_call,
    }
