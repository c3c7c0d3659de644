"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from expense_capture.api.middleware import RequestIDMiddleware, MetricsMiddleware
from expense_capture.api.v1 import sms, suggestions
from expense_capture.infrastructure.observability.logging import setup_logging
from expense_capture.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Expense Capture",
        description="Bank SMS extraction and habit-based expense suggestions",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(sms.router, prefix="/v1", tags=["sms"])
    app.include_router(suggestions.router, prefix="/v1", tags=["suggestions"])

    return app


app = create_app()
