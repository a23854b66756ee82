"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from expense_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from expense_tracker.api.v1 import expenses, report, history
from expense_tracker.infrastructure.database.session import init_db
from expense_tracker.infrastructure.observability.logging import setup_logging
from expense_tracker.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.store_backend == "sql":
        init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Expense Tracker",
        description="Shared expense tracking with per-person reports and batched payments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(report.router, prefix="/v1", tags=["report"])
    app.include_router(history.router, prefix="/v1", tags=["history"])

    return app


app = create_app()
