"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from roundup_gateway.api.dependencies import get_advisor_client
from roundup_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from roundup_gateway.api.v1 import credit_score, income_prediction, roundup, transactions
from roundup_gateway.infrastructure.observability.logging import setup_logging
from roundup_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_advisor_client().aclose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Round-Up Savings Gateway",
        description="Round-up, credit score and income forecast service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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

    # Register API routers
    app.include_router(roundup.router, prefix="/v1", tags=["roundup"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(credit_score.router, prefix="/v1", tags=["credit-score"])
    app.include_router(income_prediction.router, prefix="/v1", tags=["income-prediction"])

    return app


app = create_app()
