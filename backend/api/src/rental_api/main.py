"""FastAPI application for the rental booking REST API.

Provides REST endpoints for:
- Health checks
- Pricing rules and stay price calculation
- Blocked dates, availability and the booking calendar
- Public holiday overlay
"""

import os
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from rental_api.exceptions import register_exception_handlers
from rental_api.middleware.correlation import CorrelationIdMiddleware
from rental_api.routes import availability_router, holidays_router, pricing_router
from rental_core.utils.logging import configure_logging, get_logger

# Frontend origin allowed by CORS (configurable via environment)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

configure_logging(LOG_LEVEL)
logger = get_logger(__name__)

app = FastAPI(
    title="Rental Booking API",
    description="REST API for vacation rental pricing and availability",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL, "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.include_router(pricing_router, prefix="/api")
app.include_router(availability_router, prefix="/api")
app.include_router(holidays_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "rental-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    logger.info("Starting rental API on %s:%s", host, port)
    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "rental_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["api/src", "shared/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
