"""
Reserva - hotel and restaurant reservation booking API
"""

import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from reserva.config import settings
from reserva.database import SessionLocal, get_db
from reserva.api import reservations, businesses
from reserva.booking.core import build_core
from reserva.booking.errors import BookingError

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Reserva API", version="1.0.0")
    app.state.core = await build_core(
        SessionLocal,
        supported_currencies=settings.supported_currencies_list,
        allow_past_bookings=settings.allow_past_bookings,
    )
    yield
    logger.info("Shutting down Reserva API")


# Create FastAPI application
app = FastAPI(
    title="Reserva",
    description="Room and table reservations for hotels and restaurants",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    """Map booking core failures to HTTP responses"""
    logger.info(
        "Booking request rejected",
        path=request.url.path,
        error=exc.code,
        detail=exc.message,
        **exc.context,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready(db: AsyncSession = Depends(get_db)):
    """Readiness check with database verification"""
    checks = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed", error=str(e))
        checks["database"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={"status": "ready" if all_ok else "not_ready", "checks": checks},
    )


# Include API routers
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(businesses.router, prefix="/businesses", tags=["Businesses"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reserva.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
