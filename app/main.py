# app/main.py
"""
FastAPI application entry point.
Builds the app from an explicit Settings value: logging, CORS, request timing,
error handlers and all routers. Run with `uvicorn app.main:app`.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.database import build_engine, build_session_factory, create_tables
from app.exceptions import register_exception_handlers
from app.routers import (
    analytics, dashboard, drivers, expenses, exports, fuel, health, maintenance, trips, vehicles,
)
from app.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("🚀 Fleet Back Office starting up...")
    if settings.is_sql_backend:
        create_tables(app.state.engine)
        logger.info("✅ Local database tables ready")
    else:
        logger.info(f"📡 Remote data service: {settings.SUPABASE_URL}")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")
    yield
    if app.state.engine is not None:
        app.state.engine.dispose()
    logger.info("🛑 Fleet Back Office shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_TO_FILE, settings.LOG_DIR)

    app = FastAPI(
        title="Fleet Back Office API",
        description="Vehicles, drivers, trips, maintenance, fuel and expenses behind role-gated routes.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.remote_transport = None     # tests swap in httpx.MockTransport
    app.state.engine = None
    app.state.session_factory = None
    if settings.is_sql_backend:
        app.state.engine = build_engine(settings.DATABASE_URL)
        app.state.session_factory = build_session_factory(app.state.engine)

    # ── CORS (dashboard UI is served from another origin) ─────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ─────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    register_exception_handlers(app)

    # ── Routers ───────────────────────────────────────────────────────────
    app.include_router(health.router, tags=["💚 Health"])
    app.include_router(dashboard.router,   prefix="/api", tags=["📊 Dashboard"])
    app.include_router(vehicles.router,    prefix="/api", tags=["🚚 Vehicles"])
    app.include_router(drivers.router,     prefix="/api", tags=["🧑 Drivers"])
    app.include_router(trips.router,       prefix="/api", tags=["🗺️  Trips"])
    app.include_router(maintenance.router, prefix="/api", tags=["🔧 Maintenance"])
    app.include_router(fuel.router,        prefix="/api", tags=["⛽ Fuel"])
    app.include_router(expenses.router,    prefix="/api", tags=["💸 Expenses"])
    app.include_router(analytics.router,   prefix="/api", tags=["📈 Analytics"])
    app.include_router(exports.router,     prefix="/api", tags=["📄 Exports"])

    return app


app = create_app()
