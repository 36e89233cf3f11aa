"""
Oracle Vision Signals - FastAPI Application

Main entry point for the backend API.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings
from app.api.v1 import router as api_v1_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    print(f"Starting {settings.app_name} v{settings.app_version}")
    print(f"Environment: {settings.environment}")
    print(f"Market data: {settings.coingecko_base_url}")

    yield

    # Shutdown
    print("Shutting down...")
    from app.services.market_data import close_market_data_client
    await close_market_data_client()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Oracle Vision crypto signal API

    ## Architecture
    - **Market Data**: CoinGecko snapshots and hourly charts
    - **Indicator Engine**: RSI(14), volume ratio, bull score (pure Python/NumPy)
    - **Signal Service**: concurrent per-asset scoring with per-asset failure containment

    ## Notes
    - Scores are heuristics, not predictions
    - Every scan is computed fresh; nothing is cached or stored
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


def build_cors_origins(config: Settings) -> list[str]:
    """Local frontend ports plus the configured frontend and extra origins."""
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    for origin in [config.frontend_url, *config.allowed_origins]:
        if origin and origin not in origins:
            origins.append(origin)
    return origins


# CORS middleware
cors_origins = build_cors_origins(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Oracle Vision Signals API",
        "docs": "/docs",
        "health": "/health",
        "scan": "/api/v1/scan?symbols=btc,eth,sol",
    }
