from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging

from cricphase.core import config
from cricphase.database import init_db
from cricphase.api import analysis, players

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create database tables
init_db()

app = FastAPI(
    title="cricphase API",
    version="1.0.0",
    description="Conditional phase analytics over ball-by-ball cricket data",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(analysis.router, prefix="/analyze", tags=["Analysis"])
app.include_router(players.router, prefix="/players", tags=["Players"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to cricphase API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "players": "/players",
            "phase_performance": "/analyze/phase-performance",
            "dismissal_patterns": "/analyze/dismissal-patterns",
            "innings_progression": "/analyze/innings-progression"
        }
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "cricphase API"
    }


# Error handlers
@app.exception_handler(404)
async def not_found_exception_handler(request: Request, exc):
    detail = getattr(exc, "detail", None)
    return JSONResponse(
        status_code=404,
        content={"message": detail or "Resource not found"}
    )


@app.exception_handler(Exception)
async def internal_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"}
    )
