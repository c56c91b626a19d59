import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from priority_matrix.api import matrix
from priority_matrix.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info(f"Starting {settings.project_name}...")
    logger.info(
        f"Urgent threshold: {settings.urgent_threshold_hours}h, "
        f"importance threshold: {settings.live_importance_threshold}"
    )
    logger.info(f"Default canvas: {settings.canvas_width}x{settings.canvas_height} (margin {settings.canvas_margin})")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.project_name}...")


app = FastAPI(
    title="Priority Matrix Engine API",
    description="Eisenhower matrix classification and canvas coordinates",
    version="0.1.0",
    lifespan=lifespan
)

# CORS configuration - the renderer may be served from a file or a dev server
frontend_port = os.getenv("FRONTEND_PORT", "3000")

allowed_origins = [
    f"http://localhost:{frontend_port}",
    f"http://127.0.0.1:{frontend_port}",
    # Allow file:// protocol for local HTML files
    "null",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(matrix.router)


class HealthResponse(BaseModel):
    status: str
    urgent_threshold_hours: float
    live_importance_threshold: float


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Check API health and report active thresholds"""
    return HealthResponse(
        status="ok",
        urgent_threshold_hours=settings.urgent_threshold_hours,
        live_importance_threshold=settings.live_importance_threshold,
    )
