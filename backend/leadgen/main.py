"""Main FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from leadgen.config import settings
from leadgen.database import check_connection
from leadgen.dependencies import get_dataset_cache
from leadgen.icp_engine.exceptions import DatasetLoadError
from leadgen.routers import email_routes, insights_routes, lead_routes, webhook_routes
from leadgen.scheduler import shutdown_scheduler, start_scheduler
from leadgen.websocket import get_socket_app

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Lead Generation API",
    description="ICP matching, persona insights and email outreach",
    version="1.0.0",
    redirect_slashes=False
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# ============================================
# ROUTER REGISTRATION
# ============================================

app.include_router(lead_routes.router)
app.include_router(webhook_routes.router)
app.include_router(email_routes.router)
app.include_router(insights_routes.router)

# Mount WebSocket
app.mount("/socket.io", get_socket_app())


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


# ============================================
# STARTUP & SHUTDOWN
# ============================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting Lead Generation API...")

    await check_connection()

    # Warm the dataset cache; a failure here is retried on first request
    try:
        await get_dataset_cache().load()
    except DatasetLoadError as e:
        logger.warning(f"Business dataset not loaded at startup: {e}")

    start_scheduler()
    logger.info("Application started successfully!")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down Lead Generation API...")
    shutdown_scheduler()
