"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from groundbook.api import auth, bookings, grounds, payments
from groundbook.core.config import settings
from groundbook.core.database import init_db
from groundbook.core.errors import register_exception_handlers
from groundbook.services.storage import upload_storage

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Groundbook")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Groundbook")


# Create FastAPI app
app = FastAPI(
    title="Groundbook",
    description="List sports grounds, request bookings and pay owners by UPI",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(grounds.router)
app.include_router(bookings.router)
app.include_router(payments.router)

# Mount uploaded files
upload_storage.ensure_directory()
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
