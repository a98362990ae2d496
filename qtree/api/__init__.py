"""
API module for the quadtree compression application.
"""
import os
import time
import shutil
import logging
import platform
from contextlib import asynccontextmanager

import psutil
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from qtree import TEMP_DIR, __version__
from qtree.core.errors import ConfigError, FormatError, StateError
from qtree.core.qtree import QTree
from qtree.api.v1 import router as v1_router

# Set up logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Clean up temporary files when the application shuts down
    logger.info(f"Cleaning up temporary directory: {TEMP_DIR}")
    shutil.rmtree(TEMP_DIR, ignore_errors=True)


# Create FastAPI app
app = FastAPI(
    title="Quadtree Image Compression API",
    description="""
    API for lossless compression of square grayscale images with quadtrees.

    Accepts raw ASCII images, image files and JSON pixel arrays, and
    decompresses compressed (.rit) files back to raw text or PNG.
    """,
    version=__version__,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(v1_router, prefix="/api")


def _error_response(status_code: int, kind: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": kind}
    )


@app.exception_handler(FormatError)
async def format_error_handler(request: Request, exc: FormatError):
    """Malformed compressed data or unreadable input."""
    logger.error(f"Format error on {request.url.path}: {exc}")
    return _error_response(400, "format_error", exc)


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    """Image dimensions that are not a power-of-two square."""
    logger.error(f"Config error on {request.url.path}: {exc}")
    return _error_response(400, "config_error", exc)


@app.exception_handler(StateError)
async def state_error_handler(request: Request, exc: StateError):
    logger.error(f"State error on {request.url.path}: {exc}")
    return _error_response(409, "state_error", exc)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unexpected errors."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred", "error": str(exc)}
    )


# Health check endpoints
@app.get("/health")
async def health_check():
    """Check if the API is running."""
    return {"status": "healthy", "version": __version__}


@app.get("/health/detailed")
async def detailed_health_check():
    """
    Provides detailed health information including system metrics and codec status.
    """
    # System info
    system_info = {
        "cpu_usage": psutil.cpu_percent(interval=0.1),
        "memory_usage": psutil.virtual_memory().percent,
        "disk_usage": psutil.disk_usage('/').percent,
        "python_version": platform.python_version(),
        "platform": platform.platform()
    }

    # Check the codec with a small round trip
    try:
        test_data = [0, 0, 255, 255, 0, 0, 255, 255, 7, 7, 7, 7, 7, 7, 7, 7]
        tree = QTree().compress(test_data)
        count, values = tree.to_linear()
        decoded = QTree().uncompress(count, values)
        codec_status = {
            "status": "ok" if decoded.image.ravel().tolist() == test_data else "error",
            "compression_ratio": round(tree.raw_size / tree.compressed_size, 2)
        }
    except Exception as e:
        codec_status = {"status": "error", "message": str(e)}

    # Check temp directory
    temp_status = {"exists": os.path.exists(TEMP_DIR)}
    if temp_status["exists"]:
        test_file = os.path.join(TEMP_DIR, "test_write.tmp")
        try:
            with open(test_file, 'w') as f:
                f.write("test")
            temp_status["writable"] = True
            os.remove(test_file)
        except OSError as e:
            temp_status["writable"] = False
            temp_status["write_error"] = str(e)

        temp_status["free_space_mb"] = shutil.disk_usage(TEMP_DIR).free / (1024 * 1024)

    return {
        "status": "healthy",
        "version": __version__,
        "system": system_info,
        "codec": codec_status,
        "temp_directory": temp_status,
        "timestamp": time.time()
    }
