"""
Quadtree Image Compression API Entry Point

This file serves as the main entry point for the application,
importing and running the FastAPI application defined in the qtree package.

Run with uvicorn:
    uvicorn main:app --reload
"""
import logging
import sys

from qtree import config
from qtree.api import app

# Configure root logger
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format=config.LOG_FORMAT,
    stream=sys.stdout
)

# Set up logger
logger = logging.getLogger(__name__)

# Entry point for running with uvicorn
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Quadtree Compression API on port {config.PORT} with {config.WORKERS} workers")

    uvicorn.run(
        "qtree.api:app",
        host="0.0.0.0",
        port=config.PORT,
        workers=config.WORKERS,
        reload=config.DEBUG
    )
