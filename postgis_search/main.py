"""
postgis-search - geospatial search over PostGIS tables.

Radius, nearest, shape and bounding box searches plus distance, area,
shape union and averaged center calculations, served over HTTP.
"""

import argparse
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postgis_search import __version__
from postgis_search.api import api_router
from postgis_search.config import settings
from postgis_search.database import StoreExecutionError, close_database, init_database

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("postgis_search")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown tasks.
    """
    # Startup
    logger.info(f"Starting postgis-search v{__version__}")
    logger.info(f"Target table: {settings.target_table}.{settings.point_column}")
    logger.info(f"Shape table: {settings.shape_table}.{settings.shape_column}")

    init_database(settings.database_url)
    logger.info("Database connected")

    yield

    # Shutdown
    logger.info("Shutting down postgis-search")
    close_database()


# Create the FastAPI application
app = FastAPI(
    title="postgis-search",
    description="Geospatial search and calculations over PostGIS tables",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.exception_handler(StoreExecutionError)
async def store_error_handler(request: Request, exc: StoreExecutionError) -> JSONResponse:
    """Report database failures with the database's own message."""
    logger.error(f"Store error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with basic server info."""
    return {
        "name": "postgis-search",
        "version": __version__,
        "target_table": settings.target_table,
        "docs": "/docs",
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def run():
    """Run the server using uvicorn."""
    parser = argparse.ArgumentParser(description="postgis-search - geospatial search service")
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=None,
        help=f"Port to listen on (default: {settings.port}, or PGS_PORT env var)"
    )
    parser.add_argument(
        "-H", "--host",
        type=str,
        default=None,
        help=f"Host to bind to (default: {settings.host}, or PGS_HOST env var)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    args = parser.parse_args()

    # Command line args override config/env vars
    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port

    uvicorn.run(
        "postgis_search.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


if __name__ == "__main__":
    run()
