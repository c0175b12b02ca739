"""HTTP endpoints for postgis-search."""

from fastapi import APIRouter

from . import entities, geometry, search

# Create a combined router for all API endpoints
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(entities.router, prefix="/entities", tags=["entities"])
api_router.include_router(geometry.router, prefix="/geometry", tags=["geometry"])
