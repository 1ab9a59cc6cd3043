"""Main API router aggregation."""

from fastapi import APIRouter

from movie_catalog.api.movies import router as movies_router

# Movie routes are served from the service root
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(movies_router)
