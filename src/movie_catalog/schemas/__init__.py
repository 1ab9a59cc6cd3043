"""Pydantic schemas for request/response validation."""

from movie_catalog.schemas.external import OMDbTitle
from movie_catalog.schemas.movie import (
    MovieCreate,
    MoviePage,
    MovieResponse,
    MovieUpdate,
)

__all__ = [
    # External API schemas
    "OMDbTitle",
    # Movie schemas
    "MovieCreate",
    "MovieUpdate",
    "MovieResponse",
    "MoviePage",
]
