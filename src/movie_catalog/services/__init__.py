"""Business logic and external API clients."""

from movie_catalog.services.base import (
    APIError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
    TransportError,
)
from movie_catalog.services.catalog import MovieService, get_movie_service, omdb_to_movie
from movie_catalog.services.omdb import OMDbClient, get_omdb_client_factory

__all__ = [
    "APIError",
    "BaseAPIClient",
    "NotFoundError",
    "RateLimitError",
    "TransportError",
    "MovieService",
    "get_movie_service",
    "omdb_to_movie",
    "OMDbClient",
    "get_omdb_client_factory",
]
