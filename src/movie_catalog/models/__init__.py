"""SQLAlchemy ORM models."""

from movie_catalog.models.movie import Movie

__all__ = [
    "Movie",
]
