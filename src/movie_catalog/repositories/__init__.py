"""Database access layer."""

from movie_catalog.repositories.movies import MovieRepository

__all__ = ["MovieRepository"]
