"""Movie catalog operations: listing, lookup, creation, OMDb import, update and delete."""

import logging
import math
import re
from collections.abc import Callable
from typing import Any

from fastapi import Depends
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.config import Settings, get_settings
from movie_catalog.database import get_db
from movie_catalog.errors import (
    BadRequestError,
    CatalogError,
    ConfigurationError,
    ConflictError,
    ForbiddenError,
    MovieNotFoundError,
    ServiceUnavailableError,
    ValidationFailedError,
    format_validation_errors,
)
from movie_catalog.metrics import SOURCE_DIRECT, SOURCE_IMDB, record_movie_created
from movie_catalog.models.movie import Movie
from movie_catalog.repositories.movies import MovieRepository
from movie_catalog.schemas.external import OMDbTitle
from movie_catalog.schemas.movie import MovieCreate, MoviePage, MovieResponse, MovieUpdate
from movie_catalog.services.base import APIError
from movie_catalog.services.omdb import OMDbClient, get_omdb_client_factory
from movie_catalog.utils.security import has_role

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

# Largest value SQL LIMIT/OFFSET parameters can carry
MAX_SQL_INT = 2**63 - 1

# OMDb's placeholder for unknown values
OMDB_MISSING = "N/A"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(value: Any, default: int) -> int:
    """Read a leading integer from a query value, falling back to ``default``.

    ``"3"`` and ``"3abc"`` read as 3; missing, non-numeric and values below
    1 all yield ``default``.
    """
    if value is None:
        return default
    if isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(str(value))
        if match is None:
            return default
        number = int(match.group(1))
    return number if number > 0 else default


def _leading_int(value: str | None) -> int | None:
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _rating(value: str | None) -> float:
    if value is None or value == OMDB_MISSING:
        return 0.0
    try:
        rating = float(value)
    except ValueError:
        return 0.0
    return rating if math.isfinite(rating) else 0.0


def omdb_to_movie(title: OMDbTitle) -> dict[str, Any]:
    """Translate an OMDb title into movie fields.

    The year is the leading integer of OMDb's ``Year`` ("2008–2013" gives
    2008). An unknown or missing rating becomes 0 and a missing box office
    becomes "N/A". The result still has to pass ``MovieCreate`` validation.
    """
    return {
        "title": title.title,
        "imdb_id": title.imdb_id,
        "year": _leading_int(title.year),
        "rated": title.rated,
        "released": title.released,
        "runtime": title.runtime,
        "genre": title.genre,
        "director": title.director,
        "writer": title.writer,
        "actors": title.actors,
        "plot": title.plot,
        "poster": title.poster,
        "imdb_rating": _rating(title.imdb_rating),
        "box_office": title.box_office or OMDB_MISSING,
    }


class MovieService:
    """Catalog operations on top of the movie repository.

    Mutations take the caller's role and require the configured admin role
    before any payload is validated or any store access happens.
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        omdb_client_factory: Callable[..., OMDbClient] | None = None,
    ) -> None:
        self.repository = MovieRepository(db)
        self.settings = settings or get_settings()
        self.omdb_client_factory = omdb_client_factory or OMDbClient

    def _require_admin(self, role: str | None, action: str) -> None:
        if not has_role(role, self.settings.admin_role):
            raise ForbiddenError(f"Forbidden: Only admins can {action} movies")

    @staticmethod
    def _validate(schema: type[BaseModel], payload: Any) -> BaseModel:
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailedError(format_validation_errors(e.errors())) from None

    async def list_movies(
        self,
        page: Any = None,
        size: Any = None,
        title: str | None = None,
    ) -> MoviePage:
        """Return one page of movies, newest first.

        Args:
            page: Requested page; invalid values fall back to 1.
            size: Requested page size; invalid values fall back to 10.
            title: Optional case-insensitive substring filter on the title.
        """
        current_page = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(size, DEFAULT_PAGE_SIZE)
        title_filter = title if title and title.strip() else None
        offset = (current_page - 1) * page_size

        if offset > MAX_SQL_INT:
            # No row can sit this far into the table
            total = await self.repository.count(title=title_filter)
            movies = []
        else:
            total, movies = await self.repository.list_page(
                offset=offset,
                limit=min(page_size, MAX_SQL_INT),
                title=title_filter,
            )

        return MoviePage(
            total_items=total,
            total_pages=math.ceil(total / page_size),
            current_page=current_page,
            page_size=page_size,
            movies=[MovieResponse.model_validate(movie) for movie in movies],
        )

    async def get_movie(self, movie_id: str) -> Movie:
        """Get a movie by id.

        Raises:
            MovieNotFoundError: If no movie has this id.
        """
        try:
            movie = await self.repository.get(movie_id)
            if movie is None:
                raise MovieNotFoundError()
            return movie
        except CatalogError as e:
            logger.warning("Error retrieving movie with id %s: %s", movie_id, e.message)
            raise

    async def create_movie(self, role: str | None, payload: Any) -> Movie:
        """Create a movie from a full payload.

        Raises:
            ForbiddenError: If the caller is not an admin.
            ValidationFailedError: If the payload violates field constraints.
            ConflictError: If the IMDb id is already stored.
        """
        try:
            self._require_admin(role, "add")
            movie_in = self._validate(MovieCreate, payload)
            movie = await self.repository.create(movie_in.model_dump())
        except CatalogError as e:
            logger.warning("Error creating movie: %s", e.message)
            raise

        record_movie_created(SOURCE_DIRECT)
        logger.info("Created movie %s (%s)", movie.id, movie.imdb_id)
        return movie

    async def create_movie_from_imdb(self, role: str | None, imdb_id: Any) -> Movie:
        """Import a movie from OMDb by IMDb id.

        Steps short-circuit in order: role check, id presence, duplicate
        check, provider key check, OMDb lookup, translation, validation and
        insert. The creation counter is only incremented after the insert.

        Raises:
            ForbiddenError: If the caller is not an admin.
            BadRequestError: If no IMDb id was given.
            ConflictError: If a movie with this IMDb id is already stored.
            ConfigurationError: If no OMDb API key is configured.
            ServiceUnavailableError: If OMDb cannot be reached.
            MovieNotFoundError: If OMDb has no title with this id.
            ValidationFailedError: If the translated movie is invalid.
        """
        try:
            self._require_admin(role, "add")

            if not isinstance(imdb_id, str) or not imdb_id.strip():
                raise BadRequestError("imdbId is required")
            imdb_id = imdb_id.strip()

            if await self.repository.get_by_imdb_id(imdb_id) is not None:
                raise ConflictError("Movie already exists in database")

            api_key = self.settings.omdb_api_key
            if not api_key:
                raise ConfigurationError("OMDB API Key is not configured")

            omdb_title = await self._fetch_omdb_title(api_key, imdb_id)
            if not omdb_title.found:
                raise MovieNotFoundError(f"OMDB: {omdb_title.error or 'Movie not found!'}")

            movie_in = self._validate(MovieCreate, omdb_to_movie(omdb_title))
            movie = await self.repository.create(movie_in.model_dump())
        except CatalogError as e:
            logger.warning("Error creating movie by IMDb ID %s: %s", imdb_id, e.message)
            raise

        record_movie_created(SOURCE_IMDB)
        logger.info("Imported movie %s (%s) from OMDb", movie.id, movie.imdb_id)
        return movie

    async def _fetch_omdb_title(self, api_key: str, imdb_id: str) -> OMDbTitle:
        client = self.omdb_client_factory(api_key=api_key)
        try:
            return await client.get_title(imdb_id)
        except APIError as e:
            logger.error("OMDb lookup for %s failed: %s", imdb_id, e)
            raise ServiceUnavailableError(
                "External Movie Service is temporarily unavailable"
            ) from e
        finally:
            await client.close()

    async def update_movie(self, role: str | None, movie_id: str, payload: Any) -> Movie:
        """Update the supplied fields of a movie and return the stored result.

        Raises:
            ForbiddenError: If the caller is not an admin.
            ValidationFailedError: If a supplied field violates its constraints.
            MovieNotFoundError: If no movie has this id.
            ConflictError: If the new IMDb id belongs to another movie.
        """
        try:
            self._require_admin(role, "update")
            changes = self._validate(MovieUpdate, payload).model_dump(exclude_unset=True)

            if not await self.repository.update(movie_id, changes):
                raise MovieNotFoundError()

            movie = await self.repository.get(movie_id)
            if movie is None:
                raise MovieNotFoundError()
        except CatalogError as e:
            logger.warning("Error updating movie with id %s: %s", movie_id, e.message)
            raise

        logger.info("Updated movie %s", movie_id)
        return movie

    async def delete_movie(self, role: str | None, movie_id: str) -> None:
        """Delete a movie.

        Raises:
            ForbiddenError: If the caller is not an admin.
            MovieNotFoundError: If no movie has this id.
        """
        try:
            self._require_admin(role, "delete")
            if not await self.repository.delete(movie_id):
                raise MovieNotFoundError()
        except CatalogError as e:
            logger.warning("Error deleting movie with id %s: %s", movie_id, e.message)
            raise

        logger.info("Deleted movie %s", movie_id)


async def get_movie_service(
    db: AsyncSession = Depends(get_db),
    omdb_client_factory: Callable[..., OMDbClient] = Depends(get_omdb_client_factory),
) -> MovieService:
    """Build a MovieService for the current request.

    Can be used as a FastAPI dependency.
    """
    return MovieService(db, omdb_client_factory=omdb_client_factory)
