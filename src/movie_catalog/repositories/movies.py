"""Persistence operations for movies."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.errors import ConflictError
from movie_catalog.models.movie import Movie, utcnow


class MovieRepository:
    """Query and update interface over the ``movies`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, movie_id: str) -> Movie | None:
        """Get a movie by its primary key."""
        return await self.session.get(Movie, movie_id, populate_existing=True)

    async def get_by_imdb_id(self, imdb_id: str) -> Movie | None:
        """Get a movie by its IMDb id."""
        result = await self.session.execute(select(Movie).where(Movie.imdb_id == imdb_id))
        return result.scalar_one_or_none()

    @staticmethod
    def _title_matches(title: str) -> ColumnElement[bool]:
        return Movie.title.icontains(title, autoescape=True)

    async def count(self, title: str | None = None) -> int:
        """Count movies, optionally only those whose title contains ``title``."""
        query = select(func.count()).select_from(Movie)
        if title:
            query = query.where(self._title_matches(title))
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_page(
        self,
        offset: int,
        limit: int,
        title: str | None = None,
    ) -> tuple[int, Sequence[Movie]]:
        """Return the total match count and one page of movies, newest first.

        Args:
            offset: Number of matching rows to skip.
            limit: Maximum number of rows to return.
            title: Optional case-insensitive substring the title must contain.
        """
        movies_query = select(Movie)
        if title:
            movies_query = movies_query.where(self._title_matches(title))

        total = await self.count(title)
        result = await self.session.execute(
            movies_query.order_by(Movie.created_at.desc(), Movie.id).offset(offset).limit(limit)
        )
        return total, result.scalars().all()

    async def create(self, values: dict[str, Any]) -> Movie:
        """Insert a movie and return it with generated id and timestamps.

        Raises:
            ConflictError: If the IMDb id is already stored.
        """
        movie = Movie(**values)
        self.session.add(movie)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Movie already exists in database") from None
        await self.session.refresh(movie)
        return movie

    async def update(self, movie_id: str, values: dict[str, Any]) -> int:
        """Update a movie in place and return the number of affected rows.

        Raises:
            ConflictError: If the new IMDb id belongs to another movie.
        """
        statement = (
            update(Movie).where(Movie.id == movie_id).values(**values, updated_at=utcnow())
        )
        try:
            result = await self.session.execute(statement)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Movie already exists in database") from None
        return result.rowcount

    async def delete(self, movie_id: str) -> int:
        """Delete a movie and return the number of affected rows."""
        result = await self.session.execute(delete(Movie).where(Movie.id == movie_id))
        return result.rowcount
