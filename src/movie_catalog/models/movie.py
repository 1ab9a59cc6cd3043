"""Movie ORM model."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from movie_catalog.database import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class Movie(Base):
    """A movie in the catalog, entered directly or imported from OMDb."""

    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    imdb_id: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    title: Mapped[str] = mapped_column(String(500))
    year: Mapped[int] = mapped_column(Integer)
    rated: Mapped[str | None] = mapped_column(String(255), nullable=True)
    released: Mapped[str] = mapped_column(String(255))
    runtime: Mapped[str | None] = mapped_column(String(255), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(255), nullable=True)
    director: Mapped[str | None] = mapped_column(Text, nullable=True)
    writer: Mapped[str | None] = mapped_column(Text, nullable=True)
    actors: Mapped[str | None] = mapped_column(Text, nullable=True)
    plot: Mapped[str] = mapped_column(Text)
    poster: Mapped[str] = mapped_column(String(1000))
    imdb_rating: Mapped[float | None] = mapped_column(
        Numeric(3, 1, asdecimal=False), nullable=True
    )
    box_office: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
