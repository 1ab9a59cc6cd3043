"""Pydantic schemas for movie API endpoints."""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

FIRST_FILM_YEAR = 1888  # Roundhay Garden Scene

_url_adapter = TypeAdapter(HttpUrl)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _valid_url(value: str) -> str:
    # Validate only; the submitted string is stored as-is
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid URL") from None
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]
TitleStr = Annotated[str, StringConstraints(max_length=500), AfterValidator(_not_blank)]
ImdbIdStr = Annotated[str, StringConstraints(max_length=20), AfterValidator(_not_blank)]
ReleasedStr = Annotated[str, StringConstraints(max_length=255), AfterValidator(_not_blank)]
PosterStr = Annotated[str, StringConstraints(max_length=1000), AfterValidator(_valid_url)]


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MovieCreate(CamelModel):
    """Full movie payload for direct creation and OMDb imports."""

    title: TitleStr = Field(description="Movie title")
    imdb_id: ImdbIdStr = Field(description="IMDb id, e.g. tt0111161")
    year: int = Field(ge=FIRST_FILM_YEAR, description="Release year")
    rated: str | None = Field(default=None, max_length=255, description="Content rating")
    released: ReleasedStr = Field(description="Release description")
    runtime: str | None = Field(default=None, max_length=255, description="Runtime text")
    genre: str | None = Field(default=None, max_length=255, description="Genres")
    director: str | None = Field(default=None, description="Directors")
    writer: str | None = Field(default=None, description="Writers")
    actors: str | None = Field(default=None, description="Main cast")
    plot: NonBlankStr = Field(description="Plot summary")
    poster: PosterStr = Field(description="Poster image URL")
    imdb_rating: float | None = Field(default=None, ge=0, le=10, description="IMDb rating")
    box_office: str | None = Field(default=None, max_length=255, description="Box office gross")


class MovieUpdate(CamelModel):
    """Movie fields to change; omitted fields keep their stored value."""

    title: TitleStr | None = None
    imdb_id: ImdbIdStr | None = None
    year: int | None = Field(default=None, ge=FIRST_FILM_YEAR)
    rated: str | None = Field(default=None, max_length=255)
    released: ReleasedStr | None = None
    runtime: str | None = Field(default=None, max_length=255)
    genre: str | None = Field(default=None, max_length=255)
    director: str | None = None
    writer: str | None = None
    actors: str | None = None
    plot: NonBlankStr | None = None
    poster: PosterStr | None = None
    imdb_rating: float | None = Field(default=None, ge=0, le=10)
    box_office: str | None = Field(default=None, max_length=255)

    @field_validator("title", "imdb_id", "year", "released", "plot", "poster", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        """Required columns may be omitted but not cleared."""
        if v is None:
            raise ValueError("must not be null")
        return v


class MovieResponse(CamelModel):
    """A stored movie."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Catalog movie ID")
    title: str
    imdb_id: str
    year: int
    rated: str | None = None
    released: str
    runtime: str | None = None
    genre: str | None = None
    director: str | None = None
    writer: str | None = None
    actors: str | None = None
    plot: str
    poster: str
    imdb_rating: float | None = None
    box_office: str | None = None
    created_at: datetime
    updated_at: datetime


class MoviePage(CamelModel):
    """Page envelope for the movie list endpoint."""

    total_items: int = Field(description="Number of movies matching the filter")
    total_pages: int = Field(description="Total number of pages")
    current_page: int = Field(description="Current page number")
    page_size: int = Field(description="Maximum movies per page")
    movies: list[MovieResponse] = Field(default_factory=list, description="Movies on this page")
