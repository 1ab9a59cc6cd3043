"""Pydantic schemas for external API responses (OMDb)."""

from pydantic import BaseModel, ConfigDict, Field


class OMDbTitle(BaseModel):
    """Title lookup response from OMDb.

    OMDb answers unknown ids with HTTP 200, ``Response: "False"`` and an
    ``Error`` message; every other field is then absent. Missing values
    inside a found title are reported as the literal string ``"N/A"``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    response: str = Field(default="False", alias="Response", description="'True' when found")
    error: str | None = Field(default=None, alias="Error", description="Lookup error message")

    title: str | None = Field(default=None, alias="Title", description="Movie title")
    imdb_id: str | None = Field(default=None, alias="imdbID", description="IMDb id")
    year: str | None = Field(default=None, alias="Year", description="Year, e.g. '1994'")
    rated: str | None = Field(default=None, alias="Rated", description="Content rating")
    released: str | None = Field(default=None, alias="Released", description="Release date text")
    runtime: str | None = Field(default=None, alias="Runtime", description="Runtime text")
    genre: str | None = Field(default=None, alias="Genre", description="Genres")
    director: str | None = Field(default=None, alias="Director", description="Directors")
    writer: str | None = Field(default=None, alias="Writer", description="Writers")
    actors: str | None = Field(default=None, alias="Actors", description="Main cast")
    plot: str | None = Field(default=None, alias="Plot", description="Plot summary")
    poster: str | None = Field(default=None, alias="Poster", description="Poster image URL")
    imdb_rating: str | None = Field(default=None, alias="imdbRating", description="IMDb rating")
    box_office: str | None = Field(default=None, alias="BoxOffice", description="Box office")

    @property
    def found(self) -> bool:
        """Whether OMDb matched the requested id."""
        return self.response.lower() == "true"
