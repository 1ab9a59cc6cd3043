"""Movie API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response

from movie_catalog.schemas.movie import MoviePage, MovieResponse
from movie_catalog.services.catalog import MovieService, get_movie_service
from movie_catalog.utils.security import CurrentRole

router = APIRouter(tags=["movies"])


async def read_json_body(request: Request) -> Any:
    """Read the request body as JSON, or None when it is empty or malformed.

    Write routes validate the body in the service after the role check, so a
    non-admin gets 403 whatever was sent.
    """
    try:
        return await request.json()
    except ValueError:
        return None


@router.get("/get", response_model=MoviePage)
async def list_movies(
    page: str | None = Query(None, description="Page number, defaults to 1"),
    size: str | None = Query(None, description="Movies per page, defaults to 10"),
    title: str | None = Query(None, description="Case-insensitive title filter"),
    service: MovieService = Depends(get_movie_service),
) -> MoviePage:
    """List movies, newest first.

    Invalid page or size values fall back to their defaults instead of
    being rejected.
    """
    return await service.list_movies(page=page, size=size, title=title)


@router.get("/get/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: str,
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    """Get a single movie by its catalog id."""
    movie = await service.get_movie(movie_id)
    return MovieResponse.model_validate(movie)


@router.post("/add", response_model=MovieResponse, status_code=201)
async def create_movie(
    role: CurrentRole,
    payload: Any = Depends(read_json_body),
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    """Add a movie from a full payload.

    Requires the admin role. The body is validated only after the role
    check, so non-admins always get 403.
    """
    movie = await service.create_movie(role, payload)
    return MovieResponse.model_validate(movie)


@router.post("/add-imdb", response_model=MovieResponse, status_code=201)
async def create_movie_from_imdb(
    role: CurrentRole,
    payload: Any = Depends(read_json_body),
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    """Import a movie from OMDb by IMDb id.

    Expects ``{"imdbId": "tt0111161"}``. Requires the admin role.
    """
    imdb_id = payload.get("imdbId") if isinstance(payload, dict) else None
    movie = await service.create_movie_from_imdb(role, imdb_id)
    return MovieResponse.model_validate(movie)


@router.put("/update/{movie_id}", response_model=MovieResponse)
async def update_movie(
    movie_id: str,
    role: CurrentRole,
    payload: Any = Depends(read_json_body),
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    """Update the submitted fields of a movie. Requires the admin role."""
    movie = await service.update_movie(role, movie_id, payload)
    return MovieResponse.model_validate(movie)


@router.delete("/delete/{movie_id}", status_code=204, response_class=Response)
async def delete_movie(
    movie_id: str,
    role: CurrentRole,
    service: MovieService = Depends(get_movie_service),
) -> Response:
    """Delete a movie. Requires the admin role."""
    await service.delete_movie(role, movie_id)
    return Response(status_code=204)
