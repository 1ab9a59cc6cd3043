"""OMDb (Open Movie Database) API client service."""

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from movie_catalog.config import get_settings
from movie_catalog.schemas.external import OMDbTitle
from movie_catalog.services.base import APIError, BaseAPIClient


class OMDbClient(BaseAPIClient):
    """Client for the OMDb API.

    OMDb serves every lookup from its root path and authenticates with an
    ``apikey`` query parameter.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        plot: str | None = None,
    ) -> None:
        """Initialize the OMDb client.

        Args:
            api_key: OMDb API key. If not provided, uses settings.
            base_url: OMDb base URL. If not provided, uses settings.
            timeout: Request timeout in seconds. If not provided, uses settings.
            plot: Plot length to request, "short" or "full". If not provided, uses settings.
        """
        settings = get_settings()
        self._api_key = api_key or settings.omdb_api_key
        self.plot = plot or settings.omdb_plot

        if not self._api_key:
            raise ValueError("OMDb API key is required")

        super().__init__(
            base_url=base_url or settings.omdb_base_url,
            timeout=timeout if timeout is not None else settings.omdb_timeout,
        )

    @property
    def default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    @property
    def default_params(self) -> dict[str, Any]:
        return {"apikey": self._api_key}

    async def get_title(self, imdb_id: str) -> OMDbTitle:
        """Look up a title by IMDb id.

        A lookup that OMDb could not match is returned, not raised: check
        ``OMDbTitle.found`` and ``OMDbTitle.error``.

        Args:
            imdb_id: IMDb id, e.g. "tt0111161".

        Returns:
            The parsed OMDb payload.

        Raises:
            APIError: If the request fails, OMDb answers with an error status,
                or the payload is not a title lookup response.
        """
        data = await self.get("/", params={"i": imdb_id, "plot": self.plot})
        try:
            return OMDbTitle.model_validate(data)
        except ValidationError as e:
            raise APIError(f"Unexpected OMDb response: {e}") from e


def get_omdb_client_factory() -> Callable[..., OMDbClient]:
    """Return the callable used to build OMDb clients.

    Can be used as a FastAPI dependency; tests override it to inject fakes.
    """
    return OMDbClient
