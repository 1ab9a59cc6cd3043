"""Tests for the per-request session dependency."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.database import get_db


@pytest.fixture
def mock_session():
    """Patch the session factory to hand out a mock session."""
    session = AsyncMock(spec=AsyncSession)
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    with patch("movie_catalog.database.session_factory", factory):
        yield session


async def test_get_db_commits_on_success(mock_session: AsyncMock) -> None:
    """Test that the session is committed once the request is done."""
    dependency = get_db()
    session = await dependency.__anext__()
    assert session is mock_session

    with pytest.raises(StopAsyncIteration):
        await dependency.__anext__()

    mock_session.commit.assert_awaited_once()
    mock_session.rollback.assert_not_awaited()


async def test_get_db_rolls_back_on_error(mock_session: AsyncMock) -> None:
    """Test that a failing request is rolled back and the error re-raised."""
    dependency = get_db()
    await dependency.__anext__()

    with pytest.raises(RuntimeError, match="boom"):
        await dependency.athrow(RuntimeError("boom"))

    mock_session.rollback.assert_awaited_once()
    mock_session.commit.assert_not_awaited()
