from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from app.core import database
from app.core.database import get_db


@pytest.mark.unit
class TestGetDb:
    """Session dependency behaviour when the request fails."""

    @pytest.fixture
    def session(self, monkeypatch):
        session = AsyncMock()
        session_factory = MagicMock()
        session_factory.return_value.__aenter__.return_value = session
        session_factory.return_value.__aexit__.return_value = False
        monkeypatch.setattr(database, "AsyncSessionLocal", session_factory)
        return session

    async def test_http_error_does_not_roll_back(self, session):
        dependency = get_db()
        assert await dependency.__anext__() is session

        with pytest.raises(HTTPException):
            await dependency.athrow(HTTPException(status_code=404, detail="Note not found"))

        session.rollback.assert_not_awaited()
        session.close.assert_awaited_once()

    async def test_unexpected_error_rolls_back(self, session):
        dependency = get_db()
        await dependency.__anext__()

        with pytest.raises(RuntimeError):
            await dependency.athrow(RuntimeError("connection lost"))

        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()
