"""
PayDesk HR - Session Dependency Tests
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from paydesk.database import get_async_session


def session_factory(session):
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


class TestGetAsyncSession:

    @pytest.mark.asyncio
    async def test_failed_request_rolls_back(self, mock_db):
        mock_db.close = AsyncMock()

        with patch("paydesk.database.async_session_maker", session_factory(mock_db)):
            sessions = get_async_session()
            session = await sessions.__anext__()

            with pytest.raises(RuntimeError):
                await sessions.athrow(RuntimeError("handler failed"))

        assert session is mock_db
        mock_db.rollback.assert_awaited_once()
        mock_db.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_successful_request_only_closes(self, mock_db):
        mock_db.close = AsyncMock()

        with patch("paydesk.database.async_session_maker", session_factory(mock_db)):
            sessions = get_async_session()
            await sessions.__anext__()

            with pytest.raises(StopAsyncIteration):
                await sessions.__anext__()

        mock_db.rollback.assert_not_awaited()
        mock_db.close.assert_awaited_once()
