# tests/test_database.py

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, Mock, patch
from sqlalchemy.exc import OperationalError

from leadgen import database
from leadgen.database import async_database_url, check_connection, get_db


def async_context(value):
    cm = MagicMock()
    cm.__aenter__.return_value = value
    cm.__aexit__.return_value = False
    return cm


class TestAsyncDatabaseUrl:

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u:p@db:5432/leadgen", "postgresql+asyncpg://u:p@db:5432/leadgen"),
        ("postgres://u:p@db/leadgen", "postgresql+asyncpg://u:p@db/leadgen"),
        ("postgresql+asyncpg://u:p@db/leadgen", "postgresql+asyncpg://u:p@db/leadgen"),
        ("sqlite+aiosqlite:///leadgen.db", "sqlite+aiosqlite:///leadgen.db"),
    ])
    def test_rewrite(self, url, expected):
        assert async_database_url(url) == expected

    def test_password_containing_scheme_is_untouched(self):
        url = "postgresql+asyncpg://u:postgresql://x@db/leadgen"
        assert async_database_url(url) == url


class TestGetDb:

    @pytest.mark.asyncio
    async def test_yields_session(self):
        session = AsyncMock()

        with patch.object(database, "AsyncSessionLocal", Mock(return_value=async_context(session))):
            sessions = [s async for s in get_db()]

        assert sessions == [session]
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_when_handler_raises(self):
        session = AsyncMock()

        with patch.object(database, "AsyncSessionLocal", Mock(return_value=async_context(session))):
            gen = get_db()
            assert await gen.__anext__() is session

            with pytest.raises(RuntimeError):
                await gen.athrow(RuntimeError("handler failed"))

        session.rollback.assert_awaited_once()


class TestCheckConnection:

    @pytest.mark.asyncio
    async def test_connected(self):
        conn = AsyncMock()
        conn.execute.return_value = Mock(scalar=Mock(return_value=datetime.now(timezone.utc)))
        engine = Mock()
        engine.connect.return_value = async_context(conn)

        with patch.object(database, "engine", engine):
            assert await check_connection() is True

        conn.execute.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConnectionRefusedError("refused"),
        OperationalError("SELECT NOW()", {}, Exception("no such host")),
    ])
    async def test_unreachable_database(self, error):
        engine = Mock()
        engine.connect.side_effect = error

        with patch.object(database, "engine", engine):
            assert await check_connection() is False
