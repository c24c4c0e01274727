"""Unit tests for the database health probe."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from familytree.adapters.health.database import DatabaseHealthProbe
from familytree.schemas.health import CheckStatus


class TestDatabaseHealthProbe:
    @pytest.mark.asyncio
    async def test_returns_up_against_sqlite(self):
        engine = create_async_engine("sqlite+aiosqlite://")
        probe = DatabaseHealthProbe(engine)

        try:
            result = await probe.check()
        finally:
            await engine.dispose()

        assert probe.name == "database"
        assert result.status == CheckStatus.up
        assert result.latency_ms >= 0

    @pytest.mark.asyncio
    async def test_propagates_connection_error(self):
        engine = MagicMock()
        cm = AsyncMock()
        cm.__aenter__.side_effect = ConnectionRefusedError()
        engine.connect.return_value = cm

        with pytest.raises(ConnectionRefusedError):
            await DatabaseHealthProbe(engine).check()
