"""Unit tests for RedisClient

Tests connection management with a mocked redis.asyncio client.
"""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from auth_dispatch.infrastructure.redis.client import RedisClient


@pytest.fixture
def mock_redis():
    redis = AsyncMock()
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


@pytest.mark.unit
class TestRedisClient:
    """Test connect/disconnect/health"""

    def test_get_client_requires_connection(self):
        with pytest.raises(RuntimeError, match="not connected"):
            RedisClient("redis://localhost:6379/0").get_client()

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, mock_redis):
        with patch("auth_dispatch.infrastructure.redis.client.redis.from_url", return_value=mock_redis) as from_url:
            client = RedisClient("redis://cache:6379/1")
            await client.connect()

            from_url.assert_called_once_with("redis://cache:6379/1", decode_responses=True)
            assert client.get_client() is mock_redis

            await client.disconnect()

        mock_redis.aclose.assert_awaited_once()
        with pytest.raises(RuntimeError):
            client.get_client()

    @pytest.mark.asyncio
    async def test_health_check(self, mock_redis):
        with patch("auth_dispatch.infrastructure.redis.client.redis.from_url", return_value=mock_redis):
            client = RedisClient("redis://cache:6379/1")
            assert await client.health_check() is False

            await client.connect()
            assert await client.health_check() is True

            mock_redis.ping.side_effect = RedisConnectionError("gone")
            assert await client.health_check() is False
