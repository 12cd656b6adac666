"""
Test Redis Cache Module
"""
import pytest
from unittest.mock import AsyncMock, patch
from app.core.cache import RedisCache, cache, cache_key, cache_response

@pytest.fixture
def mock_redis():
    with patch("redis.asyncio.from_url") as mock:
        yield mock

@pytest.mark.asyncio
async def test_redis_connection(mock_redis):
    RedisCache._instance = None
    redis_cache = RedisCache()

    # Mock client
    mock_client = AsyncMock()
    mock_redis.return_value = mock_client

    await redis_cache.connect()

    mock_redis.assert_called_once()
    mock_client.ping.assert_awaited_once()
    assert redis_cache.client == mock_client

    await redis_cache.close()
    mock_client.close.assert_awaited_once()

@pytest.mark.asyncio
async def test_unreachable_redis_degrades(mock_redis):
    RedisCache._instance = None
    redis_cache = RedisCache()
    mock_client = AsyncMock()
    mock_client.ping.side_effect = ConnectionError("refused")
    mock_redis.return_value = mock_client

    await redis_cache.connect()

    assert redis_cache.client is None
    assert await redis_cache.get("anything") is None
    await redis_cache.set("anything", [1])

@pytest.mark.asyncio
async def test_redis_get_set(mock_redis):
    # Reset singleton
    RedisCache._instance = None
    redis_cache = RedisCache()
    redis_cache.client = AsyncMock()

    # Test Set
    await redis_cache.set("test_key", {"foo": "bar"}, ttl=60)
    redis_cache.client.setex.assert_awaited_once_with("test_key", 60, '{"foo": "bar"}')

    # Test Get
    redis_cache.client.get.return_value = '{"foo": "bar"}'
    result = await redis_cache.get("test_key")
    assert result == {"foo": "bar"}

    # Test Miss
    redis_cache.client.get.return_value = None
    result = await redis_cache.get("missing")
    assert result is None

@pytest.mark.asyncio
async def test_redis_errors_are_cache_misses(mock_redis):
    RedisCache._instance = None
    redis_cache = RedisCache()
    redis_cache.client = AsyncMock()
    redis_cache.client.get.side_effect = TimeoutError("slow")
    assert await redis_cache.get("key") is None

def test_cache_key_skips_sessions_and_none():
    key = cache_key("api:areas", "list", (), {"store": object(), "area_type": None}, skip=("store",))
    assert key == "api:areas:list::"
    key = cache_key("api:areas", "list", (), {"area_type": "RMA", "b": 1})
    assert key == "api:areas:list::area_type=RMA:b=1"

@pytest.mark.asyncio
async def test_cache_response_decorator():
    calls = []

    @cache_response(ttl=30, key_prefix="test")
    async def expensive(area_type=None, db=None):
        calls.append(area_type)
        return [area_type]

    with patch.object(cache, "get", AsyncMock(return_value=None)) as get, \
         patch.object(cache, "set", AsyncMock()) as set_:
        assert await expensive(area_type="RMA", db="session") == ["RMA"]
        get.assert_awaited_once_with("test:expensive::area_type=RMA")
        set_.assert_awaited_once_with("test:expensive::area_type=RMA", ["RMA"], 30)

    with patch.object(cache, "get", AsyncMock(return_value=["cached"])):
        assert await expensive(area_type="RMA", db="session") == ["cached"]

    assert calls == ["RMA"]
