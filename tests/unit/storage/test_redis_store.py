"""Unit tests for RedisStore against a mocked client."""

import json

import pytest

from nscache.core.models import CacheEntry
from nscache.storage.redis_adapter import RedisStore


async def _aiter(items):
    for item in items:
        yield item


@pytest.mark.asyncio
class TestRedisStore:
    """Test RedisStore serialization and key enumeration."""

    async def test_set_writes_json(self, mock_redis_client):
        store = RedisStore(client=mock_redis_client)

        await store.set("boop-foo", CacheEntry(value={"a": [1, 2]}, expires_at=12.5))

        key, payload = mock_redis_client.set.await_args.args
        assert key == "boop-foo"
        assert json.loads(payload) == {"value": {"a": [1, 2]}, "expires_at": 12.5}

    async def test_get_decodes_json(self, mock_redis_client):
        mock_redis_client.get.return_value = json.dumps({"value": "bar", "expires_at": 3})
        store = RedisStore(client=mock_redis_client)

        assert await store.get("boop-foo") == CacheEntry(value="bar", expires_at=3.0)
        mock_redis_client.get.assert_awaited_once_with("boop-foo")

    async def test_get_accepts_bytes(self, mock_redis_client):
        mock_redis_client.get.return_value = b'{"value": "bar"}'
        store = RedisStore(client=mock_redis_client)
        assert await store.get("boop-foo") == CacheEntry(value="bar")

    async def test_get_missing(self, mock_redis_client):
        store = RedisStore(client=mock_redis_client)
        assert await store.get("boop-foo") is None

    @pytest.mark.parametrize("payload", ["not json", json.dumps(["a list"]), json.dumps({"no": "value"})])
    async def test_get_undecodable_reads_as_absent(self, mock_redis_client, payload, caplog):
        mock_redis_client.get.return_value = payload
        store = RedisStore(client=mock_redis_client)

        with caplog.at_level("WARNING", logger="nscache.storage.redis_adapter"):
            assert await store.get("boop-foo") is None
        assert "undecodable" in caplog.text

    async def test_get_propagates_connection_errors(self, mock_redis_client):
        mock_redis_client.get.side_effect = ConnectionError("down")
        store = RedisStore(client=mock_redis_client)
        with pytest.raises(ConnectionError):
            await store.get("boop-foo")

    async def test_delete(self, mock_redis_client):
        store = RedisStore(client=mock_redis_client)
        await store.delete("boop-foo")
        mock_redis_client.delete.assert_awaited_once_with("boop-foo")

    async def test_keys_scans_whole_database(self, mock_redis_client):
        calls = []

        def scan_iter(**kwargs):
            calls.append(kwargs)
            return _aiter(["boop-a", b"boop-b", "other-c"])

        mock_redis_client.scan_iter = scan_iter
        store = RedisStore(client=mock_redis_client, scan_count=50)

        assert await store.keys() == ["boop-a", "boop-b", "other-c"]
        assert calls == [{"count": 50}]

    async def test_is_healthy(self, mock_redis_client):
        store = RedisStore(client=mock_redis_client)
        assert await store.is_healthy() is True

        mock_redis_client.ping.side_effect = ConnectionError("down")
        assert await store.is_healthy() is False


def test_missing_redis_library_names_installable_package(monkeypatch):
    monkeypatch.setattr("nscache.storage.redis_adapter._redis_lib", None)
    with pytest.raises(ImportError, match=r"pip install redis$"):
        RedisStore()
