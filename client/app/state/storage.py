"""Durable key-value stores backing the trip selection store."""

import json
import logging
from pathlib import Path
from typing import Protocol

import redis

from client.app.config import Settings

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Synchronous string key-value store."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        ...

    def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""
        ...


class InMemoryKeyValueStore:
    """In-memory implementation of KeyValueStore (tests, ephemeral sessions)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """KeyValueStore persisted as one JSON object on disk.

    Every write rewrites the file, so the file always reflects the mirror.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"[storage] unreadable state file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"[storage] ignoring non-object state file {self._path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, sort_keys=True)
        tmp_path.replace(self._path)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()


class RedisKeyValueStore:
    """Redis-backed KeyValueStore with namespaced keys."""

    def __init__(self, redis_client: redis.Redis, prefix: str = "travelmind:") -> None:
        """Initialize store.

        Args:
            redis_client: Redis client
            prefix: Namespace prepended to every key
        """
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        value = self._redis.get(self._key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._redis.set(self._key(key), value)

    def remove(self, key: str) -> None:
        self._redis.delete(self._key(key))


def get_key_value_store(settings: Settings) -> KeyValueStore:
    """Build the store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()

    if settings.storage_backend == "redis":
        if not settings.redis_url:
            raise ValueError("storage_backend=redis requires REDIS_URL")
        client = redis.Redis.from_url(settings.redis_url)
        return RedisKeyValueStore(client, prefix=settings.redis_key_prefix)

    return JsonFileKeyValueStore(settings.storage_path)
