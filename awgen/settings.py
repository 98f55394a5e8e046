from __future__ import annotations

from typing import Protocol, cast

import redis


SETTINGS_HASH_KEY = "awgen:settings"


class SettingsBackend(Protocol):
    def get_setting(self, key: str) -> str | None: ...

    def set_setting(self, key: str, value: str | None) -> None: ...


class RedisSettingsBackend:
    """Settings persisted as fields of a single Redis hash."""

    def __init__(self, *, r: redis.Redis, hash_key: str = SETTINGS_HASH_KEY) -> None:
        self._r = r
        self.hash_key = hash_key

    def get_setting(self, key: str) -> str | None:
        return cast(str | None, self._r.hget(self.hash_key, key))

    def set_setting(self, key: str, value: str | None) -> None:
        if value is None:
            self._r.hdel(self.hash_key, key)
        else:
            self._r.hset(self.hash_key, key, value)


class MemorySettingsBackend:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get_setting(self, key: str) -> str | None:
        return self.values.get(key)

    def set_setting(self, key: str, value: str | None) -> None:
        if value is None:
            self.values.pop(key, None)
        else:
            self.values[key] = value


class GameSettings:
    """Read-through cache in front of a settings backend.

    Values read once are served from memory afterwards; writes go to the backend
    first and then update (or evict) the cached entry.
    """

    def __init__(self, backend: SettingsBackend) -> None:
        self._backend = backend
        self._cache: dict[str, str] = {}

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        """Return the stored value for `key`.

        If it is unset and `default` is given, the default is saved and returned.
        """

        if key in self._cache:
            return self._cache[key]

        value = self._backend.get_setting(key)

        if value is None and default is not None:
            self.set_setting(key, default)
            return default

        if value is not None:
            self._cache[key] = value

        return value

    def set_setting(self, key: str, value: str | None) -> None:
        self._backend.set_setting(key, value)

        if value is None:
            self._cache.pop(key, None)
        else:
            self._cache[key] = value
