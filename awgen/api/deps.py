from __future__ import annotations

from collections.abc import Generator

import redis

from awgen.infra.redis_client import create_redis
from awgen.settings import GameSettings, RedisSettingsBackend


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def settings_for(r: redis.Redis) -> GameSettings:
    # A fresh cache per request; the hash is the source of truth across processes.
    return GameSettings(RedisSettingsBackend(r=r))
