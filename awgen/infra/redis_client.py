from __future__ import annotations

import os

import redis

from awgen.packets.sockets import Channel


def get_redis_url() -> str:
    return os.environ.get("REDIS_URL", "redis://localhost:6379/0")


def get_channel() -> Channel:
    return Channel(name=os.environ.get("AWGEN_CHANNEL", "default"))


def create_redis() -> redis.Redis:
    # decode_responses=True => strings in/out instead of bytes
    return redis.Redis.from_url(get_redis_url(), decode_responses=True)
