from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest
from fastapi.testclient import TestClient

from awgen.game import Game
from awgen.packets.sockets import MemoryPacketTransport
from awgen.settings import GameSettings, MemorySettingsBackend


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (REDIS_URL, AWGEN_CHANNEL).

    In CI we don't auto-load `.env`; opt in with AWGEN_LOAD_DOTENV_FOR_TESTS=1.
    """

    if os.environ.get("CI") and os.environ.get("AWGEN_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def client_and_redis(r: fakeredis.FakeRedis) -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to an in-memory fakeredis."""

    from awgen.api.deps import get_redis
    from awgen.main import app

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()


@pytest.fixture()
def transport() -> MemoryPacketTransport:
    return MemoryPacketTransport()


@pytest.fixture()
def settings_backend() -> MemorySettingsBackend:
    return MemorySettingsBackend()


@pytest.fixture()
def game(transport: MemoryPacketTransport, settings_backend: MemorySettingsBackend) -> Game:
    return Game(transport=transport, settings=GameSettings(settings_backend))
