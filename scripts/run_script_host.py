"""Run the sample game script against a Redis-backed engine client.

Contract
- Inputs: client packets on the `awgen:<channel>:from_client` stream.
- Outputs: host packets on `awgen:<channel>:to_client`, settings in the `awgen:settings` hash.
- Config: REDIS_URL and AWGEN_CHANNEL, optionally from a repo `.env`.

Usage:
    uv run python scripts/run_script_host.py
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from awgen.game import Game
from awgen.infra.redis_client import create_redis, get_channel
from awgen.packets.sockets import RedisPacketTransport
from awgen.sample import main
from awgen.settings import GameSettings, RedisSettingsBackend


def run() -> None:
    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)

    logging.basicConfig(level=logging.DEBUG)

    r = create_redis()
    try:
        game = Game(
            transport=RedisPacketTransport(r=r, channel=get_channel()),
            settings=GameSettings(RedisSettingsBackend(r=r)),
        )
        asyncio.run(main(game))
    finally:
        r.close()


if __name__ == "__main__":
    run()
