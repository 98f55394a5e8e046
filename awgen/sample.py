from __future__ import annotations

import logging

from awgen.core.game_events import ReadyEvent
from awgen.game import Game
from awgen.packets.models import CreateTilesetPacket

logger = logging.getLogger(__name__)

SAMPLE_TILES = ["editor://tiles/grass.png", "editor://tiles/dirt.png"]
SAMPLE_TILESET = "game://tilesets/terrain.tiles"


def register_sample_handlers(game: Game) -> None:
    """Build the sample terrain tileset as soon as the game is ready."""

    async def _on_ready(event: ReadyEvent) -> None:
        logger.info("Game is ready! (%s %s)", event.title, event.version)
        game.transport.send_packets(CreateTilesetPacket(tile_paths=SAMPLE_TILES, output_path=SAMPLE_TILESET))

    game.once("ready", _on_ready)


async def main(game: Game) -> None:
    register_sample_handlers(game)
    await game.start("Awgen Game Engine", "0.0.1")
