from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from awgen.core.game_events import FileDropEvent
from awgen.packets.models import ClientShutdownPacket, FileDropPacket, ImportAssetPacket

if TYPE_CHECKING:
    from awgen.game import Game

logger = logging.getLogger(__name__)


def tile_asset_path_for(path: str) -> str:
    """Map a dropped file to its editor tile asset path (`editor://tiles/<basename>`)."""

    filename = re.sub(r"^.*[\\/]", "", path)
    return f"editor://tiles/{filename}"


async def handle_packet(game: Game, packet: ClientShutdownPacket | FileDropPacket) -> None:
    """Process one packet received from the client.

    Can also be called directly to simulate a client packet.
    """

    match packet:
        case ClientShutdownPacket():
            game.shutdown(alert_client=False)

        case FileDropPacket(path=path):
            logger.info("File dropped: %s", path)
            asset_path = tile_asset_path_for(path)
            game.transport.send_packets(ImportAssetPacket(file=path, asset_path=asset_path))
            await game.emit("file_drop", FileDropEvent(path=path, asset_path=asset_path))
