from __future__ import annotations

import asyncio
import logging
from typing import Any

from awgen.core.events import EventBus, EventHandler, EventKey
from awgen.core.game_events import ReadyEvent, ShutdownEvent
from awgen.lifecycle import GameLifecycle
from awgen.packets.handler import handle_packet
from awgen.packets.models import InitPacket, ShutdownPacket
from awgen.packets.sockets import ClientPacket, PacketTransport
from awgen.settings import GameSettings

logger = logging.getLogger(__name__)


GAME_NAME_KEY = "game_name"
GAME_VERSION_KEY = "game_version"

DEFAULT_TITLE = "Awgen Game Engine"
DEFAULT_VERSION = "0.0.1"


class Game:
    """A running game script: settings, an event bus, and the client packet loop.

    Create one per session and pass it to whatever needs to publish or subscribe.
    Handlers may be registered with `on`/`once` before `start` is called.
    """

    def __init__(self, *, transport: PacketTransport, settings: GameSettings, events: EventBus | None = None) -> None:
        self.transport = transport
        self.settings = settings
        self.events = events or EventBus()
        self.lifecycle = GameLifecycle()
        self._alerted_client = False
        self._stop_requested = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self.lifecycle.is_running

    def _require_started(self) -> None:
        if not self.lifecycle.has_started:
            raise RuntimeError("Game has not been started. Call Game.start() first.")

    async def start(self, title: str, version: str) -> None:
        """Initialize the client and run the packet loop until shutdown.

        Sends the init packet, emits "ready", then handles client packets one at a
        time. Any error while fetching or handling a packet is logged and shuts the
        game down.
        """

        if self.lifecycle.has_started:
            logger.warning("Cannot initialize the game more than once.")
            return

        self.lifecycle.start()
        self.settings.set_setting(GAME_NAME_KEY, title)
        self.settings.set_setting(GAME_VERSION_KEY, version)
        self.transport.send_packets(InitPacket(name=title, version=version))

        try:
            await self.emit("ready", ReadyEvent(title=title, version=version))

            while self.is_running:
                packet = await self._next_packet()
                if packet is None:
                    break
                logger.debug("Received packet: %s", packet.type)
                await handle_packet(self, packet)
        except Exception:
            logger.exception("Script host error")
            if self.is_running:
                self.shutdown()

        await self.emit("shutdown", ShutdownEvent(alert_client=self._alerted_client))

    def shutdown(self, alert_client: bool = True) -> None:
        """Stop the packet loop, optionally telling the client first."""

        self._require_started()

        if not self.is_running:
            logger.warning("Game is already shutting down.")
            return

        logger.info("Shutting down...")
        if alert_client:
            self.transport.send_packets(ShutdownPacket())
        self._alerted_client = alert_client
        self.lifecycle.shutdown()
        self._stop_requested.set()

    async def _next_packet(self) -> ClientPacket | None:
        """Fetch the next client packet, or None once shutdown has been requested."""

        fetch = asyncio.ensure_future(self.transport.fetch_packet())
        stop = asyncio.ensure_future(self._stop_requested.wait())
        try:
            await asyncio.wait({fetch, stop}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            fetch.cancel()
            stop.cancel()

        if self._stop_requested.is_set():
            if fetch.done() and not fetch.cancelled() and fetch.exception() is None:
                logger.debug("Dropping packet received during shutdown: %s", fetch.result().type)
            return None

        return fetch.result()

    @property
    def title(self) -> str:
        self._require_started()
        return self.settings.get_setting(GAME_NAME_KEY, DEFAULT_TITLE) or DEFAULT_TITLE

    @title.setter
    def title(self, title: str) -> None:
        self._require_started()
        self.settings.set_setting(GAME_NAME_KEY, title)

    @property
    def version(self) -> str:
        self._require_started()
        return self.settings.get_setting(GAME_VERSION_KEY, DEFAULT_VERSION) or DEFAULT_VERSION

    @version.setter
    def version(self, version: str) -> None:
        self._require_started()
        self.settings.set_setting(GAME_VERSION_KEY, version)

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        self._require_started()
        return self.settings.get_setting(key, default)

    def set_setting(self, key: str, value: str | None) -> None:
        self._require_started()
        self.settings.set_setting(key, value)

    # ---- events ----

    async def emit(self, event: EventKey, *args: Any) -> None:
        self._require_started()
        await self.events.emit(event, *args)

    def on(self, event: EventKey, handler: EventHandler) -> None:
        self.events.on(event, handler)

    def once(self, event: EventKey, handler: EventHandler) -> None:
        self.events.once(event, handler)

    async def wait_for(self, event: EventKey) -> tuple[Any, ...]:
        self._require_started()
        return await self.events.wait_for(event)

    def remove_listener(self, handler: EventHandler) -> None:
        self.events.remove_listener(handler)
