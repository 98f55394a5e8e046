from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Protocol, cast

import redis
from pydantic import BaseModel

from awgen.packets.models import (
    ClientShutdownPacket,
    FileDropPacket,
    dump_packet,
    parse_client_packet,
    parse_host_packet,
)

ClientPacket = ClientShutdownPacket | FileDropPacket

PACKET_FIELD = "packet"


class PacketTransport(Protocol):
    """Boundary between the script host and the engine client."""

    async def fetch_packet(self) -> ClientPacket:
        """Suspend until the next packet from the client is available."""
        ...

    def send_packets(self, *packets: BaseModel) -> None:
        """Enqueue packets for the client, in order. Never blocks."""
        ...


@dataclass(frozen=True, slots=True)
class Channel:
    name: str = "default"

    @property
    def inbound_key(self) -> str:
        return f"awgen:{self.name}:from_client"

    @property
    def outbound_key(self) -> str:
        return f"awgen:{self.name}:to_client"


def push_client_packet(*, r: redis.Redis, channel: Channel, packet: BaseModel) -> str:
    """Append a packet to the client->host stream (what the engine client would do)."""

    stream_id = r.xadd(channel.inbound_key, {PACKET_FIELD: dump_packet(packet)})
    return cast(str, stream_id)


def read_outbox(*, r: redis.Redis, channel: Channel, start: str = "-", count: int = 50) -> list[tuple[str, BaseModel]]:
    """Read host->client packets, oldest first."""

    entries = r.xrange(channel.outbound_key, min=start, max="+", count=count)
    return [(cast(str, mid), parse_host_packet(fields[PACKET_FIELD])) for mid, fields in entries]


class RedisPacketTransport:
    """Packet transport over a pair of Redis Streams.

    Each entry carries one JSON packet in the `packet` field. Inbound entries are
    read strictly in stream order. The default start id "$" means "entries added
    after this transport was built"; start at "0" to replay the whole stream.
    """

    def __init__(
        self,
        *,
        r: redis.Redis,
        channel: Channel | None = None,
        poll_interval_ms: int = 50,
        start_id: str = "$",
    ) -> None:
        self._r = r
        self.channel = channel or Channel()
        self.poll_interval_ms = poll_interval_ms
        if start_id == "$":
            # Pin "$" to the current tail now; packets pushed before the first fetch are kept.
            tail = r.xrevrange(self.channel.inbound_key, count=1)
            start_id = cast(str, tail[0][0]) if tail else "0-0"
        self._last_id = start_id
        self._buffer: list[tuple[str, dict[str, str]]] = []

    async def fetch_packet(self) -> ClientPacket:
        while not self._buffer:
            # redis-py is synchronous; poll without BLOCK and sleep on the event loop instead.
            resp = self._r.xread({self.channel.inbound_key: self._last_id}, count=10)
            for _stream, messages in resp or []:
                self._buffer.extend(messages)
            if not self._buffer:
                await asyncio.sleep(self.poll_interval_ms / 1000)

        msg_id, fields = self._buffer.pop(0)
        self._last_id = msg_id
        return parse_client_packet(fields[PACKET_FIELD])

    def send_packets(self, *packets: BaseModel) -> None:
        for packet in packets:
            self._r.xadd(self.channel.outbound_key, {PACKET_FIELD: dump_packet(packet)})


@dataclass(slots=True)
class MemoryPacketTransport:
    """In-process transport: an asyncio queue in, a list out."""

    inbound: asyncio.Queue[ClientPacket] = field(default_factory=asyncio.Queue)
    sent: list[BaseModel] = field(default_factory=list)

    async def fetch_packet(self) -> ClientPacket:
        return await self.inbound.get()

    def send_packets(self, *packets: BaseModel) -> None:
        self.sent.extend(packets)

    def push(self, packet: ClientPacket) -> None:
        self.inbound.put_nowait(packet)
