from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SettingValue(BaseModel):
    key: str
    value: str


class SettingUpdateRequest(BaseModel):
    # null removes the setting.
    value: str | None = Field(..., max_length=4096)


class PacketAccepted(BaseModel):
    channel: str
    stream_id: str


class OutboxEntry(BaseModel):
    id: str
    packet: dict[str, Any]


class OutboxResponse(BaseModel):
    channel: str
    stream: str
    packets: list[OutboxEntry]
