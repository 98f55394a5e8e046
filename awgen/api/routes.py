from __future__ import annotations

from typing import Any

import redis
from fastapi import APIRouter, Depends, HTTPException, Response, status

from awgen.api.deps import get_redis, settings_for
from awgen.api.models import OutboxEntry, OutboxResponse, PacketAccepted, SettingUpdateRequest, SettingValue
from awgen.packets.models import parse_client_packet
from awgen.packets.sockets import Channel, push_client_packet, read_outbox

router = APIRouter()


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/settings/{key}", response_model=SettingValue)
async def get_setting_route(key: str, r: redis.Redis = Depends(get_redis)) -> SettingValue:
    value = settings_for(r).get_setting(key)
    if value is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Setting not found")
    return SettingValue(key=key, value=value)


@router.put("/settings/{key}", response_model=SettingValue | None)
async def put_setting_route(
    key: str,
    payload: SettingUpdateRequest,
    r: redis.Redis = Depends(get_redis),
) -> SettingValue | None:
    settings_for(r).set_setting(key, payload.value)
    if payload.value is None:
        return None
    return SettingValue(key=key, value=payload.value)


@router.delete("/settings/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_setting_route(key: str, r: redis.Redis = Depends(get_redis)) -> Response:
    settings_for(r).set_setting(key, None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/channels/{channel}/packets", response_model=PacketAccepted, status_code=status.HTTP_202_ACCEPTED)
async def post_client_packet_route(
    channel: str,
    body: dict[str, Any],
    r: redis.Redis = Depends(get_redis),
) -> PacketAccepted:
    """Dev endpoint: inject a packet as if the engine client had sent it."""

    try:
        packet = parse_client_packet(body)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    stream_id = push_client_packet(r=r, channel=Channel(name=channel), packet=packet)
    return PacketAccepted(channel=channel, stream_id=stream_id)


@router.get("/channels/{channel}/outbox", response_model=OutboxResponse)
async def get_outbox_route(
    channel: str,
    count: int = 50,
    start: str = "-",
    r: redis.Redis = Depends(get_redis),
) -> OutboxResponse:
    """Debug endpoint: read the packets the script host sent to the client."""

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    ch = Channel(name=channel)
    try:
        entries = read_outbox(r=r, channel=ch, start=start, count=count)
    except redis.ResponseError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    packets = [OutboxEntry(id=mid, packet=p.model_dump(by_alias=True)) for mid, p in entries]
    return OutboxResponse(channel=channel, stream=ch.outbound_key, packets=packets)
