from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# game://my/path/asset.ext or editor://my/path/asset.ext
ASSET_PATH_PATTERN = r"^(game|editor)://.+"

AssetPath = Annotated[str, Field(pattern=ASSET_PATH_PATTERN)]


class _Packet(BaseModel):
    # Wire names are camelCase; Python code may use either.
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ---- script host -> client ----


class InitPacket(_Packet):
    """Initializes the engine client with the game name and version.

    Must be the first packet sent; the client ignores (and warns about) repeats.
    """

    type: Literal["init"] = "init"
    name: str
    version: str


class ShutdownPacket(_Packet):
    type: Literal["shutdown"] = "shutdown"


class ImportAssetPacket(_Packet):
    """Ask the client to import a file on disk into the game assets."""

    type: Literal["importAsset"] = "importAsset"
    file: str
    asset_path: AssetPath = Field(..., alias="assetPath")


class CreateTilesetPacket(_Packet):
    type: Literal["createTileset"] = "createTileset"
    tile_paths: list[AssetPath] = Field(..., alias="tilePaths", min_length=1)
    output_path: AssetPath = Field(..., alias="outputPath")


PacketToClient = Annotated[
    InitPacket | ShutdownPacket | ImportAssetPacket | CreateTilesetPacket,
    Field(discriminator="type"),
]


# ---- client -> script host ----


class ClientShutdownPacket(_Packet):
    type: Literal["shutdown"] = "shutdown"


class FileDropPacket(_Packet):
    """The user dropped a file into the game window."""

    type: Literal["fileDrop"] = "fileDrop"
    path: str = Field(..., min_length=1)


PacketFromClient = Annotated[
    ClientShutdownPacket | FileDropPacket,
    Field(discriminator="type"),
]


_client_packet_adapter: TypeAdapter[ClientShutdownPacket | FileDropPacket] = TypeAdapter(PacketFromClient)
_host_packet_adapter: TypeAdapter[InitPacket | ShutdownPacket | ImportAssetPacket | CreateTilesetPacket] = TypeAdapter(
    PacketToClient
)


def parse_client_packet(raw: str | bytes | dict[str, Any]) -> ClientShutdownPacket | FileDropPacket:
    """Validate a packet received from the client.

    Raises pydantic.ValidationError for unknown `type` tags or malformed fields.
    """

    if isinstance(raw, dict):
        return _client_packet_adapter.validate_python(raw)
    return _client_packet_adapter.validate_json(raw)


def parse_host_packet(raw: str | bytes | dict[str, Any]) -> InitPacket | ShutdownPacket | ImportAssetPacket | CreateTilesetPacket:
    if isinstance(raw, dict):
        return _host_packet_adapter.validate_python(raw)
    return _host_packet_adapter.validate_json(raw)


def dump_packet(packet: BaseModel) -> str:
    return packet.model_dump_json(by_alias=True)
