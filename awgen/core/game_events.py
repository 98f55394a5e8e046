from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

GameEventName = Literal[
    "ready",
    "file_drop",
    "shutdown",
]


@dataclass(frozen=True, slots=True)
class ReadyEvent:
    """Emitted once the init packet has been sent and settings are seeded."""

    title: str
    version: str
    type: Literal["ready"] = "ready"


@dataclass(frozen=True, slots=True)
class FileDropEvent:
    path: str
    asset_path: str
    type: Literal["file_drop"] = "file_drop"


@dataclass(frozen=True, slots=True)
class ShutdownEvent:
    # False when the client itself asked us to stop.
    alert_client: bool
    type: Literal["shutdown"] = "shutdown"


GameEvent = ReadyEvent | FileDropEvent | ShutdownEvent
