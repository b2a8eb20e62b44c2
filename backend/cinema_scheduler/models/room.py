from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoomSize(str, Enum):
    small = "SMALL"
    medium = "MEDIUM"
    large = "LARGE"


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    size: RoomSize
    seats: int

    def __post_init__(self) -> None:
        if self.seats <= 0:
            raise ValueError(f"Room {self.id} must have at least one seat")
