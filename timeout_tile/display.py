"""
Tile display state.

Built fresh on every refresh and handed to the host for rendering.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class TileIcon(Enum):
    """Icon variant shown on the tile."""
    TIMEOUT_ON = "ic_tile_timeout_on"
    TIMEOUT_OFF = "ic_tile_timeout_off"


@dataclass(frozen=True)
class TileState:
    """What the host shows for the tile."""
    label: str
    subtitle: str
    active: bool
    icon: TileIcon

    def __str__(self) -> str:
        marker = "on" if self.active else "off"
        return f"{self.label}: {self.subtitle} [{marker}]"


# Host-side callback that renders a TileState
Display = Callable[[TileState], None]


def print_tile(state: TileState) -> None:
    """Render the tile on stdout."""
    print(f"[tile] {state}")
