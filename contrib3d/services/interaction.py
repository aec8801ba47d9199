from dataclasses import dataclass
from datetime import date
from enum import Enum


HIGHLIGHT_INTENSITY = 0.5
NO_EMISSION = ("#000000", 0.0)


class HoverState(str, Enum):
    IDLE = "idle"
    HOVERED = "hovered"


@dataclass(frozen=True)
class Tooltip:
    count: int
    date: date

    @property
    def text(self) -> str:
        return f"{self.count} contributions\n{self.date.isoformat()}"


class BarHoverState:
    """Hover state owned by a single rendered bar.

    Only pointer events change the state. Nothing here reaches back into the
    dataset, the layout or the encoding.
    """

    def __init__(self, count: int, day: date, color: str) -> None:
        self.count = count
        self.day = day
        self.color = color
        self.state = HoverState.IDLE

    @property
    def hovered(self) -> bool:
        return self.state is HoverState.HOVERED

    def pointer_enter(self) -> None:
        self.state = HoverState.HOVERED

    def pointer_leave(self) -> None:
        self.state = HoverState.IDLE

    @property
    def tooltip(self) -> Tooltip | None:
        if not self.hovered:
            return None
        return Tooltip(count=self.count, date=self.day)

    @property
    def emissive(self) -> tuple[str, float]:
        """Return the emissive color and intensity for the bar material."""

        if not self.hovered:
            return NO_EMISSION
        return self.color, HIGHLIGHT_INTENSITY
