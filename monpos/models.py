"""Data models: Monitor, Rect, directions & alignments, errors."""

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from .utils import round_half_away

__all__ = [
    "Alignment",
    "AlignmentError",
    "Config",
    "ConfigError",
    "CycleError",
    "Direction",
    "DisconnectedError",
    "EmptyConfigError",
    "ExitCode",
    "MalformedDirectiveError",
    "Monitor",
    "MonposError",
    "OverlapError",
    "Rect",
    "UnknownMonitorError",
]


class Direction(StrEnum):
    """Where a monitor sits relative to its reference monitor."""

    ABOVE = "above"
    BELOW = "below"
    LEFT_OF = "left-of"
    RIGHT_OF = "right-of"

    @property
    def is_horizontal(self) -> bool:
        """True for `left-of` and `right-of`."""
        return self in (Direction.LEFT_OF, Direction.RIGHT_OF)

    @property
    def alignments(self) -> tuple["Alignment", ...]:
        """Alignments compatible with this direction."""
        if self.is_horizontal:
            return (Alignment.TOP, Alignment.BOTTOM, Alignment.CENTER)
        return (Alignment.LEFT, Alignment.RIGHT, Alignment.CENTER)


class Alignment(StrEnum):
    """Resolves the axis left unset by a direction."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class Monitor:
    """One monitor of the configuration.

    Attributes:
        width: Physical width in pixels
        height: Physical height in pixels
        scale: Scale factor, logical size is `physical / scale`
        position: Placement directive `"<direction> <monitor>"`, empty for the root
        align: Alignment along the other axis, only meaningful with a position
    """

    width: int
    height: int
    scale: float = 1.0
    position: str = ""
    align: str = ""

    @property
    def scaled_size(self) -> tuple[int, int]:
        """Return the logical (width, height), rounded half away from zero."""
        return round_half_away(self.width / self.scale), round_half_away(self.height / self.scale)

    def __str__(self) -> str:
        dimensions = f"Monitor{{{self.width}x{self.height}@{self.scale:.2f}x"
        if not self.position:
            return dimensions + "}"
        return f"{dimensions} {self.position} align {self.align}}}"


# Monitor name -> monitor, iteration order is the declaration order
Config = dict[str, Monitor]


@dataclass(frozen=True)
class Rect:
    """Placed geometry of a monitor, in logical pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def top_left(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def bottom_right(self) -> tuple[int, int]:
        return (self.right, self.bottom)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def overlaps(self, other: "Rect") -> bool:
        """Return True if both rectangles share some area.

        Rectangles whose edges only touch do not overlap.
        """
        if self.right <= other.left or other.right <= self.left:
            return False
        return not (self.bottom <= other.top or other.bottom <= self.top)

    def as_dict(self) -> dict[str, int]:
        """Return a JSON friendly representation."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"{self.width}x{self.height}+{self.x}+{self.y}"


class ExitCode(IntEnum):
    """Exit codes for the monpos command."""

    SUCCESS = 0
    USAGE_ERROR = 1
    CONFIG_ERROR = 2  # Config file unreadable or invalid
    LAYOUT_ERROR = 3  # Structural or overlap error while computing the layout


class MonposError(Exception):
    """Base class for every monpos error."""


class MalformedDirectiveError(MonposError):
    """A position is not `<direction> <monitor>` or has an unknown direction."""


class AlignmentError(MonposError):
    """An alignment does not fit the direction (or has no direction at all)."""


class UnknownMonitorError(MonposError):
    """A position references a monitor which is not configured."""

    def __init__(self, name: str, reference: str) -> None:
        super().__init__(f"unknown monitor '{reference}' referenced by '{name}'")
        self.name = name
        self.reference = reference


class CycleError(MonposError):
    """Monitors are positioned relative to each other in a loop."""

    def __init__(self, path: list[str]) -> None:
        super().__init__(f"monitor positions form a cycle: {' -> '.join(path)}")
        self.path = path


class DisconnectedError(MonposError):
    """Some monitors are not attached to the root monitor."""

    def __init__(self, root: str, unreachable: list[str]) -> None:
        super().__init__(
            f"all monitors must be connected to one main monitor: {', '.join(unreachable)} not attached to '{root}'"
        )
        self.root = root
        self.unreachable = unreachable


class OverlapError(MonposError):
    """Placed monitors overlap.

    Lists every overlapping pair and keeps the computed positions for diagnostics.
    """

    def __init__(self, pairs: list[tuple[str, str]], positions: dict[str, Rect]) -> None:
        lines = [f"OVERLAP between {a} ({positions[a]}) and {b} ({positions[b]})" for a, b in pairs]
        super().__init__("\n".join(lines))
        self.pairs = pairs
        self.positions = positions


class EmptyConfigError(MonposError):
    """No monitor is defined."""


class ConfigError(MonposError):
    """The configuration file can't be read or doesn't match the schema."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__("\n".join([message, *(errors or [])]))
        self.errors = errors or []
