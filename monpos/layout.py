"""Layout positioning logic."""

from .logging_setup import get_logger
from .models import Alignment, AlignmentError, Config, Direction, Monitor, OverlapError, Rect
from .position import split_position
from .rules import parse_direction
from .utils import round_div

__all__ = ["find_overlaps", "generate_positions", "place_monitor", "scaled_dims"]

layout_logger = get_logger("monpos.layout")


def scaled_dims(mon: Monitor) -> tuple[int, int]:
    """Return the logical dimensions of the monitor.

    Args:
        mon: The monitor

    Returns:
        tuple[int, int]: The (width, height), physical size divided by the scale
    """
    return mon.scaled_size


def _align_vertically(ref: Rect, mon_h: int, align: str) -> int:
    """Return the y of a monitor placed left or right of `ref`."""
    match align:
        case Alignment.TOP:
            return ref.top
        case Alignment.BOTTOM:
            return ref.bottom - mon_h
        case Alignment.CENTER | "":
            return ref.top - round_div(mon_h - ref.height, 2)
    msg = f"alignment '{align}' can't be used beside a monitor, use 'top', 'bottom' or 'center'"
    raise AlignmentError(msg)


def _align_horizontally(ref: Rect, mon_w: int, align: str) -> int:
    """Return the x of a monitor placed above or below `ref`."""
    match align:
        case Alignment.LEFT:
            return ref.left
        case Alignment.RIGHT:
            return ref.right - mon_w
        case Alignment.CENTER | "":
            return ref.left - round_div(mon_w - ref.width, 2)
    msg = f"alignment '{align}' can't be used above or below a monitor, use 'left', 'right' or 'center'"
    raise AlignmentError(msg)


def place_monitor(ref: Rect, mon_dim: tuple[int, int], direction: Direction, align: str) -> Rect:
    """Compute the rectangle of a monitor relative to a reference monitor.

    Args:
        ref: The rectangle of the reference monitor
        mon_dim: The (width, height) of the monitor to place
        direction: Side of `ref` the monitor goes to
        align: How to align the monitor along the other axis, empty means "center"

    Returns:
        Rect: The placed monitor

    Raises:
        AlignmentError: If `align` doesn't fit `direction`
    """
    mon_w, mon_h = mon_dim
    match direction:
        case Direction.LEFT_OF:
            # our right edge touches their left edge
            x = ref.left - mon_w
            y = _align_vertically(ref, mon_h, align)
        case Direction.RIGHT_OF:
            x = ref.right
            y = _align_vertically(ref, mon_h, align)
        case Direction.ABOVE:
            y = ref.top - mon_h
            x = _align_horizontally(ref, mon_w, align)
        case Direction.BELOW:
            y = ref.bottom
            x = _align_horizontally(ref, mon_w, align)
    return Rect(x, y, mon_w, mon_h)


def find_overlaps(positions: dict[str, Rect]) -> list[tuple[str, str]]:
    """Return every pair of overlapping monitors.

    Pairs are listed once, following the order of `positions`.
    """
    names = list(positions)
    return [
        (name1, name2)
        for i, name1 in enumerate(names)
        for name2 in names[i + 1 :]
        if positions[name1].overlaps(positions[name2])
    ]


def generate_positions(config: Config, order: list[str]) -> dict[str, Rect]:
    """Compute the rectangle of every monitor.

    The first monitor of `order` is put at (0, 0), the others are placed next to their
    reference monitor, which must come earlier in `order`.

    Args:
        config: Monitor name -> monitor
        order: Placement order, as returned by `compute_order`

    Returns:
        Monitor name -> rectangle, in placement order

    Raises:
        OverlapError: If some monitors overlap, the error holds every overlapping pair
            and the computed positions
    """
    positions: dict[str, Rect] = {}
    for name in order:
        mon = config[name]
        mon_dim = scaled_dims(mon)

        if not positions:
            positions[name] = Rect(0, 0, *mon_dim)
            layout_logger.debug("%s is the root monitor: %s", name, positions[name])
            continue

        direction, parent = split_position(mon.position)
        positions[name] = place_monitor(positions[parent], mon_dim, parse_direction(direction), mon.align)
        layout_logger.debug("%s placed %s %s: %s", name, direction, parent, positions[name])

    overlaps = find_overlaps(positions)
    if overlaps:
        error = OverlapError(overlaps, positions)
        layout_logger.warning("%s", error)
        raise error
    return positions
