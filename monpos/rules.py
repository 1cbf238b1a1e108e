"""Direction and alignment compatibility rules."""

from .models import AlignmentError, Direction, MalformedDirectiveError, Monitor
from .position import split_position

__all__ = ["check_direction_alignment", "check_monitor", "parse_direction"]


def _quoted(values: tuple[str, ...] | list[str]) -> str:
    """Format a list of names as `'a', 'b', or 'c'`."""
    quoted = [f"'{v}'" for v in values]
    if len(quoted) < 2:  # noqa: PLR2004
        return "".join(quoted)
    return ", ".join(quoted[:-1]) + f", or {quoted[-1]}"


def parse_direction(direction: str) -> Direction:
    """Return the Direction matching `direction`.

    Raises:
        MalformedDirectiveError: If it isn't a known direction
    """
    try:
        return Direction(direction)
    except ValueError:
        msg = f"expected direction {_quoted([d.value for d in Direction])}, got '{direction}'"
        raise MalformedDirectiveError(msg) from None


def check_direction_alignment(direction: str, alignment: str) -> None:
    """Check that a direction and an alignment can be used together.

    Both empty is valid (unpositioned monitor). An empty alignment is accepted
    with any valid direction, since it defaults to "center".

    Args:
        direction: The direction part of the position
        alignment: The alignment

    Raises:
        AlignmentError: If the alignment is set without direction or doesn't fit the direction
        MalformedDirectiveError: If the direction is unknown
    """
    if not direction:
        if alignment:
            msg = f"alignment requires a position, got alignment '{alignment}' without position"
            raise AlignmentError(msg)
        return

    parsed = parse_direction(direction)
    if not alignment:
        return

    valid = parsed.alignments
    if alignment not in valid:
        msg = f"for direction '{parsed}', only alignments {_quoted([a.value for a in valid])} are valid, got '{alignment}'"
        raise AlignmentError(msg)


def check_monitor(name: str, monitor: Monitor) -> None:
    """Check the position & alignment of a single monitor.

    Errors are re-raised with the monitor name prepended.
    """
    try:
        direction, _reference = split_position(monitor.position)
        check_direction_alignment(direction, monitor.align)
    except (AlignmentError, MalformedDirectiveError) as e:
        raise type(e)(f"monitor '{name}' is invalid: {e}") from e
