"""Position directive parsing."""

from .models import MalformedDirectiveError

__all__ = ["split_position"]


def split_position(position: str) -> tuple[str, str]:
    """Split a position of the form `<direction> <monitor>`.

    No check is made on the direction or on the monitor name.

    Args:
        position: The raw directive, empty for an unpositioned monitor

    Returns:
        tuple[str, str]: The (direction, reference monitor), two empty strings for an empty position

    Raises:
        MalformedDirectiveError: If the position isn't made of exactly two words
    """
    if not position:
        return "", ""

    parts = position.split()
    if len(parts) != 2:  # noqa: PLR2004
        msg = f"position must be of the form '<direction> <monitor>', got '{position}'"
        raise MalformedDirectiveError(msg)
    return parts[0], parts[1]
