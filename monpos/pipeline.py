"""From a configuration to a checked layout."""

from dataclasses import dataclass, field
from pathlib import Path

from .config_loader import ConfigLoader
from .graph import build_graph, compute_order
from .layout import generate_positions
from .logging_setup import get_logger
from .models import Config, Rect
from .rules import check_monitor

__all__ = ["Layout", "load_layout", "solve"]


@dataclass
class Layout:
    """A computed layout."""

    order: list[str]
    positions: dict[str, Rect] = field(default_factory=dict)

    @property
    def root(self) -> str:
        """Name of the monitor placed at (0, 0)."""
        return self.order[0]

    def as_dict(self) -> dict:
        """Return a JSON friendly representation."""
        return {
            "order": list(self.order),
            "positions": {name: rect.as_dict() for name, rect in self.positions.items()},
        }


def check_config(config: Config) -> list[str]:
    """Validate a configuration and return the placement order.

    Every stage stops at the first problem found.

    Raises:
        MonposError: The first problem found
    """
    for name, monitor in config.items():
        check_monitor(name, monitor)
    return compute_order(build_graph(config))


def solve(config: Config) -> Layout:
    """Compute the layout of a configuration.

    Raises:
        OverlapError: If the resulting rectangles overlap (positions are available in the error)
        MonposError: For any other invalid configuration
    """
    order = check_config(config)
    return Layout(order, generate_positions(config, order))


def load_layout(path: str | Path | None = None) -> Layout:
    """Load a configuration file and compute its layout."""
    loader = ConfigLoader(get_logger("monpos.loader"))
    return solve(loader.load(path))
