" generic fixtures "
import logging
from pathlib import Path

import pytest

from monpos.models import Monitor

CONFIGS = Path(__file__).parent / "configs"


def pytest_configure():
    "Runs once before all"
    from monpos.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


def make_config(**monitors) -> dict[str, Monitor]:
    """Helper to build a config: make_config(A=(1920, 1080), B=(1920, 1080, "right-of A", "top"))."""
    config = {}
    for name, entry in monitors.items():
        if isinstance(entry, Monitor):
            config[name] = entry
            continue
        width, height, *rest = entry
        position = rest[0] if rest else ""
        align = rest[1] if len(rest) > 1 else ("center" if position else "")
        scale = rest[2] if len(rest) > 2 else 1.0
        config[name] = Monitor(width, height, scale, position, align)
    return config


@pytest.fixture
def test_logger():
    "A silent logger"
    logger = logging.getLogger("monpos.tests")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


@pytest.fixture
def configs_dir():
    "Folder holding the sample configuration files"
    return CONFIGS
