"""
Fixture Loader

Loads structured test data from JSON or YAML files in the fixtures folder.
"""
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .config import E2EConfig
from .errors import FixtureNotFoundError

logger = logging.getLogger(__name__)

FIXTURE_SUFFIXES = (".json", ".yaml", ".yml")


def resolve_fixture(name: Union[str, Path], fixtures_dir: Optional[Path] = None) -> Path:
    """
    Locate a fixture file.

    ``name`` may carry its suffix ("users.json") or not ("users"), in which
    case JSON is tried before YAML.
    """
    if fixtures_dir is None:
        fixtures_dir = E2EConfig.load().FIXTURES_DIR

    path = Path(name)
    if not path.is_absolute():
        path = Path(fixtures_dir) / path

    if path.suffix in FIXTURE_SUFFIXES:
        if path.exists():
            return path
    else:
        for suffix in FIXTURE_SUFFIXES:
            candidate = path.with_name(path.name + suffix)
            if candidate.exists():
                return candidate

    raise FixtureNotFoundError(f"Fixture not found: {name} (searched {fixtures_dir})")


def load_fixture(name: Union[str, Path], fixtures_dir: Optional[Path] = None) -> Any:
    """Load and parse a fixture file."""
    path = resolve_fixture(name, fixtures_dir)

    with open(path) as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    logger.debug(f"Loaded fixture {path.name}")
    return data
