"""
Pageflow Configuration

Runner settings for the E2E suite. Values resolve in this order:

1. Class defaults below
2. YAML file named by PAGEFLOW_CONFIG (or ./pageflow.yaml if present)
3. E2E_* environment variables
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pageflow.yaml"


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class E2EConfig:
    """E2E test configuration."""

    # Server settings
    BASE_URL = "http://localhost:8099"

    # Browser settings
    HEADLESS = True
    SLOW_MO = 0
    VIEWPORT_WIDTH = 1280
    VIEWPORT_HEIGHT = 720

    # Timeouts (milliseconds)
    DEFAULT_COMMAND_TIMEOUT = 10000
    PAGE_LOAD_TIMEOUT = 60000
    REQUEST_TIMEOUT = 10000
    RESPONSE_TIMEOUT = 30000

    # Test retries
    RETRIES_RUN_MODE = 2
    RETRIES_OPEN_MODE = 0

    # Screenshots and video
    SCREENSHOT_ON_FAILURE = True
    RECORD_VIDEO = False

    # Folders
    FIXTURES_DIR = Path("tests/e2e/fixtures")
    ARTIFACTS_DIR = Path("tests/e2e/artifacts")

    # Uncaught page errors are logged instead of failing the test
    SUPPRESS_PAGE_ERRORS = True

    # (env var, attribute, converter)
    _ENV_OVERRIDES = (
        ("E2E_BASE_URL", "BASE_URL", str),
        ("E2E_HEADLESS", "HEADLESS", _as_bool),
        ("E2E_SLOW_MO", "SLOW_MO", int),
        ("E2E_COMMAND_TIMEOUT", "DEFAULT_COMMAND_TIMEOUT", int),
        ("E2E_PAGE_LOAD_TIMEOUT", "PAGE_LOAD_TIMEOUT", int),
        ("E2E_REQUEST_TIMEOUT", "REQUEST_TIMEOUT", int),
        ("E2E_RESPONSE_TIMEOUT", "RESPONSE_TIMEOUT", int),
        ("E2E_RECORD_VIDEO", "RECORD_VIDEO", _as_bool),
        ("E2E_SCREENSHOT_ON_FAILURE", "SCREENSHOT_ON_FAILURE", _as_bool),
        ("E2E_FIXTURES_DIR", "FIXTURES_DIR", Path),
        ("E2E_ARTIFACTS_DIR", "ARTIFACTS_DIR", Path),
        ("E2E_SUPPRESS_PAGE_ERRORS", "SUPPRESS_PAGE_ERRORS", _as_bool),
    )

    @classmethod
    def load(
        cls, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None
    ) -> "E2EConfig":
        """Build a config instance from defaults, YAML file and environment."""
        environ = os.environ if environ is None else environ
        config = cls()

        path = config_file or environ.get("PAGEFLOW_CONFIG")
        if path:
            config.apply(cls._read_yaml(Path(path), required=True))
        elif Path(DEFAULT_CONFIG_FILE).exists():
            config.apply(cls._read_yaml(Path(DEFAULT_CONFIG_FILE), required=False))

        for env_name, attr, convert in cls._ENV_OVERRIDES:
            if env_name in environ:
                setattr(config, attr, convert(environ[env_name]))

        return config

    @staticmethod
    def _read_yaml(path: Path, required: bool) -> Dict[str, Any]:
        if not path.exists():
            if required:
                raise FileNotFoundError(f"Config file not found: {path}")
            return {}

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        logger.debug(f"Loaded E2E config from {path}")
        return data

    def apply(self, values: Dict[str, Any]) -> None:
        """Apply lower_snake_case overrides (as written in YAML)."""
        for key, value in values.items():
            attr = key.upper()
            if not hasattr(type(self), attr) or attr.startswith("_"):
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            if attr.endswith("_DIR"):
                value = Path(value)
            setattr(self, attr, value)

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.VIEWPORT_WIDTH, "height": self.VIEWPORT_HEIGHT}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_url": self.BASE_URL,
            "headless": self.HEADLESS,
            "slow_mo": self.SLOW_MO,
            "viewport": self.viewport,
            "default_command_timeout": self.DEFAULT_COMMAND_TIMEOUT,
            "page_load_timeout": self.PAGE_LOAD_TIMEOUT,
            "request_timeout": self.REQUEST_TIMEOUT,
            "response_timeout": self.RESPONSE_TIMEOUT,
            "retries": {"run_mode": self.RETRIES_RUN_MODE, "open_mode": self.RETRIES_OPEN_MODE},
            "record_video": self.RECORD_VIDEO,
            "screenshot_on_failure": self.SCREENSHOT_ON_FAILURE,
            "fixtures_dir": str(self.FIXTURES_DIR),
            "artifacts_dir": str(self.ARTIFACTS_DIR),
        }
