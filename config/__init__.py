"""Configuration files for enforce-hooks."""

from pathlib import Path

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_FILE = CONFIG_DIR / "default_config.yaml"

__all__ = ["CONFIG_DIR", "DEFAULT_CONFIG_FILE"]
