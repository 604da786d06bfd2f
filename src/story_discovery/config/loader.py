"""YAML configuration loading utilities."""

from pathlib import Path

import yaml

from story_discovery.config.models import DiscoveryConfig


def load_config(path: Path | str) -> DiscoveryConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated DiscoveryConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return DiscoveryConfig.model_validate(raw or {})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).resolve().parents[3] / "configs" / "default.yaml"
