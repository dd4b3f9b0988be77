"""Configuration loading: named tunings and defaults from YAML."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from fretshapes.errors import ConfigError, MusicSemanticsError
from fretshapes.fretboard.fretboard import Fretboard

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "conf" / "base.yaml"


def load_config(path=None):
    """Load a YAML config file, the packaged conf/base.yaml by default."""
    path = Path(path) if path else DEFAULT_CONFIG_PATH
    logger.debug("Loading config from %s", path)
    with open(path, "r") as f:
        config = yaml.safe_load(f)
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {path} does not contain a mapping")
    return config


def tuning_names(config: dict) -> list:
    return sorted(config.get("tunings") or {})


def get_tuning(name: Optional[str] = None, config: Optional[dict] = None) -> Fretboard:
    """
    Build the fretboard for a named tuning.

    Args:
        name: Tuning name; ``search.default_tuning`` when omitted.
        config: Parsed config; the packaged defaults when omitted.

    Returns:
        Fretboard with the tuning's open strings.
    """
    if config is None:
        config = load_config()
    if name is None:
        name = config.get("search", {}).get("default_tuning", "standard")
    tunings = config.get("tunings") or {}
    if name not in tunings:
        raise ConfigError(f"Unknown tuning {name!r}; choose from {', '.join(tuning_names(config))}")
    try:
        return Fretboard.from_names(tunings[name])
    except (MusicSemanticsError, TypeError) as e:
        raise ConfigError(f"Invalid tuning {name!r}: {e}") from e
