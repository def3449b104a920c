"""Read featurebridge settings from a YAML file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from featurebridge.errors import ConfigError
from featurebridge.types import DEFAULT_LANG, DEFAULT_STEPS, DEFAULT_TIMEOUT, BridgeConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "featurebridge.yaml"

_KNOWN_KEYS = frozenset({"lang", "steps", "timeout"})


def load_config(raw: dict[str, Any] | None) -> BridgeConfig:
    """Normalise a raw settings mapping into a BridgeConfig."""
    raw = dict(raw or {})

    for key in sorted(set(raw) - _KNOWN_KEYS):
        logger.warning("Ignoring unknown featurebridge setting: %s", key)

    lang = raw.get("lang") or DEFAULT_LANG
    if not isinstance(lang, str):
        raise ConfigError(f'"lang" must be a string, got {type(lang).__name__}')

    steps = raw.get("steps") or [DEFAULT_STEPS]
    if isinstance(steps, str):
        steps = [steps]
    if not isinstance(steps, list) or not all(isinstance(s, str) for s in steps):
        raise ConfigError('"steps" must be a string or a list of strings')

    timeout = raw.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f'"timeout" must be a positive number, got {timeout!r}')

    return BridgeConfig(lang=lang, steps=list(steps), timeout=float(timeout))


def read_config(path: str | Path) -> BridgeConfig:
    config_path = Path(path)
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return load_config(None)

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return load_config(None)
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config file {config_path}: expected a mapping")
    return load_config(raw)
