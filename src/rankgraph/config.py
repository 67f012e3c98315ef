"""Configuration loading and parsing for rankgraph."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from rankgraph.resolver import DEFAULT_MAX_DEPTH, DEFAULT_MAX_STEPS

logger = logging.getLogger("rankgraph")

CONFIG_FILENAMES = ["rankgraph.yml", "rankgraph.yaml", ".rankgraph.yml"]


@dataclass
class RankGraphConfig:
    """Parsed rankgraph configuration."""
    enable_schemas: bool = True
    debug: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    max_steps: int = DEFAULT_MAX_STEPS
    schemas: list[dict] = field(default_factory=list)
    custom_types_dir: str | None = None


def _positive_int(raw: dict, key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        logger.warning("Invalid %s '%s', falling back to %d", key, value, default)
        return default
    return value


def _flag(raw: dict, key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        logger.warning("Invalid %s '%s', falling back to %s", key, value, default)
        return default
    return value


def load_config(project_dir: str) -> RankGraphConfig:
    """Load config from rankgraph.yml, or return defaults."""
    root = Path(project_dir)

    raw = {}
    for filename in CONFIG_FILENAMES:
        config_path = root / filename
        if config_path.exists():
            raw = yaml.safe_load(config_path.read_text()) or {}
            break

    if not isinstance(raw, dict):
        logger.warning("Ignoring config: expected a mapping, got %s", type(raw).__name__)
        raw = {}

    schemas = raw.get("schemas") or []
    if not isinstance(schemas, list):
        logger.warning("Invalid schemas '%s', falling back to the built-in defaults", schemas)
        schemas = []
    valid_schemas = []
    for entry in schemas:
        if isinstance(entry, dict) and entry.get("type"):
            valid_schemas.append(entry)
        else:
            logger.warning("Skipping schema entry without a type: %r", entry)

    return RankGraphConfig(
        enable_schemas=_flag(raw, "enable_schemas", True),
        debug=_flag(raw, "debug", False),
        max_depth=_positive_int(raw, "max_depth", DEFAULT_MAX_DEPTH),
        max_steps=_positive_int(raw, "max_steps", DEFAULT_MAX_STEPS),
        schemas=valid_schemas,
        custom_types_dir=raw.get("custom_types_dir"),
    )
