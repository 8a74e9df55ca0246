"""
YAML configuration compiler for neuroglow animations.

This module compiles a YAML document into an `AnimationConfig`. Option names
are the config field names (snake_case) or the camelCase names used by the
browser animation.

YAML schema (all keys optional):

palette: warm            # one of PALETTE_PRESETS, applied first
layers: [4, 8, 8, 3]
activation_threshold: 0.55
activation_boost: 1.6
decay_rate: 0.04
active_connection_colors:
  - rgba(255, 160, 80, 0.6)
  - rgba(255, 255, 220, 0.9)

Notes:
- Keys are merged in document order after the palette preset, so explicit
  colors override the preset.
- Invalid values are logged and skipped (see `AnimationConfig.merged`).
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import yaml

from .config import AnimationConfig

logger = logging.getLogger(__name__)


def config_from_dict(spec: Dict[str, Any], base: AnimationConfig | None = None) -> AnimationConfig:
    """
    Compile a YAML-parsed dictionary into an `AnimationConfig`.

    Args:
        spec: Parsed YAML dictionary
        base: Configuration to merge onto (defaults when None)

    Returns:
        AnimationConfig: The compiled configuration
    """
    config = base or AnimationConfig()
    if not isinstance(spec, dict):
        logger.warning("Configuration document is not a mapping (%s); using defaults", type(spec).__name__)
        return config

    options = dict(spec)
    palette = options.pop("palette", None)
    if palette is not None:
        config = config.with_palette(str(palette))
    return config.merged(options)


def config_from_yaml(yaml_text: str, base: AnimationConfig | None = None) -> AnimationConfig:
    """Compile from YAML text into an `AnimationConfig`."""
    data = yaml.safe_load(yaml_text) or {}
    return config_from_dict(data, base)


def config_from_file(path: str, base: AnimationConfig | None = None) -> AnimationConfig:
    """Compile from a YAML file path into an `AnimationConfig`."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return config_from_yaml(txt, base)
