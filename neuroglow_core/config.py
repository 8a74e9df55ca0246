"""
Configuration objects for the neuroglow animation.

Exposes every tunable parameter of the layout, the activation dynamics and the
visual mapping as one immutable record. Updates are expressed as partial
dictionaries and merged field by field with validation, so a bad value never
reaches the simulation.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple

logger = logging.getLogger(__name__)

# Fields whose change invalidates node positions or connections
TOPOLOGY_FIELDS = frozenset(
    {
        "layers",
        "h_spacing_multiplier",
        "v_spacing_multiplier",
        "position_jitter",
        "base_node_radius",
        "node_radius_variance",
        "max_connections_per_node",
    }
)

# Smallest accepted activation threshold; the boost divides by it
MIN_ACTIVATION_THRESHOLD = 1e-6

_PROBABILITY_FIELDS = frozenset({"input_activation_probability"})
_NON_NEGATIVE_FIELDS = frozenset(
    {
        "h_spacing_multiplier",
        "v_spacing_multiplier",
        "position_jitter",
        "base_node_radius",
        "node_radius_variance",
        "node_pulse_magnitude",
        "node_pulse_speed",
        "connection_width",
        "active_connection_width",
        "connection_glow_blur",
        "signal_propagation_speed",
        "activation_boost",
        "decay_rate",
        "min_activation_level",
    }
)
_COLOR_FIELDS = frozenset(
    {"node_color", "active_node_color", "connection_color", "connection_glow_color"}
)


@dataclass(frozen=True)
class AnimationConfig:
    """
    Configuration for topology layout, activation dynamics and visuals.

    Defaults reproduce the cool-blue look of the stock animation. Rates such as
    `decay_rate` and `activation_boost` are expressed per tick.
    """

    # Structure & layout
    layers: Tuple[int, ...] = (5, 9, 11, 9, 6)
    h_spacing_multiplier: float = 0.85
    v_spacing_multiplier: float = 0.85
    position_jitter: float = 10.0

    # Nodes
    base_node_radius: float = 3.0
    node_radius_variance: float = 0.5
    node_color: str = "rgba(80, 130, 200, 0.3)"
    active_node_color: str = "rgba(220, 245, 255, 1)"
    node_pulse_magnitude: float = 1.0
    node_pulse_speed: float = 0.05

    # Connections
    connection_color: str = "rgba(80, 130, 200, 0.1)"
    # Palette indexed by *source node* activation
    active_connection_colors: Tuple[str, ...] = (
        "rgba(100, 180, 255, 0.7)",
        "rgba(160, 220, 255, 0.85)",
        "rgba(220, 250, 255, 0.95)",
        "rgba(255, 255, 255, 0.9)",
    )
    connection_width: float = 0.5
    active_connection_width: float = 1.5
    connection_glow_blur: float = 4.0
    connection_glow_color: str = "rgba(150, 220, 255, 0.2)"
    max_connections_per_node: int = 5
    use_curves: bool = False

    # Activation dynamics
    input_activation_probability: float = 0.02
    signal_propagation_speed: float = 1.0
    activation_threshold: float = 0.6
    activation_boost: float = 1.5
    decay_rate: float = 0.04
    min_activation_level: float = 0.01

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def merged(self, partial: Mapping[str, Any] | None) -> "AnimationConfig":
        """
        Return a new config with the values of `partial` applied.

        Keys may use snake_case field names or the camelCase option names of
        the browser animation (``activationThreshold``). Unknown keys and
        values of the wrong type are logged and skipped; numeric values are
        clamped into their valid range.

        Args:
            partial: Mapping of option name to new value

        Returns:
            AnimationConfig: The merged configuration (self when nothing applies)
        """
        if not partial:
            return self

        known = set(self.field_names())
        updates: Dict[str, Any] = {}
        for key, value in partial.items():
            name = normalize_key(key)
            if name not in known:
                logger.warning("Ignoring unknown configuration option %r", key)
                continue
            try:
                updates[name] = _coerce(name, value, getattr(self, name))
            except (TypeError, ValueError, OverflowError) as exc:
                logger.warning(
                    "Invalid value for %s (%r): %s; keeping %r",
                    name,
                    value,
                    exc,
                    getattr(self, name),
                )

        if not updates:
            return self
        return replace(self, **updates)

    def topology_changed(self, other: "AnimationConfig") -> bool:
        """True when `other` differs from self in any topology-affecting field."""
        return any(getattr(self, name) != getattr(other, name) for name in TOPOLOGY_FIELDS)

    def with_palette(self, name: str) -> "AnimationConfig":
        """Apply one of the `PALETTE_PRESETS` color schemes."""
        preset = PALETTE_PRESETS.get(name)
        if preset is None:
            logger.warning(
                "Unknown palette %r (available: %s)", name, ", ".join(sorted(PALETTE_PRESETS))
            )
            return self
        return self.merged(preset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: list(value) if isinstance(value, tuple) else value
            for name, value in ((n, getattr(self, n)) for n in self.field_names())
        }


def normalize_key(key: str) -> str:
    """Convert a camelCase option name to its snake_case field name."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", str(key)).lower()


def _finite(name: str, value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be a finite number")
    return number


def _coerce(name: str, value: Any, current: Any) -> Any:
    """Validate one field value, raising TypeError/ValueError when unusable."""
    if name == "layers":
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise TypeError("layers must be a sequence of integers")
        sizes = tuple(max(0, int(_finite(name, v))) for v in value)
        if not sizes:
            raise ValueError("layers must not be empty")
        return sizes

    if name == "active_connection_colors":
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise TypeError("active_connection_colors must be a sequence of colors")
        # An empty palette is accepted here and replaced by the visual mapper
        return tuple(
            _color_seq_to_css(v) if isinstance(v, (tuple, list)) else str(v) for v in value
        )

    if name in _COLOR_FIELDS:
        if isinstance(value, (tuple, list)):
            return _color_seq_to_css(value)
        if not isinstance(value, str):
            raise TypeError("colors must be strings")
        return value

    if name == "use_curves":
        if not isinstance(value, (bool, int)):
            raise TypeError("use_curves must be a boolean")
        return bool(value)

    if name == "max_connections_per_node":
        if isinstance(value, bool):
            raise TypeError("max_connections_per_node must be an integer")
        return max(0, int(_finite(name, value)))

    if isinstance(current, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{name} must be a number")
        number = _finite(name, value)
        if name in _PROBABILITY_FIELDS:
            return max(0.0, min(1.0, number))
        if name == "activation_threshold":
            return max(MIN_ACTIVATION_THRESHOLD, number)
        if name in _NON_NEGATIVE_FIELDS:
            return max(0.0, number)
        return number

    return value


def _color_seq_to_css(value) -> str:
    channels = [_finite("color channel", v) for v in value]
    if len(channels) == 3:
        channels.append(1.0)
    if len(channels) != 4:
        raise ValueError("color sequences need 3 or 4 channels")
    r, g, b, a = channels
    return f"rgba({int(r)}, {int(g)}, {int(b)}, {a})"


# Color schemes shipped with the stock animation page
PALETTE_PRESETS: Dict[str, Dict[str, Any]] = {
    "cool": {
        "node_color": "rgba(80, 130, 200, 0.3)",
        "active_node_color": "rgba(220, 245, 255, 1)",
        "connection_color": "rgba(80, 130, 200, 0.1)",
        "active_connection_colors": (
            "rgba(100, 180, 255, 0.6)",
            "rgba(160, 220, 255, 0.8)",
            "rgba(220, 250, 255, 0.95)",
            "rgba(255, 255, 255, 0.9)",
        ),
        "connection_glow_color": "rgba(150, 220, 255, 0.2)",
    },
    "warm": {
        "node_color": "rgba(180, 120, 50, 0.3)",
        "active_node_color": "rgba(255, 230, 200, 1)",
        "connection_color": "rgba(180, 120, 50, 0.1)",
        "active_connection_colors": (
            "rgba(255, 160, 80, 0.6)",
            "rgba(255, 200, 100, 0.8)",
            "rgba(255, 240, 150, 0.95)",
            "rgba(255, 255, 220, 0.9)",
        ),
        "connection_glow_color": "rgba(255, 200, 100, 0.2)",
    },
    "green": {
        "node_color": "rgba(0, 150, 100, 0.3)",
        "active_node_color": "rgba(200, 255, 220, 1)",
        "connection_color": "rgba(0, 150, 100, 0.1)",
        "active_connection_colors": (
            "rgba(50, 200, 150, 0.6)",
            "rgba(100, 255, 180, 0.8)",
            "rgba(180, 255, 220, 0.95)",
            "rgba(230, 255, 240, 0.9)",
        ),
        "connection_glow_color": "rgba(100, 255, 180, 0.2)",
    },
}
