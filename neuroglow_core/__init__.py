"""
neuroglow Core Package.

This package contains the simulation half of the neuroglow animation:

- Configuration record and YAML compiler
- Layered topology data structures and builder
- Activation simulator (Engine)
- Visual mapping from activation to color, width, glow and radius

Nothing here draws; the `neuroglow_anim` package renders the state onto a
drawing surface.
"""

# neuroglow Core Package

__version__ = "0.1.0"

from .enums import LifecycleState, NodeRole
from .colors import RGBA, parse_color, lerp, lerp_color
from .config import AnimationConfig, PALETTE_PRESETS
from .graph import Topology, Node, Connection
from .builder import build_topology
from .engine import Engine
from .visuals import VisualMapper
from .compiler import config_from_dict, config_from_yaml, config_from_file
from .metrics import (
    total_input_fires,
    total_threshold_triggers,
    active_node_count,
    mean_activation,
    layer_activity,
    summarize,
)
