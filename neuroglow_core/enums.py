"""
Core enumerations for the neuroglow animation system.

This module defines the lifecycle states of an animation controller and the
roles a node can play inside a layered network.
"""

from enum import Enum, auto


class LifecycleState(Enum):
    """
    States of the animation lifecycle.

    - STOPPED: No tick is scheduled and no environment listener is attached
    - RUNNING: A tick is pending (or executing) and resize events are observed
    """

    STOPPED = auto()
    """No frame loop is active."""

    RUNNING = auto()
    """The frame loop is active."""


class NodeRole(Enum):
    """
    Role of a node, derived from its layer position.

    - INPUT: First layer; fires spontaneously with a configured probability
    - HIDDEN: Intermediate layers; fire when incoming signal crosses threshold
    - OUTPUT: Last layer; threshold-driven like hidden nodes, no outgoing edges
    """

    INPUT = auto()
    """Node in layer 0."""

    HIDDEN = auto()
    """Node in any layer between the first and the last."""

    OUTPUT = auto()
    """Node in the last layer of a multi-layer network."""
