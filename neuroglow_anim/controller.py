"""
Lifecycle controller: owns the frame loop of one animation instance.

The controller is the only writer of the configuration. It builds the
topology, schedules ticks through a `FrameScheduler`, rebuilds on resize and
on topology-affecting configuration changes, and exposes start/stop controls.

States:
- STOPPED: no tick pending, no resize subscription
- RUNNING: exactly one tick pending (or executing), resize subscription held
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import numpy as np

from neuroglow_core.builder import build_topology
from neuroglow_core.config import AnimationConfig
from neuroglow_core.engine import Engine
from neuroglow_core.enums import LifecycleState
from neuroglow_core.graph import Topology
from neuroglow_core.visuals import VisualMapper

from neuroglow_anim.adapters.base import DrawingSurface, FrameScheduler, ResizeNotifier
from neuroglow_anim.render import FrameStats, render_frame

logger = logging.getLogger(__name__)


class AnimationController:
    """
    Drives simulate-then-render ticks for one surface.

    Attributes:
        surface: Drawing target
        scheduler: Frame scheduler used to request ticks
        resize_notifier: Optional source of resize events
        rng: Random source shared by builder, engine and render pass
        topology: Current topology (None until first built)
        engine: Simulator bound to the current topology
        last_frame: Stats of the most recent render pass
    """

    def __init__(
        self,
        surface: Optional[DrawingSurface],
        scheduler: FrameScheduler,
        resize_notifier: Optional[ResizeNotifier] = None,
        config: AnimationConfig | Mapping[str, Any] | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.surface = surface
        self.scheduler = scheduler
        self.resize_notifier = resize_notifier
        if isinstance(config, AnimationConfig):
            self._config = config
        else:
            self._config = AnimationConfig().merged(config)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.clock = clock

        self._mapper = VisualMapper(self._config)
        self.topology: Optional[Topology] = None
        self.engine: Optional[Engine] = None
        self.last_frame: Optional[FrameStats] = None

        self._state = LifecycleState.STOPPED
        self._tick_handle: Any = None
        self._resize_token: Any = None
        self._in_tick = False
        # (kind, updates) pairs queued while a tick executes
        self._deferred: List[Tuple[str, Dict[str, Any]]] = []

    # ----- properties -----
    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == LifecycleState.RUNNING

    @property
    def mapper(self) -> VisualMapper:
        return self._mapper

    # ----- environment checks -----
    def _surface_ok(self) -> bool:
        if not isinstance(self.surface, DrawingSurface):
            logger.error("Drawing surface not found or invalid: %r", self.surface)
            return False
        return True

    # ----- lifecycle -----
    def rebuild(self) -> bool:
        """
        Discard the current topology and build a new one from the surface size.

        Activation always restarts from zero.

        Returns:
            bool: False when no usable surface is attached
        """
        if not self._surface_ok():
            return False
        self.topology = build_topology(
            self._config, self.surface.width, self.surface.height, self.rng
        )
        self.engine = Engine(self.topology, self._config, self.rng)
        logger.info(
            "Built %d nodes / %d connections for %sx%s surface",
            self.topology.node_count,
            self.topology.connection_count,
            self.surface.width,
            self.surface.height,
        )
        return True

    def start(self) -> None:
        """Begin animating; no-op when already running."""
        if self.running:
            return
        if not self._surface_ok():
            return
        if self.topology is None and not self.rebuild():
            return
        self._state = LifecycleState.RUNNING
        self._tick_handle = self.scheduler.request_tick(self._on_tick)
        if self.resize_notifier is not None:
            self._resize_token = self.resize_notifier.subscribe(self._on_resize)
        logger.debug("Animation started")

    def stop(self) -> None:
        """Halt animating and release the resize subscription; no-op when stopped."""
        if not self.running:
            return
        self._state = LifecycleState.STOPPED
        if self._tick_handle is not None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None
        if self.resize_notifier is not None and self._resize_token is not None:
            self.resize_notifier.unsubscribe(self._resize_token)
            self._resize_token = None
        logger.debug("Animation stopped")

    def _restart(self) -> None:
        """Stop, rebuild and start again, or only rebuild when stopped."""
        if self.running:
            self.stop()
            self.rebuild()
            self.start()
        else:
            self.rebuild()

    def _on_resize(self, event: Any = None) -> None:
        logger.debug("Surface resized to %sx%s", self.surface.width, self.surface.height)
        if self._in_tick:
            self._deferred.append(("resize", {}))
            return
        self._restart()

    # ----- ticks -----
    def tick(self) -> Optional[FrameStats]:
        """Run one simulate+render step without touching the schedule."""
        if self.engine is None and not self.rebuild():
            return None
        self._in_tick = True
        try:
            self.engine.step(1)
            self.last_frame = render_frame(
                self.surface, self.topology, self._mapper, self._config, self.rng, self.clock()
            )
        finally:
            self._in_tick = False
        self._apply_deferred()
        return self.last_frame

    def _on_tick(self) -> None:
        self._tick_handle = None
        if not self.running:
            return
        self.tick()
        if self.running and self._tick_handle is None:
            self._tick_handle = self.scheduler.request_tick(self._on_tick)

    # ----- configuration -----
    def get_configuration(self) -> AnimationConfig:
        """Return a snapshot of the current configuration."""
        return replace(self._config)

    def apply_configuration(self, partial: Mapping[str, Any] | AnimationConfig) -> None:
        """
        Merge new option values into the active configuration.

        Topology-affecting changes rebuild the network (restarting the loop
        when running); other changes take effect on the next tick. Calls made
        while a tick executes are applied once it completes.
        """
        updates = partial.to_dict() if isinstance(partial, AnimationConfig) else dict(partial)
        if self._in_tick:
            self._deferred.append(("config", updates))
            return
        self._apply(updates)

    def _apply(self, updates: Dict[str, Any]) -> None:
        new_config = self._config.merged(updates)
        needs_rebuild = new_config.topology_changed(self._config)
        mapper = VisualMapper(new_config)
        self._config = new_config
        self._mapper = mapper
        if needs_rebuild:
            self._restart()
        elif self.engine is not None:
            self.engine.config = new_config

    def _apply_deferred(self) -> None:
        while self._deferred:
            kind, updates = self._deferred.pop(0)
            if kind == "resize":
                self._restart()
            else:
                self._apply(updates)
