"""
neuroglow drawing package.

This package provides:
- Environment interfaces (drawing surface, frame scheduler, resize notifier)
  and their recording, matplotlib and manim implementations
- The render pass that draws a topology through the visual mapper
- The lifecycle controller owning the frame loop
- A command line runner
"""

from .controller import AnimationController
from .render import render_frame, FrameStats

__all__ = ["AnimationController", "render_frame", "FrameStats"]
