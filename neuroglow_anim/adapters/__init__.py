from .base import DrawingSurface, FrameScheduler, ResizeNotifier, Point
from .recording import RecordingSurface, ManualScheduler, ManualResizeNotifier
