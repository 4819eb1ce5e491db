"""Concurrent diagnostic-stream translation pipeline."""

from .orchestrator import CheckPipeline
from .sink import LineSink
from .stream import StreamProcessor

__all__ = ["CheckPipeline", "LineSink", "StreamProcessor"]
