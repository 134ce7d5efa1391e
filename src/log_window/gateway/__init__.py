"""In-memory collaborators for running a window without external services."""

from log_window.gateway.line_buffer_sink import LineBufferSink
from log_window.gateway.memory_source import InMemoryLogSource

__all__ = ["InMemoryLogSource", "LineBufferSink"]
