"""pymapper Logging — structlog rendering for the engine's log records."""

from pymapper.logging.structlog_adapter import StructlogAdapter, render_types

__all__ = ["StructlogAdapter", "render_types"]
