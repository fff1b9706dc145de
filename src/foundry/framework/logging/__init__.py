"""
Foundry Framework Logging - Structured, execution-aware logging.

This module provides:
- Structured logging with structlog
- Execution context propagation via contextvars
- Timing utilities for operation and activation timing
- Environment-based configuration

Usage:
    from foundry.framework.logging import get_logger, configure_logging, log_step, set_context

    configure_logging()
    log = get_logger(__name__)

    set_context(document="Door-Single")

    with log_step("processor.batch", batch_index=0):
        run_batch()
"""

from foundry.framework.logging.config import configure_from_settings, configure_logging, is_configured
from foundry.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
    set_context,
)
from foundry.framework.logging.timing import TimingResult, log_step, timed_block

__all__ = [
    # Configuration
    "configure_logging",
    "configure_from_settings",
    "is_configured",
    # Context
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "LogContext",
    # Timing
    "log_step",
    "timed_block",
    "TimingResult",
]
