"""
Foundry Framework - scheduling and execution of operations.

This module provides:
- Operation base classes and scopes (operations)
- Write-once operation logs and reports (logs)
- The batching OperationQueue (queue)
- The OperationProcessor execution engine (processor)
- Profiles of operation settings (profile)
- Structured logging (logging)
"""

# logging is imported first: document adapters depend on it
from foundry.framework.logging import configure_logging, get_logger, log_step
from foundry.framework.filters import Exclude, Include, NameFilter
from foundry.framework.logs import LogEntry, OperationLog, detail_logs, summarize_logs
from foundry.framework.operations import (
    DocumentContext,
    DocumentOperation,
    Operation,
    OperationGroup,
    OperationScope,
    OperationSettings,
    VariantContext,
    VariantOperation,
)
from foundry.framework.profile import Profile
from foundry.framework.queue import DocumentBatch, MergedVariantBatch, OperationMetadata, OperationQueue
from foundry.framework.processor import ExecutionOptions, OperationProcessor, ProcessResult, TransactionMode

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "log_step",
    # Filters
    "NameFilter",
    "Include",
    "Exclude",
    # Logs
    "LogEntry",
    "OperationLog",
    "summarize_logs",
    "detail_logs",
    # Operations
    "Operation",
    "OperationScope",
    "OperationSettings",
    "DocumentOperation",
    "VariantOperation",
    "DocumentContext",
    "VariantContext",
    "OperationGroup",
    # Queue / processor
    "Profile",
    "OperationQueue",
    "DocumentBatch",
    "MergedVariantBatch",
    "OperationMetadata",
    "OperationProcessor",
    "ProcessResult",
    "ExecutionOptions",
    "TransactionMode",
]
