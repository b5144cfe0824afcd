# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with compiler context
# PURPOSE: Tag every compiler log record with the table and field in flight
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Every pipeline stage logs through a ContextLogger. The table, field and
operation being compiled are pushed with log_context() and attached to
each record, so a warning from the validator names the table it
rejected without the validator threading that name through its calls.

The library installs no handlers. Applications (and the msi-schema
command) call configure_logging() to get either a compact human format
or one JSON object per line for build-log aggregation.

Usage:
    from msi_schema.logging import ComponentType, get_logger, log_context

    logger = get_logger(__name__, ComponentType.COMPILER)

    with log_context(table="Directory", operation="compile"):
        logger.info("Compiling table", extra={"fields": 3})
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field as dataclass_field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, TextIO, Union

LIBRARY_LOGGER = "msi_schema"


class ComponentType(str, Enum):
    """Pipeline stage that emitted a record."""
    CATALOG = "catalog"
    RESOLVER = "resolver"
    BUILDER = "builder"
    VALIDATOR = "validator"
    EMITTER = "emitter"
    COMPILER = "compiler"
    LOADER = "loader"
    ENTRIES = "entries"
    CLI = "cli"


@dataclass(frozen=True)
class LogContext:
    """What the compiler is working on. Unset entries are omitted."""
    table: Optional[str] = None
    field: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = dataclass_field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            name: value
            for name, value in (
                ("table", self.table),
                ("field", self.field),
                ("operation", self.operation),
            )
            if value is not None
        }
        result.update(self.extra)
        return result


_local = threading.local()


def _frames() -> list:
    if not hasattr(_local, "frames"):
        _local.frames = []
    return _local.frames


def get_current_context() -> LogContext:
    """Innermost context of the calling thread."""
    frames = _frames()
    return frames[-1] if frames else LogContext()


@contextmanager
def log_context(
    table: Optional[str] = None,
    field: Optional[str] = None,
    operation: Optional[str] = None,
    **extra: Any,
):
    """
    Push context for the duration of a block.

    Entries left as None inherit from the enclosing context; keyword
    extras are merged over the enclosing extras.

    Example:
        with log_context(table="File"):
            with log_context(field="file_size"):
                logger.debug("Resolving category")   # table=File, field=file_size
    """
    parent = get_current_context()
    context = LogContext(
        table=table if table is not None else parent.table,
        field=field if field is not None else parent.field,
        operation=operation if operation is not None else parent.operation,
        extra={**parent.extra, **extra},
    )

    frames = _frames()
    frames.append(context)
    try:
        yield context
    finally:
        frames.pop()


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that copies the current LogContext and the component onto
    each record as a single `extra` attribute.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.get("extra") or {})
        data.update(get_current_context().to_dict())
        component = (self.extra or {}).get("component")
        if component:
            data.setdefault("component", component)
        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger for one module of the compiler."""
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component is not None else None},
    )


# ============================================================================
# OUTPUT FORMATS
# ============================================================================

def _record_data(record: logging.LogRecord) -> Dict[str, Any]:
    data = getattr(record, "extra", None)
    return dict(data) if isinstance(data, dict) else {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, context and call data kept apart."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            payload["context"] = context

        data = _record_data(record)
        for key in context:
            data.pop(key, None)
        data.pop("component", None)
        if data:
            payload["data"] = data

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """`HH:MM:SS LEVEL logger [table=.., field=..]: message`"""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        context = get_current_context()

        where = [
            f"{label}={value}"
            for label, value in (
                ("table", context.table),
                ("field", context.field),
                ("op", context.operation),
            )
            if value
        ]
        where_str = f" [{', '.join(where)}]" if where else ""

        line = f"{stamp} {record.levelname:<7} {record.name}{where_str}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """
    Route msi_schema records to a stream.

    Only the library's own logger is touched. Calling again replaces the
    handler installed by the previous call.

    Args:
        level: Log level name or number
        json_output: JSON lines instead of the human format; also enabled
            by MSI_SCHEMA_LOG_FORMAT=json
        stream: Destination (stderr by default)

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if json_output or os.getenv("MSI_SCHEMA_LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    library = logging.getLogger(LIBRARY_LOGGER)
    for existing in list(library.handlers):
        if getattr(existing, "_msi_schema_handler", False):
            library.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    handler._msi_schema_handler = True
    library.addHandler(handler)
    library.setLevel(level)
    return handler


# ============================================================================
# CHECKPOINTS
# ============================================================================

def log_checkpoint(name: str, **data: Any) -> None:
    """
    Mark a pipeline milestone (e.g. "tables_compiled").

    Checkpoint records go to `msi_schema.checkpoint` at INFO so a build
    log can be filtered down to milestones.
    """
    get_logger(f"{LIBRARY_LOGGER}.checkpoint").info(
        f"CHECKPOINT: {name}", extra={"checkpoint": name, **data}
    )


__all__ = [
    "ComponentType",
    "LogContext",
    "ContextLogger",
    "StructuredFormatter",
    "HumanFormatter",
    "get_logger",
    "get_current_context",
    "log_context",
    "configure_logging",
    "log_checkpoint",
]
