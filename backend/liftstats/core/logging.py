"""
Structured logging configuration.
Logs computation metadata (counts, periods, timings), never raw record contents.
"""
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

import structlog
from structlog.types import Processor

from liftstats.core.config import settings


def setup_logging() -> None:
    """Configure structured logging for the library."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


@dataclass
class ComputationLog:
    """Log entry for a single calculator operation."""
    call_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    operation: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    start_time: float = 0.0
    end_time: float = 0.0
    duration_ms: float = 0.0

    success: bool = True
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    def to_dict(self) -> dict:
        """Summary fields for the completion log line."""
        return {
            "call_id": self.call_id,
            "operation": self.operation,
            "duration_ms": round(self.duration_ms, 2),
            "success": self.success,
            **self.context,
        }


class ComputationTracker:
    """Tracker for a single calculator operation."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **context: Any
    ):
        self.logger = logger
        self.log = ComputationLog(operation=operation, context=dict(context))

    def start(self) -> None:
        """Mark the start of the operation."""
        self.log.start_time = time.time()
        self.logger.debug(
            "Computation started",
            call_id=self.log.call_id,
            operation=self.log.operation,
            **self.log.context,
        )

    def add_context(self, **context: Any) -> None:
        """Attach result metadata (counts, statuses) to the summary line."""
        self.log.context.update(context)

    def set_error(self, error_type: str, error_message: str) -> None:
        """Set error information."""
        self.log.success = False
        self.log.error_type = error_type
        self.log.error_message = error_message

    def finish(self) -> None:
        """Mark the end of the operation and log summary."""
        self.log.end_time = time.time()
        self.log.duration_ms = (self.log.end_time - self.log.start_time) * 1000

        if self.log.success:
            self.logger.info("Computation completed", **self.log.to_dict())
        else:
            self.logger.error(
                "Computation failed",
                error_type=self.log.error_type,
                error_message=self.log.error_message,
                **self.log.to_dict(),
            )


@contextmanager
def track_computation(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    **context: Any
) -> Generator[ComputationTracker, None, None]:
    """
    Context manager that logs start, finish and duration of an operation.

    Usage:
        with track_computation(logger, "goal_progress", goal_type="strength") as call:
            progress = strategy.compute(goal, sessions, today)
            call.add_context(status=progress.status.value)
    """
    tracker = ComputationTracker(logger, operation, **context)
    tracker.start()
    try:
        yield tracker
    except Exception as e:
        tracker.set_error(type(e).__name__, str(e))
        raise
    finally:
        tracker.finish()
