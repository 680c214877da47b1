"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of what each CLI run did to the data file
2. Debugging capability when a ledger looks wrong
3. A record of limit breaches

The audit logger:
- Logs through structlog on top of stdlib logging
- Keeps the events of the current run in memory for inspection
- Tags every event of one run with the same correlation ID
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from fintrack.config.settings import LoggingSettings
from fintrack.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from fintrack.models.ledger import Category, Transaction


SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


# Default configuration; the CLI calls configure_logging() to apply settings
structlog.configure(
    processors=SHARED_PROCESSORS + [structlog.processors.JSONRenderer()],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Route structlog output to stderr at the configured level.

    stdout is reserved for command output, so logs never mix into
    tables or exported data.
    """
    settings = settings or LoggingSettings()

    if settings.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.level_number,
        force=True,
    )
    structlog.configure(
        processors=SHARED_PROCESSORS + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    One instance per CLI run. The store reports its changes here and the
    CLI reports what happens around the store (limit breaches, exports,
    fatal errors).
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self._correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("fintrack.audit")
        self._events: list[AuditEvent] = []

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    @property
    def events(self) -> list[AuditEvent]:
        """Events logged so far, oldest first."""
        return list(self._events)

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Events without a correlation ID get this logger's.
        Returns the event as recorded.
        """
        if event.correlation_id is None:
            event = event.model_copy(update={"correlation_id": self._correlation_id})
        self._events.append(event)

        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return event

    def log_store_created(self, path: str) -> None:
        self.log(AuditEventBuilder.store_created(path))

    def log_store_loaded(
        self,
        path: str,
        transaction_count: int,
        category_count: int,
    ) -> None:
        self.log(AuditEventBuilder.store_loaded(
            path=path,
            transaction_count=transaction_count,
            category_count=category_count,
        ))

    def log_transaction_added(self, transaction: Transaction) -> None:
        self.log(AuditEventBuilder.transaction_added(transaction))

    def log_transaction_deleted(self, transaction_id: int, removed: bool) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction_id, removed))

    def log_transactions_exported(self, path: str, count: int) -> None:
        self.log(AuditEventBuilder.transactions_exported(path, count))

    def log_category_added(self, category: Category) -> None:
        self.log(AuditEventBuilder.category_added(category))

    def log_category_deleted(
        self,
        category_id: int,
        removed: bool,
        cleared: int,
    ) -> None:
        """Log a category delete, plus the cascade if it touched anything."""
        self.log(AuditEventBuilder.category_deleted(category_id, removed))
        if cleared:
            self.log(AuditEventBuilder.category_cascade_cleared(category_id, cleared))

    def log_limit_changed(self, limit: Optional[float]) -> None:
        if limit is None:
            self.log(AuditEventBuilder.limit_cleared())
        else:
            self.log(AuditEventBuilder.limit_set(limit))

    def log_limit_exceeded(self, month: str, limit: float, spent: float) -> None:
        self.log(AuditEventBuilder.limit_exceeded(month, limit, spent))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    The CLI creates one per invocation.
    """
    return uuid4()
