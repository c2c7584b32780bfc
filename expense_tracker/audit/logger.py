"""
Audit Logger

DESIGN DECISION: Every mutation and every swallowed storage failure is
logged. The stores never raise on a failed write, so this log is the only
place such a failure becomes visible.

The audit logger:
- Is synchronous, like the stores that call it
- Writes structured records through structlog
- Never raises into the caller's flow
"""

import logging
from typing import Any

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_tracker.models.expense import Expense


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard library logging module.

    Args:
        level: Minimum level name (DEBUG, INFO, ...)
        json_logs: Render JSON lines; False renders for a terminal
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Turns AuditEvents into structured log records at a level matching
    the event severity.
    """

    def __init__(self, logger_name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_expense_added(self, expense: Expense) -> None:
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense.id,
            amount=str(expense.value),
            payment_method=expense.payment_method.value,
            expense_date=expense.date.isoformat(),
        ))

    def log_expense_updated(self, expense_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, found))

    def log_expense_deleted(self, expense_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id, found))

    def log_expenses_loaded(self, storage_key: str, count: int) -> None:
        self.log(AuditEventBuilder.expenses_loaded(storage_key, count))

    def log_settings_loaded(self, storage_key: str, from_storage: bool) -> None:
        self.log(AuditEventBuilder.settings_loaded(storage_key, from_storage))

    def log_settings_updated(self, changes: dict[str, Any]) -> None:
        self.log(AuditEventBuilder.settings_updated(changes))

    def log_validation_failed(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(issues))

    def log_storage_read_failed(self, storage_key: str, error: str) -> None:
        """Log an unreadable stored document (the store starts empty)."""
        self.log(AuditEventBuilder.storage_read_failed(storage_key, error))

    def log_storage_write_failed(self, storage_key: str, error: str) -> None:
        """Log a write the store swallowed."""
        self.log(AuditEventBuilder.storage_write_failed(storage_key, error))
