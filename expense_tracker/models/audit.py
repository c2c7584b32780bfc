"""
Audit Models for Expense Tracker

Every mutation of the expense list or the settings, and every storage
failure the stores swallow, is described by an AuditEvent. Swallowed
failures are therefore never invisible: they always leave a log record.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense lifecycle
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_LOADED = "expenses_loaded"

    # Settings
    SETTINGS_LOADED = "settings_loaded"
    SETTINGS_UPDATED = "settings_updated"

    # Input boundary
    VALIDATION_FAILED = "validation_failed"

    # Durable storage
    STORAGE_READ_FAILED = "storage_read_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'settings', 'storage')"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, amount, period)
        event = AuditEventBuilder.storage_write_failed(key, error)
    """

    @staticmethod
    def expense_added(
        expense_id: str,
        amount: str,
        payment_method: str,
        expense_date: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {amount} ({payment_method}) on {expense_date}",
            details={
                "amount": amount,
                "payment_method": payment_method,
                "date": expense_date,
            },
        )

    @staticmethod
    def expense_updated(expense_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense replaced" if found
                else "Expense not found, nothing updated"
            ),
            details={"found": found},
        )

    @staticmethod
    def expense_deleted(expense_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense deleted" if found
                else "Expense not found, nothing deleted"
            ),
            details={"found": found},
        )

    @staticmethod
    def expenses_loaded(storage_key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            entity_type="storage",
            entity_id=storage_key,
            description=f"Loaded {count} expenses",
            details={"count": count},
        )

    @staticmethod
    def settings_loaded(storage_key: str, from_storage: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTINGS_LOADED,
            entity_type="storage",
            entity_id=storage_key,
            description=(
                "Settings loaded from storage" if from_storage
                else "No stored settings, using defaults"
            ),
            details={"from_storage": from_storage},
        )

    @staticmethod
    def settings_updated(changes: dict[str, Any]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTINGS_UPDATED,
            entity_type="settings",
            description="Settings updated",
            details={"changes": changes},
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issue(s)",
            details={"issues": issues},
        )

    @staticmethod
    def storage_read_failed(storage_key: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_READ_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=storage_key,
            description="Stored document unreadable, starting empty",
            error_message=error,
        )

    @staticmethod
    def storage_write_failed(storage_key: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=storage_key,
            description="Could not persist document, in-memory state kept",
            error_message=error,
        )
