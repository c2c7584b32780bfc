"""
Settings Store

Holds the user's card closing day, persisted under its own storage key,
independently of the expense document.

The default closing day comes from configuration (BillingSettings) and is
only used when nothing valid is stored.
"""

import json
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic.alias_generators import to_camel

from expense_tracker.audit import AuditLogger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseSettings
from expense_tracker.services.storage import DocumentStorageInterface, StorageError


SettingsListener = Callable[[ExpenseSettings], None]

DEFAULT_SETTINGS_KEY = "expense-settings"

# Accept both snake_case names and the camelCase names used in storage.
_FIELD_NAMES = {
    **{name: name for name in ExpenseSettings.model_fields},
    **{to_camel(name): name for name in ExpenseSettings.model_fields},
}


def default_expense_settings() -> ExpenseSettings:
    return ExpenseSettings(
        card_closing_day=get_settings().billing.default_card_closing_day,
    )


class SettingsStore:
    """Persisted user settings with merge-on-update semantics."""

    def __init__(
        self,
        storage: DocumentStorageInterface,
        storage_key: str = DEFAULT_SETTINGS_KEY,
        defaults: Optional[ExpenseSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = storage_key
        self._defaults = defaults or default_expense_settings()
        self._audit = audit_logger or AuditLogger()
        self._listeners: list[tuple[object, SettingsListener]] = []
        self._settings = self._load()

    def _load(self) -> ExpenseSettings:
        try:
            raw = self._storage.read(self._key)
        except StorageError as e:
            self._audit.log_storage_read_failed(self._key, str(e))
            return self._defaults

        if raw is None:
            self._audit.log_settings_loaded(self._key, from_storage=False)
            return self._defaults

        try:
            stored = json.loads(raw)
            if not isinstance(stored, dict):
                raise ValueError("Settings document is not a JSON object")
            # Fields missing from an older document keep their defaults.
            settings = ExpenseSettings.model_validate(
                {**self._defaults.to_document(), **stored}
            )
        except ValueError as e:
            self._audit.log_storage_read_failed(self._key, str(e))
            return self._defaults

        self._audit.log_settings_loaded(self._key, from_storage=True)
        return settings

    def _persist(self) -> None:
        try:
            self._storage.write(self._key, json.dumps(self._settings.to_document()))
        except StorageError as e:
            self._audit.log_storage_write_failed(self._key, str(e))

    def get(self) -> ExpenseSettings:
        return self._settings

    @property
    def defaults(self) -> ExpenseSettings:
        return self._defaults

    def update(
        self,
        partial: Optional[Mapping[str, Any]] = None,
        **changes: Any,
    ) -> ExpenseSettings:
        """
        Merge changes into the current settings and persist them.

        Fields not mentioned keep their current value.

        Usage:
            store.update(card_closing_day=10)
            store.update({"cardClosingDay": 10})

        Raises:
            ValueError: On an unknown field name
            pydantic.ValidationError: If the merged settings are invalid;
                the current settings are left untouched
        """
        normalized: dict[str, Any] = {}
        for key, value in {**dict(partial or {}), **changes}.items():
            if key not in _FIELD_NAMES:
                raise ValueError(f"Unknown setting: {key}")
            normalized[_FIELD_NAMES[key]] = value

        self._settings = ExpenseSettings.model_validate(
            {**self._settings.model_dump(), **normalized}
        )
        self._audit.log_settings_updated(normalized)
        self._persist()
        self._notify()
        return self._settings

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener; returns a disposer that unregisters it."""
        token = object()
        self._listeners.append((token, listener))

        def unsubscribe() -> None:
            self._listeners = [
                entry for entry in self._listeners if entry[0] is not token
            ]

        return unsubscribe

    def _notify(self) -> None:
        settings = self._settings
        for _, listener in list(self._listeners):
            listener(settings)
