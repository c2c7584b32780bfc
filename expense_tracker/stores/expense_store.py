"""
Expense Store

The single source of truth for the expense collection.

DESIGN DECISION: The store owns its state. There is no module-level
list and no singleton; each app instance (and each test) builds its own
store around an injected storage backend.

Every mutating call:
1. Replaces the in-memory collection with a new immutable tuple
2. Writes the FULL collection to storage (no incremental diff)
3. Notifies every subscriber, in registration order, with that tuple

Storage failures never abort a call. A failed read at start-up means an
empty collection; a failed write leaves the in-memory state authoritative
for the session. Both are audit-logged.
"""

import json
from typing import Callable, Optional
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.billing import filter_by_period
from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.services.storage import DocumentStorageInterface, StorageError
from expense_tracker.validation import ExpenseInput, InvalidExpenseError, parse_expense_draft


Snapshot = tuple[Expense, ...]
ExpenseListener = Callable[[Snapshot], None]
Unsubscribe = Callable[[], None]

DEFAULT_EXPENSES_KEY = "personal-expenses"

_EXPENSE_LIST = TypeAdapter(list[Expense])


def _new_expense_id() -> str:
    return str(uuid4())


class ExpenseStore:
    """
    In-memory expense collection persisted to a document storage backend.

    Single-threaded and synchronous: every operation has completed,
    including persistence and notification, when it returns.
    """

    def __init__(
        self,
        storage: DocumentStorageInterface,
        storage_key: str = DEFAULT_EXPENSES_KEY,
        audit_logger: Optional[AuditLogger] = None,
        id_factory: Callable[[], str] = _new_expense_id,
    ):
        """
        Initialize the store and load the persisted collection.

        Args:
            storage: Backend holding the expense document
            storage_key: Key of the expense document
            audit_logger: Where mutations and failures are logged
            id_factory: Produces candidate ids for new expenses
        """
        self._storage = storage
        self._key = storage_key
        self._audit = audit_logger or AuditLogger()
        self._id_factory = id_factory
        self._expenses: Snapshot = ()
        self._listeners: list[tuple[object, ExpenseListener]] = []
        self._expenses = self._load()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load(self) -> Snapshot:
        try:
            raw = self._storage.read(self._key)
        except StorageError as e:
            self._audit.log_storage_read_failed(self._key, str(e))
            return ()

        if raw is None:
            self._audit.log_expenses_loaded(self._key, 0)
            return ()

        try:
            expenses = tuple(_EXPENSE_LIST.validate_json(raw))
        except PydanticValidationError as e:
            self._audit.log_storage_read_failed(self._key, str(e))
            return ()

        self._audit.log_expenses_loaded(self._key, len(expenses))
        return expenses

    def _persist(self) -> None:
        document = json.dumps(
            [expense.to_document() for expense in self._expenses],
            ensure_ascii=False,
        )
        try:
            self._storage.write(self._key, document)
        except StorageError as e:
            self._audit.log_storage_write_failed(self._key, str(e))

    def reload(self) -> Snapshot:
        """Discard in-memory state and re-read the stored document."""
        self._expenses = self._load()
        self._notify()
        return self._expenses

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: ExpenseListener) -> Unsubscribe:
        """
        Register a listener for collection changes.

        Returns:
            A disposer; calling it unregisters this subscription.
            Calling it more than once is harmless.
        """
        token = object()
        self._listeners.append((token, listener))

        def unsubscribe() -> None:
            self._listeners = [
                entry for entry in self._listeners if entry[0] is not token
            ]

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self._expenses
        # Listeners may unsubscribe while being notified.
        for _, listener in list(self._listeners):
            listener(snapshot)

    def _commit(self, expenses: Snapshot) -> None:
        self._expenses = expenses
        self._persist()
        self._notify()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def _parse(self, data: ExpenseInput) -> ExpenseDraft:
        try:
            return parse_expense_draft(data)
        except InvalidExpenseError as e:
            self._audit.log_validation_failed(
                [issue.model_dump() for issue in e.issues]
            )
            raise

    def _unique_id(self) -> str:
        taken = {expense.id for expense in self._expenses}
        expense_id = self._id_factory()
        while expense_id in taken:
            expense_id = self._id_factory()
        return expense_id

    def add(self, data: ExpenseInput) -> Expense:
        """
        Add a new expense.

        Args:
            data: An ExpenseDraft or a mapping describing one

        Returns:
            The stored expense with its freshly assigned id

        Raises:
            InvalidExpenseError: If data is not a valid expense
        """
        draft = self._parse(data)
        expense = Expense.from_draft(draft, self._unique_id())
        self._audit.log_expense_added(expense)
        self._commit(self._expenses + (expense,))
        return expense

    def update(self, expense_id: str, data: ExpenseInput) -> None:
        """
        Replace every field of an expense except its id.

        Unknown ids leave the collection unchanged.

        Raises:
            InvalidExpenseError: If data is not a valid expense
        """
        draft = self._parse(data)
        found = False
        updated = []
        for expense in self._expenses:
            if expense.id == expense_id:
                updated.append(Expense.from_draft(draft, expense_id))
                found = True
            else:
                updated.append(expense)

        self._audit.log_expense_updated(expense_id, found)
        self._commit(tuple(updated))

    def delete(self, expense_id: str) -> None:
        """Remove an expense. Unknown ids leave the collection unchanged."""
        remaining = tuple(
            expense for expense in self._expenses if expense.id != expense_id
        )
        self._audit.log_expense_deleted(
            expense_id, found=len(remaining) != len(self._expenses)
        )
        self._commit(remaining)

    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def list(self) -> Snapshot:
        """Current collection. Consumers sort as they need."""
        return self._expenses

    def filter_by_period(
        self,
        year: int,
        month: int,
        closing_day: int,
    ) -> Snapshot:
        """Expenses attributed to (year, month); month is 1-12."""
        return filter_by_period(self._expenses, year, month, closing_day)

    def __len__(self) -> int:
        return len(self._expenses)
