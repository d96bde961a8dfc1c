"""Thread-safe in-memory expense store with monotonically increasing ids."""
from __future__ import annotations

import logging
from dataclasses import replace
from threading import Lock

from expense_api.models import Expense

logger = logging.getLogger(__name__)


class ExpenseStore:
    """Volatile expense storage; lives for the lifetime of the process.

    A single lock guards both the record map and the id counter, so id
    assignment and insertion happen as one step. Stored records are never
    mutated in place: updates swap in a new object and readers receive
    copies.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._expenses: dict[int, Expense] = {}
        self._next_id = 1

    def create(self, expense: Expense) -> Expense:
        with self._lock:
            if expense.id is None:
                expense_id = self._next_id
                self._next_id += 1
            else:
                expense_id = expense.id
                self._next_id = max(self._next_id, expense_id + 1)
            stored = replace(expense, id=expense_id)
            self._expenses[expense_id] = stored
        logger.debug("stored expense %s", expense_id)
        return replace(stored)

    def find_by_id(self, expense_id: int) -> Expense | None:
        with self._lock:
            expense = self._expenses.get(expense_id)
        return replace(expense) if expense is not None else None

    def find_all(self) -> list[Expense]:
        with self._lock:
            snapshot = list(self._expenses.values())
        return [replace(e) for e in snapshot]

    def find_by_user_id(self, user_id: str) -> list[Expense]:
        return [e for e in self.find_all() if e.user_id == user_id]

    def find_by_category(self, category: str) -> list[Expense]:
        return [e for e in self.find_all() if e.category == category]

    def update(self, expense: Expense) -> Expense | None:
        """Replace the mutable fields of an existing expense.

        Returns ``None`` when the id is unknown; the store is left untouched
        in that case. ``id`` and ``date`` always keep their stored values.
        """
        if expense.id is None:
            return None
        with self._lock:
            current = self._expenses.get(expense.id)
            if current is None:
                return None
            updated = replace(
                current,
                description=expense.description,
                amount=expense.amount,
                category=expense.category,
                user_id=expense.user_id,
            )
            self._expenses[expense.id] = updated
        return replace(updated)

    def delete_by_id(self, expense_id: int) -> bool:
        with self._lock:
            removed = self._expenses.pop(expense_id, None)
        return removed is not None

    def delete_all(self) -> None:
        # counter is not reset; ids are never reused
        with self._lock:
            self._expenses.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._expenses)

    def exists_by_id(self, expense_id: int) -> bool:
        with self._lock:
            return expense_id in self._expenses
