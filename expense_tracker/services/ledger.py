"""Expense ledger - action boundary between requests and the record store"""

import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar
from expense_tracker.domain.models import ExpenseRecord, PersonReport, HistoryBatch
from expense_tracker.domain.store import RecordStore
from expense_tracker.domain import aggregation, batching, expenses
from expense_tracker.utils.time_utils import utc_now, truncate_to_ms

T = TypeVar("T")


class ExpenseLedger:
    """
    Runs expense actions against a record store.

    Every mutation loads the full record set, computes the new set with the
    pure domain functions and saves it back as one unit. Domain errors are
    raised before save_all, so a failed action never writes. Mutations are
    serialized through a lock shared by all ledgers in the process.
    """

    def __init__(
        self,
        store: RecordStore,
        allow_edit_paid: bool = True,
        lock: Optional[threading.Lock] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.allow_edit_paid = allow_edit_paid
        self.lock = lock or threading.Lock()
        self.clock = clock

    def _now(self) -> datetime:
        # JSON files keep epoch milliseconds; returned records must match what is stored
        return truncate_to_ms(self.clock())

    def _mutate(self, action: Callable[[List[ExpenseRecord]], Tuple[List[ExpenseRecord], T]]) -> T:
        with self.lock:
            records = self.store.load_all()
            updated, result = action(records)
            self.store.save_all(updated)
            return result

    # Queries

    def list_expenses(self) -> List[ExpenseRecord]:
        return self.store.load_all()

    def get_expense(self, expense_id: str) -> ExpenseRecord:
        return expenses.find_expense(self.store.load_all(), expense_id)

    def unpaid_report(self) -> Dict[str, PersonReport]:
        return aggregation.build_unpaid_report(self.store.load_all())

    def history(self) -> List[HistoryBatch]:
        return aggregation.build_history(self.store.load_all())

    # Record actions

    def add_expense(self, person: Any, item: Any, cost: Any) -> ExpenseRecord:
        return self._mutate(
            lambda records: expenses.add_expense(records, person, item, cost, added_at=self._now())
        )

    def edit_expense(self, expense_id: str, person: Any, item: Any, cost: Any) -> ExpenseRecord:
        return self._mutate(
            lambda records: expenses.edit_expense(
                records, expense_id, person, item, cost, allow_paid=self.allow_edit_paid
            )
        )

    def delete_expense(self, expense_id: str) -> ExpenseRecord:
        return self._mutate(lambda records: expenses.delete_expense(records, expense_id))

    # Payment actions

    def pay_person(self, person: str) -> HistoryBatch:
        """Pay every unpaid expense of a person as one batch"""
        cohort = self._mutate(
            lambda records: batching.pay_person(records, person, paid_at=self._now())
        )
        return aggregation.build_history(cohort)[0]

    def pay_expense(self, expense_id: str) -> HistoryBatch:
        """Pay a single expense as its own batch"""
        paid = self._mutate(
            lambda records: batching.pay_expense(records, expense_id, paid_at=self._now())
        )
        return aggregation.build_history([paid])[0]

    def toggle_paid(self, expense_id: str) -> ExpenseRecord:
        return self._mutate(
            lambda records: batching.toggle_paid(records, expense_id, paid_at=self._now())
        )
