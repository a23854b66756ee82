"""In-memory record store - data lives for the lifetime of the process"""

from typing import List, Sequence
from expense_tracker.domain.models import ExpenseRecord


class InMemoryRecordStore:
    """Record store holding the expense list in memory"""

    def __init__(self, records: Sequence[ExpenseRecord] = ()):
        self._records: List[ExpenseRecord] = list(records)

    def load_all(self) -> List[ExpenseRecord]:
        # Records are immutable, a shallow copy isolates callers from the list
        return list(self._records)

    def save_all(self, records: Sequence[ExpenseRecord]) -> None:
        self._records = list(records)
