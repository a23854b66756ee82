"""Record store contract - persistence boundary for the full expense set"""

from typing import List, Protocol, Sequence
from expense_tracker.domain.models import ExpenseRecord


class RecordStore(Protocol):
    """
    Load-all/save-all persistence for expense records.

    load_all returns an empty list when no data exists yet; any other
    read or write failure raises StoreIOError.
    """

    def load_all(self) -> List[ExpenseRecord]:
        ...

    def save_all(self, records: Sequence[ExpenseRecord]) -> None:
        ...
