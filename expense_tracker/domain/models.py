"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class ExpenseStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


@dataclass(frozen=True)
class ExpenseRecord:
    """Single expense owed by a person"""

    id: str
    person: str
    item: str
    cost: Decimal
    status: ExpenseStatus
    added_at: datetime
    paid_at: Optional[datetime] = None
    paid_batch_id: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.paid_at is None) != (self.paid_batch_id is None):
            raise ValueError(
                f"Expense {self.id}: paid_at and paid_batch_id must be set together"
            )

    @property
    def is_paid(self) -> bool:
        return self.status == ExpenseStatus.PAID


@dataclass
class PersonReport:
    """Unpaid expenses for one person"""

    person: str
    items: List[ExpenseRecord] = field(default_factory=list)
    total: Decimal = Decimal("0")


@dataclass
class HistoryBatch:
    """Expenses paid together in one payment action"""

    batch_id: str
    person: str
    paid_at: datetime
    items: List[ExpenseRecord] = field(default_factory=list)
    total: Decimal = Decimal("0")
