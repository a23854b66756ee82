"""SQL-backed record store"""

from decimal import Decimal, InvalidOperation
from typing import List, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from expense_tracker.infrastructure.database.models import ExpenseRow
from expense_tracker.domain.models import ExpenseRecord, ExpenseStatus
from expense_tracker.domain.exceptions import StoreIOError
from expense_tracker.utils.time_utils import ensure_utc


def _to_record(row: ExpenseRow) -> ExpenseRecord:
    return ExpenseRecord(
        id=row.id,
        person=row.person,
        item=row.item,
        cost=Decimal(row.cost),
        status=ExpenseStatus(row.status),
        added_at=ensure_utc(row.added_at),
        paid_at=ensure_utc(row.paid_at) if row.paid_at else None,
        paid_batch_id=row.paid_batch_id,
    )


def _apply(row: ExpenseRow, record: ExpenseRecord, position: int) -> None:
    row.position = position
    row.person = record.person
    row.item = record.item
    row.cost = str(record.cost)
    row.status = record.status.value
    row.added_at = record.added_at
    row.paid_at = record.paid_at
    row.paid_batch_id = record.paid_batch_id


class SqlRecordStore:
    """Record store over the expense table, one row per record"""

    def __init__(self, db: Session):
        self.db = db

    def load_all(self) -> List[ExpenseRecord]:
        """Fetch every expense in record-set order"""
        try:
            rows = self.db.query(ExpenseRow).order_by(ExpenseRow.position, ExpenseRow.added_at).all()
            return [_to_record(row) for row in rows]
        except SQLAlchemyError as e:
            raise StoreIOError(f"Failed to load expenses: {e}") from e
        except (ValueError, InvalidOperation) as e:
            raise StoreIOError(f"Invalid expense data in database: {e}") from e

    def save_all(self, records: Sequence[ExpenseRecord]) -> None:
        """Reconcile the table with the given record set in one transaction"""
        try:
            existing = {row.id: row for row in self.db.query(ExpenseRow).all()}

            for position, record in enumerate(records):
                row = existing.pop(record.id, None)
                if row is None:
                    row = ExpenseRow(id=record.id)
                    self.db.add(row)
                _apply(row, record, position)

            # Anything left over is no longer part of the set
            for row in existing.values():
                self.db.delete(row)

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreIOError(f"Failed to save expenses: {e}") from e
