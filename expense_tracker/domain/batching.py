"""Payment actions - stamp a cohort of expenses with one batch id and timestamp"""

import uuid
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from expense_tracker.domain.models import ExpenseRecord, ExpenseStatus
from expense_tracker.domain.exceptions import NotFoundError, AlreadyPaidError
from expense_tracker.domain.expenses import find_expense
from expense_tracker.utils.time_utils import utc_now


def new_batch_id() -> str:
    """Generate a collision-free batch identifier"""
    return f"batch-{uuid.uuid4()}"


def _mark_paid(record: ExpenseRecord, paid_at: datetime, batch_id: str) -> ExpenseRecord:
    return replace(record, status=ExpenseStatus.PAID, paid_at=paid_at, paid_batch_id=batch_id)


def _mark_unpaid(record: ExpenseRecord) -> ExpenseRecord:
    return replace(record, status=ExpenseStatus.UNPAID, paid_at=None, paid_batch_id=None)


def pay_person(
    records: Sequence[ExpenseRecord],
    person: str,
    paid_at: Optional[datetime] = None,
    batch_id: Optional[str] = None,
) -> Tuple[List[ExpenseRecord], List[ExpenseRecord]]:
    """
    Mark every unpaid expense of a person as paid in a single batch.

    All selected records share one batch id and one paid_at. Records keep
    their position in the list; every other record is returned unchanged.

    Raises:
        NotFoundError: Person has no unpaid expenses (nothing is changed)

    Returns:
        (updated record list, newly paid records in record order)
    """
    selected_ids = {
        r.id for r in records
        if r.person == person and r.status == ExpenseStatus.UNPAID
    }
    if not selected_ids:
        raise NotFoundError(f"No unpaid items found for {person}")

    paid_at = paid_at or utc_now()
    batch_id = batch_id or new_batch_id()

    updated = [
        _mark_paid(r, paid_at, batch_id) if r.id in selected_ids else r
        for r in records
    ]
    cohort = [r for r in updated if r.id in selected_ids]
    return updated, cohort


def pay_expense(
    records: Sequence[ExpenseRecord],
    expense_id: str,
    paid_at: Optional[datetime] = None,
    batch_id: Optional[str] = None,
) -> Tuple[List[ExpenseRecord], ExpenseRecord]:
    """
    Mark a single unpaid expense as paid in its own batch.

    Raises:
        NotFoundError: No expense with that id
        AlreadyPaidError: Expense is already paid
    """
    record = find_expense(records, expense_id)
    if record.is_paid:
        raise AlreadyPaidError(f"Expense {expense_id} is already paid")

    paid = _mark_paid(record, paid_at or utc_now(), batch_id or new_batch_id())
    return [paid if r.id == expense_id else r for r in records], paid


def toggle_paid(
    records: Sequence[ExpenseRecord],
    expense_id: str,
    paid_at: Optional[datetime] = None,
    batch_id: Optional[str] = None,
) -> Tuple[List[ExpenseRecord], ExpenseRecord]:
    """
    Flip an expense between paid and unpaid.

    Paying starts a fresh singleton batch; reverting clears paid_at and
    paid_batch_id so the old batch id is never reused.
    """
    record = find_expense(records, expense_id)
    if record.is_paid:
        toggled = _mark_unpaid(record)
    else:
        toggled = _mark_paid(record, paid_at or utc_now(), batch_id or new_batch_id())
    return [toggled if r.id == expense_id else r for r in records], toggled
