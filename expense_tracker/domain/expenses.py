"""Expense record actions - add, edit, delete and lookup over the full record set"""

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple
from expense_tracker.domain.models import ExpenseRecord, ExpenseStatus
from expense_tracker.domain.exceptions import NotFoundError, ConflictError
from expense_tracker.domain.validation import validate_expense_input
from expense_tracker.utils.time_utils import utc_now


def find_expense(records: Sequence[ExpenseRecord], expense_id: str) -> ExpenseRecord:
    """Return the record with the given id or raise NotFoundError"""
    for record in records:
        if record.id == expense_id:
            return record
    raise NotFoundError(f"Expense {expense_id} not found")


def add_expense(
    records: Sequence[ExpenseRecord],
    person: Any,
    item: Any,
    cost: Any,
    added_at: Optional[datetime] = None,
    expense_id: Optional[str] = None,
) -> Tuple[List[ExpenseRecord], ExpenseRecord]:
    """Validate input and append a new unpaid expense"""
    person, item, cost = validate_expense_input(person, item, cost)

    record = ExpenseRecord(
        id=expense_id or str(uuid.uuid4()),
        person=person,
        item=item,
        cost=cost,
        status=ExpenseStatus.UNPAID,
        added_at=added_at or utc_now(),
    )
    return [*records, record], record


def edit_expense(
    records: Sequence[ExpenseRecord],
    expense_id: str,
    person: Any,
    item: Any,
    cost: Any,
    allow_paid: bool = True,
) -> Tuple[List[ExpenseRecord], ExpenseRecord]:
    """
    Overwrite person, item and cost of an expense.

    Status, payment fields, id and added_at are left untouched.

    Raises:
        InvalidInputError: Input fails validation (checked first)
        NotFoundError: No expense with that id
        ConflictError: Expense is paid and allow_paid is False
    """
    person, item, cost = validate_expense_input(person, item, cost)

    record = find_expense(records, expense_id)
    if record.is_paid and not allow_paid:
        raise ConflictError(f"Expense {expense_id} is paid and cannot be edited")

    edited = replace(record, person=person, item=item, cost=cost)
    return [edited if r.id == expense_id else r for r in records], edited


def delete_expense(
    records: Sequence[ExpenseRecord],
    expense_id: str,
) -> Tuple[List[ExpenseRecord], ExpenseRecord]:
    """Remove one expense; batch siblings keep their batch id and paid_at"""
    record = find_expense(records, expense_id)
    return [r for r in records if r.id != expense_id], record
