"""Expense endpoints - add, list, get, edit, delete, pay and toggle single expenses"""

import time
from fastapi import APIRouter, Depends, Request, Response

from expense_tracker.api.v1.schemas import (
    AddExpenseResponse,
    BatchSchema,
    ExpenseListResponse,
    ExpenseRequest,
    ExpenseSchema,
    PeopleResponse,
)
from expense_tracker.api.v1.errors import to_http_exception
from expense_tracker.api.dependencies import get_ledger, get_request_id
from expense_tracker.config import settings
from expense_tracker.services.ledger import ExpenseLedger
from expense_tracker.infrastructure.observability.metrics import record_action, record_payment
from expense_tracker.infrastructure.observability.logging import log_action
from expense_tracker.utils.time_utils import elapsed_ms

router = APIRouter()


@router.get("/people", response_model=PeopleResponse)
def list_people():
    """Names offered as quick picks on the input form"""
    return PeopleResponse(names=settings.prefilled_names)


@router.post("/expenses", response_model=AddExpenseResponse, status_code=201)
def add_expense(
    request_body: ExpenseRequest,
    request: Request,
    ledger: ExpenseLedger = Depends(get_ledger),
):
    """
    Record a new unpaid expense.

    prefill_person echoes the person back when it is one of the prefilled
    names, so the form can keep it selected for the next entry.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        record = ledger.add_expense(request_body.person, request_body.item, request_body.cost)
    except Exception as e:
        raise to_http_exception(e, "add", request_id)

    record_action("add")
    log_action(request_id, "add", elapsed_ms(start_time), expense_id=record.id, person=record.person)

    return AddExpenseResponse(
        **ExpenseSchema.from_record(record).model_dump(),
        prefill_person=record.person if record.person in settings.prefilled_names else None,
    )


@router.get("/expenses", response_model=ExpenseListResponse)
def list_expenses(request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    try:
        records = ledger.list_expenses()
    except Exception as e:
        raise to_http_exception(e, "list", get_request_id(request))
    return ExpenseListResponse(expenses=[ExpenseSchema.from_record(r) for r in records])


@router.get("/expenses/{expense_id}", response_model=ExpenseSchema)
def get_expense(expense_id: str, request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    """Load one expense, e.g. to prefill the edit form"""
    try:
        record = ledger.get_expense(expense_id)
    except Exception as e:
        raise to_http_exception(e, "get", get_request_id(request))
    return ExpenseSchema.from_record(record)


@router.put("/expenses/{expense_id}", response_model=ExpenseSchema)
def edit_expense(
    expense_id: str,
    request_body: ExpenseRequest,
    request: Request,
    ledger: ExpenseLedger = Depends(get_ledger),
):
    """
    Update person, item and cost of an expense.

    Payment fields are never touched. Editing a paid expense returns 409
    when ALLOW_EDIT_PAID is disabled.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        record = ledger.edit_expense(expense_id, request_body.person, request_body.item, request_body.cost)
    except Exception as e:
        raise to_http_exception(e, "edit", request_id)

    record_action("edit")
    log_action(request_id, "edit", elapsed_ms(start_time), expense_id=expense_id)
    return ExpenseSchema.from_record(record)


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(expense_id: str, request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        ledger.delete_expense(expense_id)
    except Exception as e:
        raise to_http_exception(e, "delete", request_id)

    record_action("delete")
    log_action(request_id, "delete", elapsed_ms(start_time), expense_id=expense_id)
    return Response(status_code=204)


@router.post("/expenses/{expense_id}/pay", response_model=BatchSchema)
def pay_expense(expense_id: str, request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    """Pay a single unpaid expense in a batch of its own (409 if already paid)"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        batch = ledger.pay_expense(expense_id)
    except Exception as e:
        raise to_http_exception(e, "pay_expense", request_id)

    record_action("pay_expense")
    record_payment(len(batch.items))
    log_action(request_id, "pay_expense", elapsed_ms(start_time), expense_id=expense_id, batch_id=batch.batch_id)
    return BatchSchema.from_batch(batch)


@router.post("/expenses/{expense_id}/toggle-paid", response_model=ExpenseSchema)
def toggle_paid(expense_id: str, request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    """Flip an expense between paid and unpaid"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        record = ledger.toggle_paid(expense_id)
    except Exception as e:
        raise to_http_exception(e, "toggle_paid", request_id)

    record_action("toggle_paid")
    if record.is_paid:
        record_payment(1)
    log_action(
        request_id, "toggle_paid", elapsed_ms(start_time),
        expense_id=expense_id, status=record.status.value, batch_id=record.paid_batch_id,
    )
    return ExpenseSchema.from_record(record)
