"""Unpaid report endpoints - per-person totals and pay-by-person"""

import time
from decimal import Decimal
from fastapi import APIRouter, Depends, Request

from expense_tracker.api.v1.schemas import BatchSchema, PersonReportSchema, ReportResponse, money
from expense_tracker.api.v1.errors import to_http_exception
from expense_tracker.api.dependencies import get_ledger, get_request_id
from expense_tracker.services.ledger import ExpenseLedger
from expense_tracker.infrastructure.observability.metrics import record_action, record_payment
from expense_tracker.infrastructure.observability.logging import log_action
from expense_tracker.utils.time_utils import elapsed_ms

router = APIRouter()


@router.get("/report", response_model=ReportResponse)
def get_report(request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    """
    Unpaid expenses grouped by person.

    Returns:
        One entry per person with unpaid items (oldest first) and their total
    """
    try:
        report = ledger.unpaid_report()
    except Exception as e:
        raise to_http_exception(e, "report", get_request_id(request))

    people = [PersonReportSchema.from_report(r) for r in report.values()]
    grand_total = sum((r.total for r in report.values()), Decimal("0"))

    return ReportResponse(
        people=people,
        grand_total=grand_total,
        grand_total_formatted=money(grand_total),
    )


@router.post("/report/{person}/pay", response_model=BatchSchema)
def pay_person(person: str, request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    """
    Mark all unpaid expenses of a person as paid in one batch.

    Returns 404 when the person has nothing unpaid; nothing is written then.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        batch = ledger.pay_person(person)
    except Exception as e:
        raise to_http_exception(e, "pay_person", request_id)

    record_action("pay_person")
    record_payment(len(batch.items))
    log_action(
        request_id, "pay_person", elapsed_ms(start_time),
        person=person, batch_id=batch.batch_id, batch_size=len(batch.items),
    )
    return BatchSchema.from_batch(batch)
