"""GET /v1/history - Paid expenses grouped by payment batch"""

from fastapi import APIRouter, Depends, Request

from expense_tracker.api.v1.schemas import BatchSchema, HistoryResponse
from expense_tracker.api.v1.errors import to_http_exception
from expense_tracker.api.dependencies import get_ledger, get_request_id
from expense_tracker.services.ledger import ExpenseLedger

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
def get_history(request: Request, ledger: ExpenseLedger = Depends(get_ledger)):
    """
    Retrieve payment history.

    Returns:
        Payment batches, most recent first, each with its items and total
    """
    try:
        batches = ledger.history()
    except Exception as e:
        raise to_http_exception(e, "history", get_request_id(request))

    return HistoryResponse(batches=[BatchSchema.from_batch(b) for b in batches])
