"""Translate domain exceptions into HTTP errors"""

import logging
from fastapi import HTTPException
from expense_tracker.domain.exceptions import (
    InvalidInputError,
    NotFoundError,
    AlreadyPaidError,
    ConflictError,
    StoreIOError,
)
from expense_tracker.infrastructure.observability.metrics import record_action, store_failures_counter

ERROR_RESPONSES = {
    InvalidInputError: (422, "invalid_input"),
    NotFoundError: (404, "not_found"),
    AlreadyPaidError: (409, "already_paid"),
    ConflictError: (409, "conflict"),
}


def to_http_exception(exc: Exception, action: str, request_id: str) -> HTTPException:
    """Log and count a failed action, then build the matching HTTPException"""
    if isinstance(exc, StoreIOError):
        store_failures_counter.inc()
        record_action(action, "store_error")
        logging.error(f"Record store error: {exc}", extra={"request_id": request_id, "action": action})
        return HTTPException(status_code=503, detail="Expense storage unavailable")

    for exc_type, (status_code, outcome) in ERROR_RESPONSES.items():
        if isinstance(exc, exc_type):
            record_action(action, outcome)
            logging.warning(f"{action} rejected: {exc}", extra={"request_id": request_id, "action": action})
            return HTTPException(status_code=status_code, detail=str(exc))

    record_action(action, "error")
    logging.error(f"Unexpected error: {exc}", extra={"request_id": request_id, "action": action})
    return HTTPException(status_code=500, detail="Internal server error")
