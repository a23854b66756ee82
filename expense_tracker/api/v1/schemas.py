"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr
from expense_tracker.config import settings
from expense_tracker.domain.models import ExpenseRecord, PersonReport, HistoryBatch
from expense_tracker.utils.currency import format_currency


def money(amount: Decimal) -> str:
    return format_currency(amount, settings.currency_code, settings.currency_locale)


class ExpenseRequest(BaseModel):
    """Request body for POST /v1/expenses and PUT /v1/expenses/{id}

    Fields are loosely typed on purpose; trimming and cost parsing happen in
    the domain validation so every entry point shares the same rules.
    """

    person: Optional[str] = Field(None, description="Name of the person who owes")
    item: Optional[str] = Field(None, description="What the expense was for")
    # Strict types keep JSON booleans from being coerced to 1.0 before validation
    cost: Union[StrictStr, StrictFloat, StrictInt, None] = Field(None, description="Positive amount, e.g. 50.75")


class ExpenseSchema(BaseModel):
    """Single expense"""

    id: str
    person: str
    item: str
    cost: Decimal
    cost_formatted: str
    status: str
    added_at: datetime
    paid_at: Optional[datetime] = None
    paid_batch_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: ExpenseRecord) -> "ExpenseSchema":
        return cls(
            id=record.id,
            person=record.person,
            item=record.item,
            cost=record.cost,
            cost_formatted=money(record.cost),
            status=record.status.value,
            added_at=record.added_at,
            paid_at=record.paid_at,
            paid_batch_id=record.paid_batch_id,
        )


class AddExpenseResponse(ExpenseSchema):
    """Response for POST /v1/expenses"""

    prefill_person: Optional[str] = None


class ExpenseListResponse(BaseModel):
    expenses: List[ExpenseSchema]


class PeopleResponse(BaseModel):
    """Response for GET /v1/people"""

    names: List[str]


class PersonReportSchema(BaseModel):
    """Unpaid expenses of one person"""

    person: str
    items: List[ExpenseSchema]
    total: Decimal
    total_formatted: str

    @classmethod
    def from_report(cls, report: PersonReport) -> "PersonReportSchema":
        return cls(
            person=report.person,
            items=[ExpenseSchema.from_record(r) for r in report.items],
            total=report.total,
            total_formatted=money(report.total),
        )


class ReportResponse(BaseModel):
    """Response for GET /v1/report"""

    people: List[PersonReportSchema]
    grand_total: Decimal
    grand_total_formatted: str


class BatchSchema(BaseModel):
    """Expenses paid together in one payment"""

    batch_id: str
    person: str
    paid_at: datetime
    items: List[ExpenseSchema]
    total: Decimal
    total_formatted: str

    @classmethod
    def from_batch(cls, batch: HistoryBatch) -> "BatchSchema":
        return cls(
            batch_id=batch.batch_id,
            person=batch.person,
            paid_at=batch.paid_at,
            items=[ExpenseSchema.from_record(r) for r in batch.items],
            total=batch.total,
            total_formatted=money(batch.total),
        )


class HistoryResponse(BaseModel):
    """Response for GET /v1/history"""

    batches: List[BatchSchema]
