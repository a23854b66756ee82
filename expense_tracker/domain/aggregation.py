"""Unpaid report and payment history aggregation over the full record set"""

from decimal import Decimal
from typing import Dict, List, Sequence, Tuple
from expense_tracker.domain.models import ExpenseRecord, ExpenseStatus, PersonReport, HistoryBatch


def partition_by_status(
    records: Sequence[ExpenseRecord],
) -> Tuple[List[ExpenseRecord], List[ExpenseRecord]]:
    """Split records into (unpaid, paid), each in record order"""
    unpaid = [r for r in records if r.status == ExpenseStatus.UNPAID]
    paid = [r for r in records if r.status == ExpenseStatus.PAID]
    return unpaid, paid


def sum_costs(records: Sequence[ExpenseRecord]) -> Decimal:
    return sum((r.cost for r in records), Decimal("0"))


def build_unpaid_report(records: Sequence[ExpenseRecord]) -> Dict[str, PersonReport]:
    """
    Group unpaid expenses by person and total them.

    Requirements:
    - Only unpaid records contribute
    - Grouping key is the exact person string as stored
    - Items ordered by added_at; equal timestamps keep record order
    - People appear in the order they first show up in the record set

    Returns:
        Mapping of person name to PersonReport (people with nothing unpaid are absent)
    """
    unpaid, _ = partition_by_status(records)

    report: Dict[str, PersonReport] = {}
    for record in unpaid:
        report.setdefault(record.person, PersonReport(person=record.person)).items.append(record)

    for person_report in report.values():
        # sorted() is stable, so insertion order breaks timestamp ties
        person_report.items = sorted(person_report.items, key=lambda r: r.added_at)
        person_report.total = sum_costs(person_report.items)

    return report


def build_history(records: Sequence[ExpenseRecord]) -> List[HistoryBatch]:
    """
    Regroup paid expenses into the batches they were paid in.

    Requirements:
    - Only paid records with a batch id; a paid record without one is skipped
    - Each batch adopts the person and paid_at of its records
    - Batches ordered most recent payment first
    - Items within a batch ordered by added_at
    """
    _, paid = partition_by_status(records)

    batches: Dict[str, HistoryBatch] = {}
    for record in paid:
        if not record.paid_batch_id:
            continue
        batch = batches.get(record.paid_batch_id)
        if batch is None:
            batch = HistoryBatch(
                batch_id=record.paid_batch_id,
                person=record.person,
                paid_at=record.paid_at,
            )
            batches[record.paid_batch_id] = batch
        batch.items.append(record)

    for batch in batches.values():
        batch.items = sorted(batch.items, key=lambda r: r.added_at)
        batch.total = sum_costs(batch.items)

    return sorted(batches.values(), key=lambda b: b.paid_at, reverse=True)
