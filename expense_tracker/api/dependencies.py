"""Dependency injection for FastAPI endpoints"""

import threading
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from expense_tracker.config import settings
from expense_tracker.domain.store import RecordStore
from expense_tracker.infrastructure.database.session import get_db
from expense_tracker.infrastructure.database.repositories import SqlRecordStore
from expense_tracker.infrastructure.storage.json_file import JsonFileRecordStore
from expense_tracker.infrastructure.storage.memory import InMemoryRecordStore
from expense_tracker.services.ledger import ExpenseLedger

# Shared by every request so read-modify-write actions never interleave
mutation_lock = threading.Lock()

memory_store = InMemoryRecordStore()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """Provide the record store selected by settings.store_backend"""
    if settings.store_backend == "json":
        return JsonFileRecordStore(settings.data_file_path)
    if settings.store_backend == "memory":
        return memory_store
    return SqlRecordStore(db)


def get_ledger(store: RecordStore = Depends(get_record_store)) -> ExpenseLedger:
    """Provide an expense ledger bound to the request's record store"""
    return ExpenseLedger(store, allow_edit_paid=settings.allow_edit_paid, lock=mutation_lock)
