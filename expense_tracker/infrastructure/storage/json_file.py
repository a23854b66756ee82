"""JSON file record store - whole file read and rewritten on every save"""

import json
import logging
import os
import tempfile
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Sequence
from expense_tracker.domain.models import ExpenseRecord, ExpenseStatus
from expense_tracker.domain.exceptions import StoreIOError
from expense_tracker.utils.time_utils import to_epoch_ms, from_epoch_ms

logger = logging.getLogger(__name__)


def record_to_json(record: ExpenseRecord) -> Dict[str, Any]:
    """Serialize to the data.json layout (camelCase keys, epoch-ms timestamps, decimal-string cost)"""
    return {
        "id": record.id,
        "person": record.person,
        "item": record.item,
        "cost": str(record.cost),
        "status": record.status.value,
        "addedTimestamp": to_epoch_ms(record.added_at),
        "paidTimestamp": to_epoch_ms(record.paid_at) if record.paid_at else None,
        "paidBatchId": record.paid_batch_id,
    }


def _parse_stored_cost(value: Any) -> Decimal:
    # Older data.json files hold plain numbers, newer ones decimal strings
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"cost must be a number, got {value!r}")
    cost = Decimal(str(value))
    if not cost.is_finite() or cost <= 0:
        raise ValueError(f"cost must be positive and finite, got {value!r}")
    return cost


def record_from_json(data: Dict[str, Any]) -> ExpenseRecord:
    paid_ts = data.get("paidTimestamp")
    return ExpenseRecord(
        id=data["id"],
        person=data["person"],
        item=data["item"],
        cost=_parse_stored_cost(data["cost"]),
        status=ExpenseStatus(data["status"]),
        added_at=from_epoch_ms(data["addedTimestamp"]),
        paid_at=from_epoch_ms(paid_ts) if paid_ts is not None else None,
        paid_batch_id=data.get("paidBatchId"),
    )


class JsonFileRecordStore:
    """Record store backed by a single JSON file"""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_all(self) -> List[ExpenseRecord]:
        """
        Read every expense from the file.

        A missing file means no data yet and yields an empty list.

        Raises:
            StoreIOError: On unreadable file or malformed content
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("Error reading expenses", extra={"path": str(self.path)})
            raise StoreIOError(f"Failed to read {self.path}: {e}") from e

        try:
            return [record_from_json(item) for item in json.loads(raw)]
        except (json.JSONDecodeError, KeyError, ValueError, TypeError, InvalidOperation) as e:
            raise StoreIOError(f"Invalid expense data in {self.path}: {e}") from e

    def save_all(self, records: Sequence[ExpenseRecord]) -> None:
        """Rewrite the file with the full record set (temp file + rename)"""
        payload = json.dumps([record_to_json(r) for r in records], indent=4)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".expenses-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Error writing expenses", extra={"path": str(self.path)})
            raise StoreIOError(f"Failed to write {self.path}: {e}") from e
