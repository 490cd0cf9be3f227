"""In-memory collections owned by a single calculator session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from models.records import ConsumerRecord, EmissionCategory, EmissionRecord, InvalidInput
from services.billing import bill_for
from services.emissions import FootprintSummary, aggregate

logger = logging.getLogger(__name__)


class FootprintSession:
    """Holds at most one emission record per category; re-entry replaces it."""

    def __init__(self) -> None:
        self._records: Dict[EmissionCategory, EmissionRecord] = {}

    def record(self, record: EmissionRecord) -> None:
        category = EmissionCategory(record.category)
        replaced = category in self._records
        self._records[category] = record
        logger.debug(
            "Replaced emission record" if replaced else "Stored emission record",
            extra={"category": category.value},
        )

    def get(self, category: EmissionCategory) -> Optional[EmissionRecord]:
        return self._records.get(category)

    def records(self) -> List[EmissionRecord]:
        return list(self._records.values())

    def summary(self) -> Optional[FootprintSummary]:
        return aggregate(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


@dataclass(frozen=True)
class BillLine:
    """A consumer paired with the bill computed for it."""

    consumer: ConsumerRecord
    amount: float


class BillLedger:
    """Append-only list of consumers billed during a session."""

    def __init__(self) -> None:
        self._consumers: List[ConsumerRecord] = []
        self._ids: set[str] = set()

    def add(self, consumer: ConsumerRecord) -> BillLine:
        if consumer.consumer_id in self._ids:
            logger.warning(
                "Rejected duplicate consumer",
                extra={"consumer_id": consumer.consumer_id, "reason": "duplicate id"},
            )
            raise InvalidInput(f"Consumer ID {consumer.consumer_id!r} already has a bill.")
        line = BillLine(consumer=consumer, amount=bill_for(consumer))
        self._consumers.append(consumer)
        self._ids.add(consumer.consumer_id)
        logger.info(
            "Generated bill",
            extra={
                "consumer_id": consumer.consumer_id,
                "category": consumer.category.value,
                "units": consumer.units,
                "amount": round(line.amount, 2),
            },
        )
        return line

    def lines(self) -> List[BillLine]:
        return [BillLine(consumer=consumer, amount=bill_for(consumer)) for consumer in self._consumers]

    def __len__(self) -> int:
        return len(self._consumers)
