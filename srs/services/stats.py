from dataclasses import asdict, dataclass

import structlog

from ..data.repos import count_items, history_newest_first, storage_errors
from ..domain.enums import Maturity
from ..domain.logic import classify_maturity
from .queue import get_due_items_count

logger = structlog.get_logger()


@dataclass(frozen=True)
class SrsStats:
    total_items: int
    due_items: int
    new_items: int
    learning_items: int
    mature_items: int

    def as_dict(self):
        return asdict(self)


def get_stats(learner_id, now=None) -> SrsStats:
    buckets = {Maturity.NEW: 0, Maturity.LEARNING: 0, Maturity.MATURE: 0}
    seen = set()
    with storage_errors():
        total = count_items(learner_id)
        # Newest first, so the first record seen per item is its current one
        for item_id, repetition in history_newest_first(learner_id):
            if item_id in seen:
                continue
            seen.add(item_id)
            buckets[classify_maturity(repetition)] += 1

    stats = SrsStats(
        total_items=total,
        due_items=get_due_items_count(learner_id, now=now),
        new_items=buckets[Maturity.NEW],
        learning_items=buckets[Maturity.LEARNING],
        mature_items=buckets[Maturity.MATURE],
    )
    logger.info("stats_computed", learner_id=learner_id, **stats.as_dict())
    return stats
