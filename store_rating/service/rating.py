"""
Rating aggregation and rating upsert.

Averages are rounded to two decimals with round-half-away-from-zero
(ROUND_HALF_UP on the non-negative score domain), so 4.125 becomes 4.13.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Mapping, NamedTuple, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store_rating.core.errors import NotFound, ValidationError
from store_rating.model.rating import Rating
from store_rating.repository import rating as rating_repository
from store_rating.repository import store as store_repository

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5
TOP_RATED_LIMIT = 3
SCORE_MESSAGE = f"Rating must be an integer between {MIN_SCORE} and {MAX_SCORE}"

_TWO_PLACES = Decimal("0.01")


class Aggregate(NamedTuple):
    average: Optional[float]
    count: int


class RankedAggregate(NamedTuple):
    id: str
    average: float
    count: int


@dataclass
class UpsertResult:
    rating: Rating
    created: bool


def round_average(total: int, count: int) -> float:
    value = (Decimal(total) / Decimal(count)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return float(value)


def aggregate(scores: Sequence[int]) -> Aggregate:
    count = len(scores)
    if count == 0:
        return Aggregate(average=None, count=0)
    return Aggregate(average=round_average(sum(scores), count), count=count)


def rank_top(aggregates_by_id: Mapping[str, Aggregate], k: int = TOP_RATED_LIMIT) -> List[RankedAggregate]:
    """
    Highest average first, ties broken by higher count.

    Entries without ratings are dropped. Fully tied entries keep their input
    order because sorted() is stable.
    """
    ranked = [
        RankedAggregate(id=key, average=agg.average, count=agg.count)
        for key, agg in aggregates_by_id.items()
        if agg.count > 0
    ]
    ranked = sorted(ranked, key=lambda entry: (-entry.average, -entry.count))
    return ranked[:max(k, 0)]


def validate_score(score) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(SCORE_MESSAGE, field="rating")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(SCORE_MESSAGE, field="rating")
    return score


def upsert_rating(db: Session, rater_id: str, store_id: str, score: int) -> UpsertResult:
    """Insert the rater's score for a store, or replace the existing one."""
    validate_score(score)

    existing = rating_repository.get_rating(db, rater_id, store_id)
    if existing:
        updated = rating_repository.update_rating(db, existing, score)
        logger.info("Rating updated: user=%s store=%s score=%s", rater_id, store_id, score)
        return UpsertResult(rating=updated, created=False)

    try:
        created = rating_repository.insert_rating(db, rater_id, store_id, score)
    except IntegrityError:
        # a concurrent submission inserted the row first; last writer wins
        db.rollback()
        existing = rating_repository.get_rating(db, rater_id, store_id)
        if existing is None:
            raise
        updated = rating_repository.update_rating(db, existing, score)
        logger.info("Rating updated after race: user=%s store=%s score=%s", rater_id, store_id, score)
        return UpsertResult(rating=updated, created=False)

    logger.info("Rating created: user=%s store=%s score=%s", rater_id, store_id, score)
    return UpsertResult(rating=created, created=True)


def submit_rating(db: Session, rater_id: str, store_id: str, score: int) -> UpsertResult:
    validate_score(score)
    if not store_repository.get_store(db, id=store_id):
        raise NotFound("Store not found")
    return upsert_rating(db, rater_id, store_id, score)


def get_own_rating(db: Session, rater_id: str, store_id: str) -> Optional[int]:
    existing = rating_repository.get_rating(db, rater_id, store_id)
    return existing.rating if existing else None
