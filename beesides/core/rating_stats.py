"""Rating Stats — pure aggregation of stored scores.

Invariants:
    - No IO; inputs are already-fetched rows
    - Zero ratings → average is None, never 0
    - Distribution buckets are the integer floor of each score, 0..10
"""

import math
from dataclasses import dataclass
from typing import Iterable

from beesides.core.domain_types import MAX_SCORE, MIN_SCORE


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float | None
    ratings_count: int

    def to_dict(self) -> dict:
        return {
            "average_rating": self.average_rating,
            "ratings_count": self.ratings_count,
        }


def summarize_scores(
    scores: Iterable[float], ndigits: int | None = None,
) -> RatingSummary:
    """Mean and count of scores; mean rounded only when ndigits is given."""
    values = [float(s) for s in scores if s is not None]
    if not values:
        return RatingSummary(average_rating=None, ratings_count=0)
    average = sum(values) / len(values)
    if ndigits is not None:
        average = round(average, ndigits)
    return RatingSummary(average_rating=average, ratings_count=len(values))


def rating_distribution(scores: Iterable[float]) -> dict[str, int]:
    """Count of scores per integer bucket; keys are "0".."10" for JSON."""
    buckets = {str(b): 0 for b in range(int(MIN_SCORE), int(MAX_SCORE) + 1)}
    for score in scores:
        if score is None:
            continue
        bucket = min(max(math.floor(float(score)), int(MIN_SCORE)), int(MAX_SCORE))
        buckets[str(bucket)] += 1
    return buckets
