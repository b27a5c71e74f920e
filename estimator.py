"""
estimator.py - The Census Taker

Estimates M, the number of tickets behind a set of prize counts, so that
"137 prizes remaining" can become a probability.

Three strategies:
  TICKET_ANCHOR    total * odds of the free-ticket tier, scaled by its remaining share
  MEDIAN_FALLBACK  median of remaining * odds over every tier with prizes left
  MEAN_RATIO       mean of odds * total (launch pool M0), scaled by
                   sum(remaining) / sum(total)

Single-game analysis tries TICKET_ANCHOR then MEDIAN_FALLBACK. The multi-game
overview uses MEAN_RATIO only because it needs the launch pool and the current
pool from the same base.
"""

import math
import statistics
from typing import Callable, Iterable, Optional, Sequence

from logger import setup_logger
from models import EstimationMethod, NormalizedTier, PoolEstimate

logger = setup_logger(__name__)


def anchor_pool_size(total: float, odds: float, remaining: float) -> float:
    """M0 = total * odds, scaled by the fraction of the tier still out there."""
    launch_pool = total * odds
    fraction = remaining / total
    return launch_pool * fraction


def ticket_anchor(tiers: Sequence[NormalizedTier]) -> Optional[PoolEstimate]:
    anchor = next(
        (t for t in tiers
         if t.is_ticket and t.total > 0 and t.remaining > 0 and not math.isnan(t.odds)),
        None,
    )
    if anchor is None:
        return None

    size = anchor_pool_size(anchor.total, anchor.odds, anchor.remaining)
    if not _usable(size):
        return None
    return PoolEstimate(
        size=size,
        method=EstimationMethod.TICKET_ANCHOR,
        launch_pool=anchor.total * anchor.odds,
    )


def median_fallback(tiers: Sequence[NormalizedTier]) -> Optional[PoolEstimate]:
    estimates = [t.remaining * t.odds for t in tiers if t.remaining > 0 and t.has_odds]
    if not estimates:
        return None

    size = statistics.median(estimates)
    if not _usable(size):
        return None
    return PoolEstimate(size=size, method=EstimationMethod.MEDIAN_FALLBACK)


def is_mean_ratio_tier(tier: NormalizedTier) -> bool:
    """Tiers that take part in the mean-ratio estimate and the overview sums."""
    return tier.total > 0 and tier.has_odds


def mean_ratio(tiers: Sequence[NormalizedTier]) -> Optional[PoolEstimate]:
    valid = [t for t in tiers if is_mean_ratio_tier(t)]
    if not valid:
        return None

    pools = [t.odds * t.total for t in valid]
    launch_pool = sum(pools) / len(pools)

    total_sum = sum(t.total for t in valid)
    remaining_sum = sum(t.remaining for t in valid)
    if total_sum == 0 or remaining_sum == 0 or launch_pool == 0:
        return None

    current_pool = launch_pool * (remaining_sum / total_sum)
    if not _usable(current_pool):
        return None
    return PoolEstimate(
        size=current_pool,
        method=EstimationMethod.MEAN_RATIO,
        launch_pool=launch_pool,
        remaining_sum=remaining_sum,
        total_sum=total_sum,
        calculated_odds=current_pool / remaining_sum,
    )


Strategy = Callable[[Sequence[NormalizedTier]], Optional[PoolEstimate]]

STRATEGIES: dict[EstimationMethod, Strategy] = {
    EstimationMethod.TICKET_ANCHOR: ticket_anchor,
    EstimationMethod.MEDIAN_FALLBACK: median_fallback,
    EstimationMethod.MEAN_RATIO: mean_ratio,
}

SINGLE_GAME = (EstimationMethod.TICKET_ANCHOR, EstimationMethod.MEDIAN_FALLBACK)
COMPARATIVE = (EstimationMethod.MEAN_RATIO,)


def estimate_pool(
    tiers: Sequence[NormalizedTier],
    methods: Iterable[EstimationMethod] = SINGLE_GAME,
) -> Optional[PoolEstimate]:
    """First strategy that yields a positive finite M wins. None if none do."""
    for method in methods:
        estimate = STRATEGIES[method](tiers)
        if estimate is not None:
            logger.debug("Pool estimated", extra={
                "event": "pool_estimated",
                "method": method.value,
                "pool_size": estimate.size,
            })
            return estimate
    return None


def _usable(size: float) -> bool:
    return math.isfinite(size) and size > 0
