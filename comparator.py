"""
comparator.py - The Scoreboard

Multi-game overview. For each game, the claimed EV (launch state: every prize
still in the pool) is compared against the calculated EV (current remaining
counts), both over a mean-ratio pool estimate, and the drift is expressed as
a percentage of the claimed net EV.

A game that cannot be analysed is left out of the batch; the rest carry on.
"""

import time
from enum import Enum
from typing import Iterable, Optional, Union

from opentelemetry import trace

from calculator import adjust_value, resolve_ticket_values
from estimator import COMPARATIVE, estimate_pool, is_mean_ratio_tier
from formatting import DASH
from logger import setup_logger
from models import ComparativeResult, EVOptions, GameRecord, RawGame
from normalizer import load_game, parse_odds

logger = setup_logger(__name__)
tracer = trace.get_tracer(__name__)


class SortKey(str, Enum):
    PRICE = "price"
    NAME = "name"
    NUMBER = "number"
    CLAIMED_ODDS = "claimed_odds"
    CALC_ODDS = "calc_odds"
    CLAIMED_EV = "claimed_ev"
    CALC_EV = "calc_ev"
    DELTA_PERCENT = "delta_percent"


_SORT_FIELDS = {
    SortKey.PRICE: "price",
    SortKey.NAME: "name",
    SortKey.NUMBER: "number",
    SortKey.CLAIMED_ODDS: "claimed_odds_text",
    SortKey.CALC_ODDS: "calc_odds_value",
    SortKey.CLAIMED_EV: "claimed_ev",
    SortKey.CALC_EV: "calc_ev",
    SortKey.DELTA_PERCENT: "delta_percent",
}

_TEXT_KEYS = (SortKey.NAME, SortKey.NUMBER)


def delta_percent(claimed_net: float, calc_net: float) -> float:
    """Relative drift of the current net EV from the claimed one. Zero when claimed is zero."""
    if claimed_net == 0:
        return 0.0
    return ((calc_net - claimed_net) / abs(claimed_net)) * 100


def compute_overview(game: GameRecord, options: EVOptions) -> Optional[ComparativeResult]:
    price = game.ticket_price
    if not price or not game.tiers:
        return None

    tiers = resolve_ticket_values(game.tiers, price)
    pool = estimate_pool(tiers, COMPARATIVE)
    if pool is None:
        return None

    valid = [t for t in tiers if is_mean_ratio_tier(t)]

    claimed_gross = 0
    for t in valid:
        claimed_gross += adjust_value(t.value, t.is_ticket, options) * t.total
    claimed_gross = claimed_gross / pool.launch_pool
    claimed_net = claimed_gross - price

    calc_gross = 0
    for t in valid:
        calc_gross += adjust_value(t.value, t.is_ticket, options) * t.remaining
    calc_gross = calc_gross / pool.size
    calc_net = calc_gross - price

    return ComparativeResult(
        name=game.name,
        number=game.number,
        price=price,
        claimed_odds_text=game.claimed_odds or DASH,
        claimed_odds_value=parse_odds(game.claimed_odds),
        calc_odds_value=pool.calculated_odds,
        claimed_gross=claimed_gross,
        claimed_ev=claimed_net,
        calc_gross=calc_gross,
        calc_ev=calc_net,
        delta_percent=delta_percent(claimed_net, calc_net),
        pool=pool,
    )


def analyze_batch(
    games: Iterable[Union[dict, RawGame, GameRecord]],
    options: EVOptions,
) -> list[ComparativeResult]:
    """Overview rows in input order. Malformed or unestimable games are skipped."""
    start_time = time.time()
    results = []
    skipped = 0

    with tracer.start_as_current_span("compare_batch") as span:
        for index, item in enumerate(games):
            game = load_game(item)
            result = compute_overview(game, options) if game is not None else None
            if result is None:
                skipped += 1
                logger.warning("Skipping game with no usable estimate", extra={
                    "event": "batch_item_skipped",
                    "game_name": game.name if game is not None else f"#{index}",
                    "game_number": game.number if game is not None else "",
                })
                continue
            results.append(result)

        duration_ms = int((time.time() - start_time) * 1000)
        span.set_attribute("game_count", len(results))
        span.set_attribute("skipped", skipped)
        logger.info("Batch comparison complete", extra={
            "event": "batch_complete",
            "game_count": len(results),
            "skipped": skipped,
            "duration_ms": duration_ms,
        })

    return results


def default_descending(key: SortKey) -> bool:
    """Names and numbers read A-Z; money and odds columns read biggest first."""
    return key not in _TEXT_KEYS


def sort_results(
    results: Iterable[ComparativeResult],
    key: Union[SortKey, str] = SortKey.CALC_EV,
    descending: Optional[bool] = None,
) -> list[ComparativeResult]:
    key = SortKey(key)
    if descending is None:
        descending = default_descending(key)
    field = _SORT_FIELDS[key]

    def sort_value(result):
        value = getattr(result, field)
        return value.lower() if isinstance(value, str) else value

    return sorted(results, key=sort_value, reverse=descending)
