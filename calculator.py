"""
calculator.py - The Bookmaker

Per-tier probability and EV contribution, summed into gross and net EV.
Pure functions: same tiers, pool and options in, same numbers out, so the
caller can recompute on every option toggle.
"""

import math
from typing import Sequence, Union

from opentelemetry import trace

from estimator import SINGLE_GAME, estimate_pool
from formatting import format_odds
from logger import setup_logger
from models import (
    EVFailure,
    EVOptions,
    EVResult,
    FailureKind,
    GameRecord,
    NormalizedTier,
    PoolEstimate,
    TierResult,
)

logger = setup_logger(__name__)
tracer = trace.get_tracer(__name__)

REPORTING_THRESHOLD = 500

MISSING_PRECONDITION_MESSAGE = "Need ticket price and at least one prize tier."
ESTIMATION_FAILURE_MESSAGE = "Unable to estimate total remaining tickets."


def adjust_value(value: float, is_ticket: bool, options: EVOptions) -> float:
    """
    Zero cash prizes under $500 (if asked), then withhold tax (if asked).
    Free-ticket prizes skip both steps.
    """
    adjusted = value
    if is_ticket:
        return adjusted
    if options.ignore_under_500 and 0 < adjusted < REPORTING_THRESHOLD:
        adjusted = 0
    if options.apply_tax and adjusted > 0:
        adjusted = adjusted * (1 - options.tax_rate / 100)
    return adjusted


def resolve_ticket_values(
    tiers: Sequence[NormalizedTier], ticket_price: float
) -> tuple[NormalizedTier, ...]:
    """Ticket tiers are worth one ticket. Returns copies; the input is untouched."""
    return tuple(
        t.model_copy(update={"value": float(ticket_price)}) if t.is_ticket else t
        for t in tiers
    )


def compute_ev(
    ticket_price: float,
    tiers: Sequence[NormalizedTier],
    pool: PoolEstimate,
    options: EVOptions,
) -> EVResult:
    """Probability is remaining / M for every tier; contributions sum to gross EV."""
    m = pool.size
    tier_results = []
    ev_gross = 0

    for t in resolve_ticket_values(tiers, ticket_price):
        p = t.remaining / m
        adjusted = adjust_value(t.value, t.is_ticket, options)
        contribution = p * adjusted
        ev_gross += contribution

        tier_results.append(TierResult(
            label=t.label,
            value=t.value,
            is_ticket=t.is_ticket,
            odds=t.odds,
            odds_text=format_odds(t.odds),
            remaining=t.remaining,
            total=t.total,
            tier_ticket_estimate=t.remaining * (0 if math.isnan(t.odds) else t.odds),
            probability=p,
            adjusted_value=adjusted,
            ev_contribution=contribution,
        ))

    return EVResult(
        ticket_price=ticket_price,
        pool=pool,
        ev_gross=ev_gross,
        ev_net=ev_gross - ticket_price,
        tiers=tier_results,
    )


def evaluate_game(game: GameRecord, options: EVOptions) -> Union[EVResult, EVFailure]:
    """
    Single-game analysis: check inputs, estimate M with the ticket anchor
    (falling back to the median), then compute EV.
    """
    with tracer.start_as_current_span("evaluate_game") as span:
        span.set_attribute("game_number", game.number)
        span.set_attribute("tier_count", len(game.tiers))

        if not game.ticket_price or not game.tiers:
            logger.info("Cannot evaluate game", extra={
                "event": "missing_precondition",
                "game_name": game.name,
                "tier_count": len(game.tiers),
            })
            return EVFailure(kind=FailureKind.MISSING_PRECONDITION, message=MISSING_PRECONDITION_MESSAGE)

        pool = estimate_pool(resolve_ticket_values(game.tiers, game.ticket_price), SINGLE_GAME)
        if pool is None:
            logger.info("Pool estimation failed", extra={
                "event": "estimation_failure",
                "game_name": game.name,
                "tier_count": len(game.tiers),
            })
            return EVFailure(kind=FailureKind.ESTIMATION_FAILURE, message=ESTIMATION_FAILURE_MESSAGE)

        result = compute_ev(game.ticket_price, game.tiers, pool, options)
        span.set_attribute("method", pool.method.value)
        span.set_attribute("ev_net", result.ev_net)
        logger.info("Game evaluated", extra={
            "event": "game_evaluated",
            "game_name": game.name,
            "game_number": game.number,
            "method": pool.method.value,
            "pool_size": pool.size,
        })
        return result
