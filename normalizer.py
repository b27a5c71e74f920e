"""
normalizer.py - The Translator

Turns loose prize-tier text ('$1,000', '1 in 62,257', '137 of 147', 'Free Ticket')
into NormalizedTier records. Nothing in here raises on bad input: unreadable
numbers come back as NaN and unusable tiers are dropped with a debug log line.
"""

import math
import re
from typing import Any, Optional, Union

from pydantic import ValidationError

from logger import setup_logger
from models import GameRecord, NormalizedTier, RawGame, RawTier

logger = setup_logger(__name__)

# Leading number the way a browser's parseFloat reads it ("12.5abc" -> 12.5)
_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_ONE_IN = re.compile(r'1\s+in\s+([\d,.]+)', re.IGNORECASE)
_X_OF_Y = re.compile(r'([\d,]+)\s+of\s+([\d,]+)', re.IGNORECASE)
_CURRENCY_NOISE = re.compile(r'[$,\s]')


def parse_currency(v: Any) -> float:
    """Convert '$1,000' to 1000.0. Numbers pass through, anything else is NaN."""
    if isinstance(v, bool):
        return math.nan
    if isinstance(v, (int, float)):
        return float(v)
    if not v:
        return math.nan
    cleaned = _CURRENCY_NOISE.sub('', str(v))
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return math.nan
    return float(m.group(0))


def parse_odds(v: Any) -> float:
    """Convert '1 in 1,234' or '4.25' to the odds denominator. Flags are not odds."""
    if isinstance(v, bool):
        return math.nan
    if isinstance(v, (int, float)):
        return float(v)
    if not v:
        return math.nan
    s = str(v).strip()
    m = _ONE_IN.search(s)
    if m:
        return parse_currency(m.group(1))
    return parse_currency(s)


def parse_remaining_of_total(text: Any) -> Optional[tuple[int, int]]:
    """
    Parse '646,383 of 732,144' into (646383, 732144).
    Returns None when the text has no such pair, which is not the same as (0, 0).
    """
    if text is None:
        return None
    m = _X_OF_Y.search(str(text).strip())
    if not m:
        return None
    remaining = m.group(1).replace(',', '')
    total = m.group(2).replace(',', '')
    if not remaining or not total:
        return None
    return int(remaining), int(total)


def is_ticket_tier(label: Any) -> bool:
    """A prize of 'Ticket', 'Free Ticket' or anything containing 'free ticket'."""
    if not isinstance(label, str):
        return False
    s = label.strip().lower()
    return s == 'ticket' or s == 'free ticket' or 'free ticket' in s


def _parse_count(v: Any) -> Optional[int]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        if not math.isfinite(v) or v < 0:
            return None
        return int(v)
    cleaned = str(v).replace(',', '').strip()
    m = re.match(r'^\d+', cleaned)
    if not m:
        return None
    return int(m.group(0))


def _display_label(raw: RawTier, value: float, is_ticket: bool) -> str:
    for candidate in (raw.label, raw.prize, raw.value):
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    if is_ticket:
        return "Ticket"
    if math.isfinite(value):
        return f"${value:,.0f}" if value == int(value) else f"${value:,.2f}"
    return ""


def normalize_tier(
    raw: RawTier,
    ticket_price: Optional[float] = None,
    require_odds: bool = False,
) -> Optional[NormalizedTier]:
    """
    Reduce a RawTier to numbers, or return None if the tier is unusable.

    Ticket tiers take the game's ticket price as their value (NaN until a price
    is known). Cash tiers whose amount cannot be read are dropped.
    """
    is_ticket = (
        raw.is_ticket
        or is_ticket_tier(raw.label)
        or is_ticket_tier(raw.prize)
        or is_ticket_tier(raw.value)
    )

    # Counts
    if raw.remaining_of_total is not None:
        pair = parse_remaining_of_total(raw.remaining_of_total)
        if pair is None:
            logger.debug("Dropping tier without a remaining/total pair",
                         extra={"event": "tier_dropped", "error": raw.remaining_of_total})
            return None
        remaining, total = pair
    else:
        remaining = _parse_count(raw.remaining)
        total = _parse_count(raw.total) or _parse_count(raw.initial) or remaining
        if remaining is None and total is None:
            logger.debug("Dropping tier without counts", extra={"event": "tier_dropped"})
            return None
        if remaining is None:
            remaining = 0
        if total is None:
            total = remaining

    # Value
    if is_ticket:
        value = float(ticket_price) if ticket_price else math.nan
    else:
        source = raw.value if raw.value is not None else (raw.prize or raw.label)
        value = parse_currency(source)
        if not math.isfinite(value):
            logger.debug("Dropping tier with unreadable prize value",
                         extra={"event": "tier_dropped", "error": str(source)})
            return None

    odds = parse_odds(raw.odds)
    if require_odds and math.isnan(odds):
        logger.debug("Dropping tier with unreadable odds",
                     extra={"event": "tier_dropped", "error": str(raw.odds)})
        return None

    return NormalizedTier(
        label=_display_label(raw, value, is_ticket),
        value=value,
        is_ticket=is_ticket,
        odds=odds,
        remaining=remaining,
        total=total,
    )


def normalize_game(raw: RawGame, require_odds: bool = False) -> GameRecord:
    """Normalize every tier of a game, keeping only the usable ones."""
    price = raw.ticket_price if raw.ticket_price and raw.ticket_price > 0 else 0.0
    tiers = []
    for item in raw.tiers:
        try:
            raw_tier = item if isinstance(item, RawTier) else RawTier.model_validate(item)
        except ValidationError as ve:
            logger.warning(f"Tier failed validation: {ve.error_count()} errors", extra={
                "event": "tier_dropped",
                "game_name": raw.name,
                "error": str(ve),
            })
            continue
        tier = normalize_tier(raw_tier, ticket_price=price, require_odds=require_odds)
        if tier is not None:
            tiers.append(tier)

    dropped = len(raw.tiers) - len(tiers)
    if dropped:
        logger.info(f"Dropped {dropped} unusable tier(s)", extra={
            "event": "tiers_dropped",
            "game_name": raw.name,
            "game_number": raw.number,
            "skipped": dropped,
        })

    return GameRecord(
        name=raw.name,
        number=raw.number,
        ticket_price=price,
        claimed_odds=raw.claimed_odds,
        claimed_cash_odds=raw.claimed_cash_odds,
        tiers=tuple(tiers),
    )


def load_game(data: Union[dict, RawGame, GameRecord], require_odds: bool = False) -> Optional[GameRecord]:
    """
    Build a GameRecord from whatever the caller handed over.
    Returns None for data that does not even look like a game.
    """
    if isinstance(data, GameRecord):
        return data
    if isinstance(data, RawGame):
        return normalize_game(data, require_odds=require_odds)
    try:
        raw = RawGame.model_validate(data)
    except ValidationError as ve:
        logger.warning(f"Game record failed validation: {ve.error_count()} errors",
                       extra={"event": "validation_failed", "error": str(ve)})
        return None
    return normalize_game(raw, require_odds=require_odds)
