# Display helpers
# Text renderings shared by the CLI tables and the per-tier results.

import math
from typing import Optional

from models import EVResult

DASH = "—"


def format_number(n: float, decimals: Optional[int] = None) -> str:
    """Thousands separators, at most two decimals unless told otherwise."""
    if n is None or (isinstance(n, float) and not math.isfinite(n)):
        return DASH
    if decimals is not None:
        return f"{n:,.{decimals}f}"
    if float(n).is_integer():
        return f"{int(n):,}"
    text = f"{n:,.2f}"
    return text.rstrip("0").rstrip(".")


def format_odds(n: Optional[float], decimals: Optional[int] = None) -> str:
    if not n or math.isnan(n):
        return DASH
    return f"1 in {format_number(n, decimals)}"


def format_money(n: float, decimals: int = 2) -> str:
    return f"${abs(n):.{decimals}f}"


def format_signed_money(n: float, decimals: int = 4) -> str:
    sign = "+" if n >= 0 else "-"
    return sign + format_money(n, decimals)


def format_percent(p: float) -> str:
    """Probability as a percentage with six decimals."""
    return f"{p * 100:.6f}%"


def delta_badge(delta_percent: float) -> tuple[str, str]:
    """(kind, text) for a drift value. Within one point either way is neutral."""
    if delta_percent > 1:
        return "positive", f"+{delta_percent:.1f}%"
    if delta_percent < -1:
        return "negative", f"{delta_percent:.1f}%"
    return "neutral", f"{delta_percent:.1f}%"


def math_example(result: EVResult) -> Optional[str]:
    """Walk through one tier's arithmetic, preferring a cash tier that adds EV."""
    example = next(
        (t for t in result.tiers if t.ev_contribution > 0 and not t.is_ticket),
        result.tiers[0] if result.tiers else None,
    )
    if example is None:
        return None

    pool = format_number(round(result.pool.size))
    return "\n".join([
        f'Math example: "{example.label}" tier',
        f"  Remaining prizes: {format_number(example.remaining)}",
        f"  Estimated remaining tickets (M): {pool}",
        f"  Tier probability: {format_number(example.remaining)} / {pool} = {format_percent(example.probability)}",
        f"  Adjusted prize value: {format_money(example.adjusted_value)}",
        f"  EV contribution: {format_percent(example.probability)} x {format_money(example.adjusted_value)}"
        f" = {format_money(example.ev_contribution, 4)}",
    ])
