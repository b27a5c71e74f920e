"""
models.py - The Ledger

Pydantic models for every record that crosses the EV engine boundary.
Raw models are loose (scraped or hand-typed data), normalized models are
strict and frozen so the numeric core never sees free text.
"""

import math
from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

import config


Number = Union[int, float]


class RawTier(BaseModel):
    """A prize tier as typed by a user or pulled off a lottery page."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: Optional[str] = Field(default=None, description="Display text for the prize")
    prize: Optional[str] = Field(default=None, description="Prize text as shown on the page")
    value: Optional[Union[Number, str]] = Field(default=None, description="Prize amount ('$1,000', 1000, 'Ticket')")
    is_ticket: bool = Field(default=False, validation_alias=AliasChoices("isTicket", "is_ticket"))
    odds: Optional[Union[Number, str]] = Field(default=None, description="Odds denominator ('1 in 62,257' or 62257)")
    remaining: Optional[Union[Number, str]] = None
    total: Optional[Union[Number, str]] = None
    initial: Optional[Union[Number, str]] = None
    remaining_of_total: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("remainingOfTotal", "remaining_of_total"),
        description="Combined count text ('137 of 147')",
    )

    @field_validator('is_ticket', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        """Treat null as False; JSON from the browser tool sometimes carries it."""
        return bool(v) if v is not None else False

    @field_validator('label', 'prize', 'remaining_of_total', mode='before')
    @classmethod
    def textify(cls, v):
        """Hand-typed tiers carry prize: 1000 as often as prize: '$1,000'."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator('value', 'odds', 'remaining', 'total', 'initial', mode='before')
    @classmethod
    def reject_flags(cls, v):
        # true/false are not amounts; pydantic would read them as 1 and 0
        if isinstance(v, bool):
            return None
        return v


class RawGame(BaseModel):
    """A game record before its tiers are normalized."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    number: str = ""
    ticket_price: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("ticketPrice", "price", "ticket_price"),
    )
    claimed_odds: str = Field(default="", validation_alias=AliasChoices("claimedOdds", "claimed_odds"))
    claimed_cash_odds: str = Field(
        default="", validation_alias=AliasChoices("claimedCashOdds", "claimed_cash_odds")
    )
    # Checked one at a time during normalization so a bad tier never sinks the game
    tiers: list[Any] = Field(default_factory=list)

    @field_validator('number', 'name', 'claimed_odds', 'claimed_cash_odds', mode='before')
    @classmethod
    def stringify(cls, v):
        """Game numbers arrive as 1710 or '1710'; keep them as text."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator('ticket_price', mode='before')
    @classmethod
    def parse_price(cls, v):
        """Accept '$20', '20' or 20. Anything unreadable or non-finite means no price."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return v if math.isfinite(v) else None
        cleaned = str(v).replace('$', '').replace(',', '').strip()
        if not cleaned:
            return None
        try:
            price = float(cleaned)
        except ValueError:
            return None
        return price if math.isfinite(price) else None


class NormalizedTier(BaseModel):
    """A tier reduced to numbers. Odds may be NaN when the source had none."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: float
    is_ticket: bool = False
    odds: float = math.nan
    remaining: int = Field(ge=0)
    total: int = Field(ge=0)

    @property
    def has_odds(self) -> bool:
        return math.isfinite(self.odds) and self.odds > 0


class GameRecord(BaseModel):
    """A game ready for estimation. A zero ticket price means none was supplied."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    number: str = ""
    ticket_price: float = Field(default=0.0, ge=0)
    claimed_odds: str = ""
    claimed_cash_odds: str = ""
    tiers: tuple[NormalizedTier, ...] = ()


class EVOptions(BaseModel):
    """Value adjustments toggled by the user."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ignore_under_500: bool = Field(
        default=False, validation_alias=AliasChoices("ignoreUnder500", "ignore_under_500")
    )
    apply_tax: bool = Field(default=False, validation_alias=AliasChoices("applyTax", "apply_tax"))
    tax_rate: float = Field(
        default=config.DEFAULT_TAX_RATE, validation_alias=AliasChoices("taxRate", "tax_rate")
    )

    @classmethod
    def from_env(cls) -> "EVOptions":
        return cls(
            ignore_under_500=config.IGNORE_UNDER_500,
            apply_tax=config.APPLY_TAX,
            tax_rate=config.DEFAULT_TAX_RATE,
        )


class EstimationMethod(str, Enum):
    TICKET_ANCHOR = "Ticket-tier anchor"
    MEDIAN_FALLBACK = "Median fallback"
    MEAN_RATIO = "Mean ratio"


class PoolEstimate(BaseModel):
    """Estimated ticket pool (M) and how it was reached."""

    model_config = ConfigDict(frozen=True)

    size: float = Field(description="Estimated ticket pool M")
    method: EstimationMethod
    launch_pool: Optional[float] = Field(default=None, description="Pool at launch (M0) where known")
    remaining_sum: Optional[int] = None
    total_sum: Optional[int] = None
    calculated_odds: Optional[float] = Field(default=None, description="Mhat / sum(remaining)")


class TierResult(BaseModel):
    label: str
    value: float
    is_ticket: bool
    odds: float
    odds_text: str
    remaining: int
    total: int
    tier_ticket_estimate: float
    probability: float
    adjusted_value: float
    ev_contribution: float


class EVResult(BaseModel):
    """Single-game outcome."""

    ticket_price: float
    pool: PoolEstimate
    ev_gross: float
    ev_net: float
    tiers: list[TierResult]

    @property
    def ok(self) -> bool:
        return True


class FailureKind(str, Enum):
    MISSING_PRECONDITION = "missing_precondition"
    ESTIMATION_FAILURE = "estimation_failure"


class EVFailure(BaseModel):
    """A computation that could not run. Returned, never raised."""

    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False


class ComparativeResult(BaseModel):
    """One row of the multi-game overview."""

    name: str
    number: str
    price: float
    claimed_odds_text: str
    claimed_odds_value: float
    calc_odds_value: float
    claimed_gross: float
    claimed_ev: float
    calc_gross: float
    calc_ev: float
    delta_percent: float
    pool: PoolEstimate
