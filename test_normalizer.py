"""
test_normalizer.py - Tests for the Translator

Parsing of prize, odds and count text, ticket detection, and tier rejection.
"""

import math

import pytest
from models import GameRecord, RawGame, RawTier
from normalizer import (
    is_ticket_tier,
    load_game,
    normalize_game,
    normalize_tier,
    parse_currency,
    parse_odds,
    parse_remaining_of_total,
)


def test_parse_odds_formats():
    """'1 in N' and bare numbers both give N."""
    assert parse_odds("1 in 4.25") == 4.25
    assert parse_odds("4.25") == 4.25
    assert parse_odds("1 in 1,234") == 1234
    assert parse_odds("Overall odds: 1 IN 62,257") == 62257
    assert parse_odds(12) == 12.0


def test_parse_odds_garbage_is_nan():
    for text in ("", None, "n/a", "odds unknown"):
        assert math.isnan(parse_odds(text)), f"{text!r} should not parse"


def test_parse_currency():
    assert parse_currency("$1,000") == 1000
    assert parse_currency(" $ 20 ") == 20
    assert parse_currency(250000) == 250000
    assert parse_currency(2.5) == 2.5
    assert math.isnan(parse_currency("Ticket"))
    assert math.isnan(parse_currency(""))


def test_is_ticket_tier():
    assert is_ticket_tier("Ticket")
    assert is_ticket_tier("  FREE TICKET ")
    assert is_ticket_tier("free ticket bonus")
    assert not is_ticket_tier("$20")
    assert not is_ticket_tier("")
    assert not is_ticket_tier(None)
    assert not is_ticket_tier(20)


def test_parse_remaining_of_total():
    assert parse_remaining_of_total("646,383 of 732,144") == (646383, 732144)
    assert parse_remaining_of_total("0 of 0") == (0, 0)
    assert parse_remaining_of_total("Sold out") is None
    assert parse_remaining_of_total(None) is None


def test_normalize_cash_tier():
    tier = normalize_tier(RawTier(value=1000, odds=62257, remaining=137, total=147))

    assert tier.value == 1000
    assert tier.odds == 62257
    assert tier.remaining == 137
    assert tier.total == 147
    assert not tier.is_ticket
    assert tier.label == "$1,000"


def test_normalize_ticket_tier_takes_ticket_price():
    """A ticket prize is worth one ticket, whatever the raw value says."""
    raw = RawTier(prize="Free Ticket", value="$999", odds="1 in 12", remaining_of_total="646,383 of 732,144")
    tier = normalize_tier(raw, ticket_price=2)

    assert tier.is_ticket
    assert tier.value == 2
    assert (tier.remaining, tier.total) == (646383, 732144)


def test_normalize_ticket_tier_without_price_is_nan():
    tier = normalize_tier(RawTier(label="Ticket", odds=12, remaining=10, total=20))
    assert tier.is_ticket
    assert math.isnan(tier.value)


def test_normalize_count_fallbacks():
    """Total falls back to initial, then to remaining; remaining defaults to zero."""
    assert normalize_tier(RawTier(value=5, odds=26, remaining=10, initial=40)).total == 40
    assert normalize_tier(RawTier(value=5, odds=26, remaining=10)).total == 10

    tier = normalize_tier(RawTier(value=5, odds=26, total=40))
    assert tier.remaining == 0
    assert tier.total == 40


def test_normalize_drops_unusable_tiers():
    """Bad tiers come back as None instead of raising."""
    assert normalize_tier(RawTier(prize="$5", odds=26)) is None
    assert normalize_tier(RawTier(prize="Mystery prize", odds=26, remaining=5)) is None
    assert normalize_tier(RawTier(prize="$5", odds=26, remaining_of_total="lots")) is None
    assert normalize_tier(RawTier(value="???", odds="abc", remaining="x")) is None


def test_normalize_keeps_missing_odds_unless_required():
    raw = RawTier(prize="$5", odds="n/a", remaining_of_total="10 of 20")

    kept = normalize_tier(raw)
    assert kept is not None
    assert math.isnan(kept.odds)

    assert normalize_tier(raw, require_odds=True) is None


def test_normalize_game_filters_tiers():
    raw = RawGame(
        name="Cash Crush",
        number=1712,
        price="$5",
        tiers=[
            {"value": 1000, "odds": 12058, "remaining": 1325, "total": 1416},
            {"prize": "Bonus spin"},
        ],
    )
    game = normalize_game(raw)

    assert game.number == "1712"
    assert game.ticket_price == 5
    assert len(game.tiers) == 1


def test_load_game_accepts_field_aliases():
    game = load_game({
        "name": "$pring Green",
        "ticketPrice": 2,
        "claimedOdds": "1 in 4.25",
        "tiers": [{"label": "Ticket", "isTicket": True, "odds": 12, "remaining": 646383, "total": 732144}],
    })

    assert isinstance(game, GameRecord)
    assert game.claimed_odds == "1 in 4.25"
    assert game.tiers[0].value == 2


def test_load_game_rejects_non_games():
    assert load_game("not a game") is None
    assert load_game({"name": "Broken", "tiers": "nope"}) is None


def test_load_game_missing_price_is_zero():
    game = load_game({"name": "No Price", "price": "TBD", "tiers": []})
    assert game.ticket_price == 0


def test_malformed_tier_is_dropped_not_the_game():
    """One tier pydantic cannot read sits next to good ones; only that tier goes."""
    game = load_game({
        "name": "Mixed Bag",
        "price": 2,
        "tiers": [
            {"value": 100, "odds": 10, "remaining": 5, "total": 10},
            {"value": 50, "odds": [3], "remaining": 1, "total": 2},
            "not a tier",
        ],
    })

    assert isinstance(game, GameRecord)
    assert len(game.tiers) == 1
    assert game.tiers[0].value == 100


def test_numeric_prize_and_label_are_read_as_text():
    game = load_game({
        "name": "NumPrize",
        "price": 2,
        "tiers": [
            {"value": 100, "odds": 10, "remaining": 5, "total": 10},
            {"prize": 1000, "value": 1000, "odds": 50, "remaining": 1, "total": 2},
            {"label": 500, "odds": 25, "remaining": 3, "total": 4},
        ],
    })

    assert len(game.tiers) == 3
    assert game.tiers[1].label == "1000"
    assert game.tiers[1].value == 1000
    assert game.tiers[2].value == 500


def test_boolean_odds_are_not_a_number():
    tier = normalize_tier(RawTier.model_validate({"value": 10, "odds": True, "remaining": 5, "total": 10}))

    assert math.isnan(tier.odds)
    assert not tier.has_odds
    assert normalize_tier(RawTier.model_validate({"value": True, "odds": 5, "remaining": 1, "total": 1})) is None


def test_non_finite_price_means_no_price():
    assert load_game({"name": "Inf", "price": "inf", "tiers": []}).ticket_price == 0
    assert load_game({"name": "NaN", "price": float("nan"), "tiers": []}).ticket_price == 0
    assert RawGame.model_validate({"price": float("inf")}).ticket_price is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
