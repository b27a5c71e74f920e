"""
test_comparator.py - Tests for the Scoreboard

Claimed vs. calculated EV, the drift metric, batch resilience and sorting.
"""

import copy

import pytest
from comparator import SortKey, analyze_batch, compute_overview, delta_percent, sort_results
from models import EstimationMethod, EVOptions
from normalizer import load_game
from samples import SAMPLE_GAMES


def test_overview_uses_mean_ratio_pool():
    result = compute_overview(load_game(SAMPLE_GAMES[0]), EVOptions())

    assert result.name == "$pring Green"
    assert result.number == "1710"
    assert result.price == 2
    assert result.pool.method == EstimationMethod.MEAN_RATIO
    assert result.calc_odds_value == result.pool.size / result.pool.remaining_sum
    assert result.claimed_odds_text == "1 in 4.25"
    assert result.claimed_odds_value == 4.25


def test_claimed_and_calculated_ev():
    """Claimed EV divides launch counts by M0, calculated EV divides remaining counts by Mhat."""
    game = load_game({
        "name": "Two Tier",
        "price": 1,
        "tiers": [
            {"value": 100, "odds": 10, "remaining": 50, "total": 100},
            {"value": 5, "odds": 2, "remaining": 300, "total": 400},
        ],
    })
    result = compute_overview(game, EVOptions())

    launch_pool = (10 * 100 + 2 * 400) / 2
    current_pool = launch_pool * (350 / 500)
    claimed_gross = (0 + 100 * 100 + 5 * 400) / launch_pool
    calc_gross = (0 + 100 * 50 + 5 * 300) / current_pool

    assert result.claimed_gross == claimed_gross
    assert result.claimed_ev == claimed_gross - 1
    assert result.calc_gross == calc_gross
    assert result.calc_ev == calc_gross - 1
    expected_delta = ((result.calc_ev - result.claimed_ev) / abs(result.claimed_ev)) * 100
    assert result.delta_percent == expected_delta


def test_zero_claimed_ev_gives_zero_delta():
    """Claimed net EV of exactly zero must not divide by zero."""
    game = load_game({
        "name": "Break Even",
        "price": 4,
        "tiers": [
            {"value": 10, "odds": 5, "remaining": 50, "total": 100},
            {"value": 10, "odds": 5, "remaining": 20, "total": 100},
        ],
    })
    result = compute_overview(game, EVOptions())

    assert result.claimed_ev == 0
    assert result.delta_percent == 0
    assert delta_percent(0, 5.0) == 0
    assert delta_percent(0.0, -3.0) == 0


def test_ticket_tiers_count_at_ticket_price_in_overview():
    game = load_game({
        "name": "Ticket Only",
        "price": 3,
        "tiers": [{"label": "Ticket", "value": "Ticket", "isTicket": True, "odds": 8, "remaining": 10, "total": 10}],
    })
    options = EVOptions(ignore_under_500=True, apply_tax=True)
    result = compute_overview(game, options)

    assert result.claimed_gross == (0 + 3 * 10) / (8 * 10)


def test_overview_skips_unusable_games():
    options = EVOptions()
    assert compute_overview(load_game({"name": "Empty", "price": 2, "tiers": []}), options) is None
    assert compute_overview(load_game({"name": "No Price", "tiers": SAMPLE_GAMES[1]["tiers"]}), options) is None

    all_claimed = {"name": "Gone", "price": 2, "tiers": [{"value": 10, "odds": 5, "remaining": 0, "total": 100}]}
    assert compute_overview(load_game(all_claimed), options) is None


def test_batch_with_one_empty_game_returns_the_rest_in_order():
    games = copy.deepcopy(SAMPLE_GAMES)
    games[2]["tiers"] = []

    results = analyze_batch(games, EVOptions())

    assert len(results) == 4
    assert [r.number for r in results] == ["1710", "1712", "1713", "1714"]


def test_batch_survives_garbage_entries():
    games = ["not a game", {"name": "Broken", "tiers": "nope"}, SAMPLE_GAMES[0]]

    results = analyze_batch(games, EVOptions())

    assert len(results) == 1
    assert results[0].name == "$pring Green"


def test_batch_is_repeatable():
    options = EVOptions(ignore_under_500=True, apply_tax=True, tax_rate=24)
    assert analyze_batch(SAMPLE_GAMES, options) == analyze_batch(SAMPLE_GAMES, options)


def test_ignore_under_500_lowers_both_evs():
    plain = compute_overview(load_game(SAMPLE_GAMES[0]), EVOptions())
    ignored = compute_overview(load_game(SAMPLE_GAMES[0]), EVOptions(ignore_under_500=True))

    assert ignored.claimed_gross < plain.claimed_gross
    assert ignored.calc_gross < plain.calc_gross


def test_sort_defaults():
    """Numeric columns sort high to low, names A to Z."""
    results = analyze_batch(SAMPLE_GAMES, EVOptions())

    by_ev = sort_results(results, SortKey.CALC_EV)
    assert [r.calc_ev for r in by_ev] == sorted((r.calc_ev for r in results), reverse=True)

    by_name = sort_results(results, "name")
    assert [r.name for r in by_name] == sorted((r.name for r in results), key=str.lower)

    by_price = sort_results(results, SortKey.PRICE, descending=False)
    assert [r.price for r in by_price] == [2, 3, 5, 10, 20]


def test_sort_by_every_key():
    results = analyze_batch(SAMPLE_GAMES, EVOptions())
    for key in SortKey:
        assert len(sort_results(results, key)) == len(results)


def test_sort_does_not_reorder_input():
    results = analyze_batch(SAMPLE_GAMES, EVOptions())
    numbers = [r.number for r in results]
    sort_results(results, SortKey.DELTA_PERCENT)
    assert [r.number for r in results] == numbers


def test_batch_keeps_game_with_one_malformed_tier():
    mixed = {
        "name": "NumPrize",
        "number": "2001",
        "price": 2,
        "tiers": [
            {"value": 100, "odds": 10, "remaining": 5, "total": 10},
            {"prize": 1000, "value": 1000, "odds": 50, "remaining": 1, "total": 2},
            {"value": 20, "odds": [3], "remaining": 1, "total": 2},
        ],
    }

    results = analyze_batch([mixed, SAMPLE_GAMES[0]], EVOptions())

    assert [r.name for r in results] == ["NumPrize", "$pring Green"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
