"""Command line front end for the scratcher EV engine.

    python main.py game game.json --tax
    python main.py fetch "https://www.calottery.com/scratchers/$2/spring-green-1710"
    python main.py compare games.json --sort delta_percent
    python main.py sample --ignore-under-500
"""

import json
from pathlib import Path
from typing import Optional, Union

import typer

from calculator import evaluate_game
from comparator import SortKey, analyze_batch, sort_results
from formatting import (
    delta_badge,
    format_money,
    format_number,
    format_odds,
    format_percent,
    format_signed_money,
    math_example,
)
from models import ComparativeResult, EVFailure, EVOptions, EVResult, GameRecord
from normalizer import load_game, normalize_game
from samples import SAMPLE_GAMES
from sensor import FetchError, capture_game
from telemetry import setup_telemetry

app = typer.Typer(add_completion=False, help="Expected value of lottery scratch tickets.")

IgnoreOption = typer.Option(None, "--ignore-under-500/--keep-under-500", help="Zero cash prizes under $500")
TaxOption = typer.Option(None, "--tax/--no-tax", help="Withhold tax on cash prizes")
TaxRateOption = typer.Option(None, "--tax-rate", help="Tax rate in percent (default 24)")
JsonOption = typer.Option(False, "--json", help="Machine-readable output")
TraceOption = typer.Option(False, "--trace", help="Export OpenTelemetry spans")


def build_options(
    ignore_under_500: Optional[bool],
    apply_tax: Optional[bool],
    tax_rate: Optional[float],
) -> EVOptions:
    """Environment defaults, overridden by whatever was given on the command line."""
    overrides = {
        "ignore_under_500": ignore_under_500,
        "apply_tax": apply_tax,
        "tax_rate": tax_rate,
    }
    return EVOptions.from_env().model_copy(update={k: v for k, v in overrides.items() if v is not None})


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc


def _fail(message: str):
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def render_game(game: GameRecord, result: Union[EVResult, EVFailure], as_json: bool = False):
    if as_json:
        payload = {"game": game.model_dump(mode="json"), "result": result.model_dump(mode="json")}
        typer.echo(json.dumps(payload, indent=2))
        if not result.ok:
            raise typer.Exit(code=1)
        return

    if not result.ok:
        _fail(result.message)

    if game.name:
        typer.echo(f"Game Name:              {game.name}")
    if game.number:
        typer.echo(f"Game Number:            {game.number}")
    typer.echo(f"Ticket Price:           {format_money(game.ticket_price)}")
    if game.claimed_odds:
        typer.echo(f"Claimed Overall Odds:   {game.claimed_odds}")
    if game.claimed_cash_odds:
        typer.echo(f"Claimed Cash Odds:      {game.claimed_cash_odds}")
    typer.echo(f"Est. Remaining Tickets: {format_number(round(result.pool.size))}")
    typer.echo(f"Estimation Method:      {result.pool.method.value}")
    typer.echo("")
    typer.echo(f"Expected Net Ticket Value: {format_signed_money(result.ev_net)}")
    typer.echo(f"Gross EV: {format_money(result.ev_gross, 4)} | Ticket Cost: {format_money(result.ticket_price)}")
    typer.echo("")

    header = f"{'Prize':<14}{'Odds':>16}{'Remaining':>12}{'Total':>12}{'Tier Est.':>14}{'Probability':>14}{'Adj. Value':>12}{'EV':>12}"
    typer.echo(header)
    typer.echo("-" * len(header))
    for t in result.tiers:
        typer.echo(
            f"{t.label[:13]:<14}{t.odds_text:>16}{format_number(t.remaining):>12}{format_number(t.total):>12}"
            f"{format_number(round(t.tier_ticket_estimate)):>14}{format_percent(t.probability):>14}"
            f"{format_money(t.adjusted_value):>12}{format_signed_money(t.ev_contribution):>12}"
        )

    example = math_example(result)
    if example:
        typer.echo("")
        typer.echo(example)


def render_overview(results: list[ComparativeResult], as_json: bool = False):
    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return

    typer.echo(f"({len(results)} games)")
    header = f"{'Price':>6}  {'Name':<26}{'No.':>6}  {'Claimed Odds':<14}{'Calc Odds':>14}{'Claimed EV':>13}{'Calc EV':>13}{'Delta':>9}"
    typer.echo(header)
    typer.echo("-" * len(header))
    for r in results:
        _, badge = delta_badge(r.delta_percent)
        typer.echo(
            f"{'$' + format_number(r.price):>6}  {r.name[:25]:<26}{r.number:>6}  {r.claimed_odds_text:<14}"
            f"{format_odds(r.calc_odds_value, 2):>14}{format_signed_money(r.claimed_ev):>13}"
            f"{format_signed_money(r.calc_ev):>13}{badge:>9}"
        )


def _run_overview(games: list, options: EVOptions, sort: Optional[SortKey], descending: Optional[bool], as_json: bool):
    results = analyze_batch(games, options)
    if sort is not None:
        results = sort_results(results, sort, descending)
    render_overview(results, as_json)


@app.callback()
def main(trace_spans: bool = TraceOption):
    if trace_spans:
        setup_telemetry()


@app.command()
def game(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with one game"),
    ignore_under_500: Optional[bool] = IgnoreOption,
    apply_tax: Optional[bool] = TaxOption,
    tax_rate: Optional[float] = TaxRateOption,
    as_json: bool = JsonOption,
):
    """Single-game EV from a JSON game record."""
    record = load_game(_read_json(path))
    if record is None:
        _fail(f"{path} does not contain a game record.")
    options = build_options(ignore_under_500, apply_tax, tax_rate)
    render_game(record, evaluate_game(record, options), as_json)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="Game page URL"),
    state: Optional[str] = typer.Option(None, "--state", help="Provider state code; guessed from the URL if omitted"),
    render: bool = typer.Option(False, "--render", help="Render the page in a headless browser"),
    ignore_under_500: Optional[bool] = IgnoreOption,
    apply_tax: Optional[bool] = TaxOption,
    tax_rate: Optional[float] = TaxRateOption,
    as_json: bool = JsonOption,
):
    """Fetch a lottery game page and analyse it."""
    try:
        raw = capture_game(url, state_code=state, render=render)
    except (FetchError, ValueError) as exc:
        _fail(str(exc))

    record = normalize_game(raw, require_odds=True)
    if not record.tiers:
        _fail("Could not parse any prize tiers from the page. Try manual input.")
    options = build_options(ignore_under_500, apply_tax, tax_rate)
    render_game(record, evaluate_game(record, options), as_json)


@app.command()
def compare(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with one game or a list of games"),
    sort: Optional[SortKey] = typer.Option(None, "--sort", help="Column to sort by"),
    descending: Optional[bool] = typer.Option(None, "--desc/--asc", help="Sort direction"),
    ignore_under_500: Optional[bool] = IgnoreOption,
    apply_tax: Optional[bool] = TaxOption,
    tax_rate: Optional[float] = TaxRateOption,
    as_json: bool = JsonOption,
):
    """Claimed vs. current EV across a batch of games."""
    data = _read_json(path)
    games = data if isinstance(data, list) else [data]
    _run_overview(games, build_options(ignore_under_500, apply_tax, tax_rate), sort, descending, as_json)


@app.command()
def sample(
    sort: Optional[SortKey] = typer.Option(SortKey.CALC_EV, "--sort", help="Column to sort by"),
    descending: bool = typer.Option(False, "--desc/--asc", help="Sort direction (ascending unless --desc)"),
    ignore_under_500: Optional[bool] = IgnoreOption,
    apply_tax: Optional[bool] = TaxOption,
    tax_rate: Optional[float] = TaxRateOption,
    as_json: bool = JsonOption,
):
    """Run the overview on the built-in sample games, worst current EV first."""
    _run_overview(SAMPLE_GAMES, build_options(ignore_under_500, apply_tax, tax_rate), sort, descending, as_json)


if __name__ == "__main__":
    app()
