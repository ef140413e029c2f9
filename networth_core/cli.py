from __future__ import annotations

import dataclasses
import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table

from networth_core.domain.errors import ValidationError
from networth_core.domain.models import (
    Assumptions,
    CalendarMonth,
    CostKind,
    DistributionSlice,
    EngineSettings,
    FixedCost,
    Frequency,
    MetricsSnapshot,
    Range,
    TimeSeriesStore,
)
from networth_core.io import config as config_io
from networth_core.io import costs as costs_io
from networth_core.io import series as series_io
from networth_core.services import assumptions as assumptions_service
from networth_core.services import cost_ledger
from networth_core.services import metrics
from networth_core.services import pipeline
from networth_core.services import range_filter

app = typer.Typer(help="Net-worth dashboard metrics CLI.")


@app.callback()
def main(
    log_level: str = typer.Option(
        os.environ.get("NETWORTH_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    ),
):
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload, out: Optional[Path], what: str) -> None:
    if out:
        _save_json(out, payload)
        typer.echo(f"{what} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _load_assumptions(path: Optional[Path]) -> Assumptions:
    if path and path.exists():
        return config_io.load_assumptions(path)
    return Assumptions()


def _load_settings(path: Optional[Path]) -> EngineSettings:
    return config_io.load_engine_settings(path) if path else EngineSettings()


def _snapshot(
    series: Path,
    costs: Optional[Path],
    distribution: Sequence[DistributionSlice],
    banks: Optional[Path],
    assumptions: Optional[Path],
    settings: Optional[Path],
    today: Optional[str],
) -> MetricsSnapshot:
    try:
        reference = CalendarMonth.parse(today) if today else None
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--today") from exc
    store = _load_store(series)
    return pipeline.compute_all_metrics(
        store.points,
        _load_ledger(costs) if costs else [],
        _load_assumptions(assumptions),
        distribution=distribution,
        bank_distribution=_load_distribution(banks, "--banks"),
        settings=_load_settings(settings),
        today=reference,
    )


def _load_store(series: Path, notes: Optional[Path] = None) -> TimeSeriesStore:
    try:
        return series_io.load_store(series, notes)
    except (ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--series") from exc


def _load_distribution(path: Optional[Path], hint: str = "--distribution") -> List[DistributionSlice]:
    try:
        return series_io.load_distribution(path) if path else []
    except (ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc), param_hint=hint) from exc


def _load_ledger(path: Path) -> List[FixedCost]:
    try:
        return costs_io.load_costs(path)
    except (ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--costs") from exc


# -------------------------------
# Display helpers (formatting lives here only)
# -------------------------------


def _money(value: float) -> str:
    return f"€ {value:,.2f}"


def _pct(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}%"


def _summary_table(snap: MetricsSnapshot) -> Table:
    table = Table(title="Net worth summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    delta_color = "green" if snap.delta >= 0 else "red"
    table.add_row("Current net worth", _money(snap.current_value))
    table.add_row("Change vs previous month", f"[{delta_color}]{_money(snap.delta)}[/]")
    table.add_row("Avg monthly savings (12m)", _money(snap.savings.monthly_average))
    table.add_row("Avg yearly savings (12m)", _money(snap.savings.yearly_average))
    table.add_row(f"YTD change {snap.last_point_year}", f"{_money(snap.ytd.change)} ({_pct(snap.ytd.pct)})")
    table.add_row("Savings streak", f"{snap.savings_streak} month(s)")
    table.add_row("Savings trend", f"{snap.trend.direction.value} ({snap.trend.slope:,.1f}/month)")

    goal = snap.goal
    if goal.target_month is not None:
        goal_txt = f"{goal.months_to_goal:,.1f} months (~{goal.target_month})"
    else:
        goal_txt = goal.status.value
    table.add_row("Goal ETA", goal_txt)
    table.add_row("Projected balance in 12m", _money(snap.projection_12m.projected_balance))
    table.add_row("Liquid", f"{_money(snap.liquid.total)} ({_pct(snap.liquid.pct_of_total)})")
    table.add_row("Investments", f"{_money(snap.investments.total)} ({_pct(snap.investments.pct_of_total)})")
    table.add_row("Avg monthly spending", _money(snap.spending.avg_monthly_spending))
    table.add_row("Runway", f"{snap.spending.runway_months:,.1f} months")
    table.add_row(
        "Emergency fund",
        f"{_pct(snap.emergency_fund.pct)} of {_money(snap.emergency_fund.target)} ({snap.emergency_fund.status.value})",
    )
    fi = snap.financial_independence
    fi_txt = f"{_pct(fi.fi_pct)} of {_money(fi.fi_target)}"
    if fi.target_month is not None:
        fi_txt += f", ~{fi.target_month}"
    table.add_row("Financial independence", fi_txt)
    alloc = snap.income_allocation
    table.add_row("Savings / costs of income", f"{_pct(alloc.savings_pct_of_income)} / {_pct(alloc.costs_pct_of_income)}")
    table.add_row(
        "Fixed / other costs",
        f"{_money(alloc.total_fixed_monthly_costs)} / {_money(max(0.0, alloc.other_costs))}",
    )
    table.add_row("Yearly target progress", f"{_money(snap.target_progress.progress)} ({_pct(snap.target_progress.progress_pct)})")
    return table


# -------------------------------
# Commands
# -------------------------------


@app.command("metrics")
def metrics_cmd(
    series: Path = typer.Option(..., help="CSV with month,value"),
    costs: Optional[Path] = typer.Option(None, help="CSV with name,amount,frequency[,account,kind]"),
    distribution: Optional[Path] = typer.Option(None, help="Account-type distribution CSV (name,value)"),
    banks: Optional[Path] = typer.Option(None, help="Bank distribution CSV (name,value)"),
    assumptions: Optional[Path] = typer.Option(None, help="Assumptions JSON"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    today: Optional[str] = typer.Option(None, help="Reference month YYYY-MM for ETAs (default: current month)"),
    out: Optional[Path] = typer.Option(None, help="Output path for the metrics JSON"),
):
    """Compute every derived metric as JSON."""
    snap = _snapshot(series, costs, _load_distribution(distribution), banks, assumptions, settings, today)
    _emit(snap.to_dict(), out, "Metrics")


@app.command()
def summary(
    series: Path = typer.Option(..., help="CSV with month,value"),
    costs: Optional[Path] = typer.Option(None, help="Costs CSV"),
    distribution: Optional[Path] = typer.Option(None, help="Account-type distribution CSV"),
    banks: Optional[Path] = typer.Option(None, help="Bank distribution CSV"),
    assumptions: Optional[Path] = typer.Option(None, help="Assumptions JSON"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    today: Optional[str] = typer.Option(None, help="Reference month YYYY-MM"),
):
    """Readable dashboard summary."""
    console = Console()
    slices = _load_distribution(distribution)
    snap = _snapshot(series, costs, slices, banks, assumptions, settings, today)
    console.print(_summary_table(snap))

    if slices:
        shares = metrics.distribution_shares(slices)
        console.print("\n[bold]Account types[/bold]")
        for s, share in zip(slices, shares):
            console.print(f"  {s.name:<20} {_money(s.value):>16}  {_pct(share)}")


@app.command("series")
def series_cmd(
    series: Path = typer.Option(..., help="CSV with month,value"),
    notes: Optional[Path] = typer.Option(None, help="CSV with month,note"),
    range_: Range = typer.Option(Range.ALL, "--range", help="all | ytd | 1y | 6m"),
    out: Optional[Path] = typer.Option(None, help="Output path for the filtered series JSON"),
):
    """Filtered series and the notes that fall inside it."""
    store = _load_store(series, notes)
    points = range_filter.filter_series(store.points, range_)
    payload = {
        "range": range_.value,
        "points": [{"month": str(p.month), "value": p.value} for p in points],
        "notes": [{"month": str(n.month), "note": n.text} for n in range_filter.filter_notes(points, store.notes)],
    }
    _emit(payload, out, "Series")


@app.command("add-cost")
def add_cost(
    costs: Path = typer.Option(..., help="Costs CSV (created if missing)"),
    name: str = typer.Option(..., help="Cost name"),
    amount: float = typer.Option(..., help="Amount per billing period"),
    frequency: Frequency = typer.Option(Frequency.MONTHLY, help="monthly | quarterly | yearly"),
    account: Optional[str] = typer.Option(None, help="Account the cost is paid from"),
    kind: CostKind = typer.Option(CostKind.FIXED, help="fixed | variable"),
):
    """Append a recurring cost to the ledger."""
    ledger = _load_ledger(costs) if costs.exists() else []
    cost = FixedCost(name=name, amount=amount, frequency=frequency, account=account, kind=kind)
    try:
        updated = cost_ledger.add_cost(ledger, cost)
    except ValidationError as exc:
        typer.echo(f"Rejected: {exc}", err=True)
        raise typer.Exit(code=2)
    costs_io.save_costs(costs, updated)
    typer.echo(
        f"Added {name!r}; {len(updated)} cost(s), "
        f"{cost_ledger.total_monthly(updated):,.2f} per month"
    )


@app.command("remove-cost")
def remove_cost(
    costs: Path = typer.Option(..., help="Costs CSV"),
    index: int = typer.Option(..., help="0-based position of the cost to remove"),
):
    """Remove a recurring cost by position."""
    ledger = _load_ledger(costs)
    try:
        updated = cost_ledger.remove_cost(ledger, index)
    except ValidationError as exc:
        typer.echo(f"Rejected: {exc}", err=True)
        raise typer.Exit(code=2)
    costs_io.save_costs(costs, updated)
    typer.echo(f"Removed {ledger[index].name!r}; {len(updated)} cost(s) left")


@app.command("set-assumption")
def set_assumption(
    name: str = typer.Argument(..., help="estimated_monthly_income | yearly_savings_target | goal_amount | emergency_fund_months"),
    value: float = typer.Argument(..., help="New value; negatives are clamped to 0"),
    assumptions: Path = typer.Option(..., help="Assumptions JSON (created if missing)"),
):
    """Update one assumption in the assumptions file."""
    current = _load_assumptions(assumptions)
    try:
        updated = assumptions_service.set_assumption(current, name, value)
    except ValidationError as exc:
        typer.echo(f"Rejected: {exc}", err=True)
        raise typer.Exit(code=2)
    config_io.save_assumptions(assumptions, updated)
    typer.echo(json.dumps(dataclasses.asdict(updated), indent=2))


if __name__ == "__main__":
    app()
