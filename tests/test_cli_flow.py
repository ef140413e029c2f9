import json
from pathlib import Path

from typer.testing import CliRunner

from networth_core.cli import app


runner = CliRunner()


def test_cli_metrics_to_file(data_dir: Path, tmp_path: Path):
    assumptions = tmp_path / "assumptions.json"
    assumptions.write_text(json.dumps({"estimated_monthly_income": 5000}))
    out = tmp_path / "metrics.json"

    result = runner.invoke(
        app,
        [
            "metrics",
            "--series",
            str(data_dir / "series.csv"),
            "--costs",
            str(data_dir / "costs.csv"),
            "--distribution",
            str(data_dir / "distribution.csv"),
            "--banks",
            str(data_dir / "banks.csv"),
            "--assumptions",
            str(assumptions),
            "--today",
            "2025-11",
            "--out",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text())
    assert payload["current_value"] == 280000
    assert payload["goal"]["target_month"] == "2030-11"
    assert abs(payload["income_allocation"]["other_costs"] - 1750) < 1e-6
    assert payload["bank_distribution_total"] == 222000


def test_cli_series_range_and_notes(data_dir: Path):
    result = runner.invoke(
        app,
        [
            "series",
            "--series",
            str(data_dir / "series.csv"),
            "--notes",
            str(data_dir / "notes.csv"),
            "--range",
            "6m",
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [p["month"] for p in payload["points"]][0] == "2025-06"
    assert [n["month"] for n in payload["notes"]] == ["2025-06", "2025-09"]


def test_cli_summary_renders(data_dir: Path):
    result = runner.invoke(
        app,
        ["summary", "--series", str(data_dir / "series.csv"), "--distribution", str(data_dir / "distribution.csv")],
    )
    assert result.exit_code == 0, result.output
    assert "Net worth summary" in result.stdout


def test_cli_cost_mutations(data_dir: Path, tmp_path: Path):
    costs = tmp_path / "costs.csv"
    costs.write_text((data_dir / "costs.csv").read_text())

    added = runner.invoke(
        app, ["add-cost", "--costs", str(costs), "--name", "Gym", "--amount", "90", "--frequency", "quarterly"]
    )
    assert added.exit_code == 0, added.output
    assert "Gym" in costs.read_text()

    before = costs.read_text()
    rejected = runner.invoke(app, ["add-cost", "--costs", str(costs), "--name", " ", "--amount", "10"])
    assert rejected.exit_code == 2
    assert costs.read_text() == before

    out_of_range = runner.invoke(app, ["remove-cost", "--costs", str(costs), "--index", "12"])
    assert out_of_range.exit_code == 2

    removed = runner.invoke(app, ["remove-cost", "--costs", str(costs), "--index", "0"])
    assert removed.exit_code == 0, removed.output
    assert "Mortgage" not in costs.read_text()


def test_cli_set_assumption(tmp_path: Path):
    path = tmp_path / "assumptions.json"
    result = runner.invoke(app, ["set-assumption", "goal_amount", "500000", "--assumptions", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(path.read_text())["goal_amount"] == 500000

    bad = runner.invoke(app, ["set-assumption", "salary", "1", "--assumptions", str(path)])
    assert bad.exit_code == 2


def test_cli_rejects_non_finite_cost_amount(data_dir: Path, tmp_path: Path):
    costs = tmp_path / "costs.csv"
    costs.write_text((data_dir / "costs.csv").read_text())
    before = costs.read_text()

    for amount in ("nan", "inf"):
        result = runner.invoke(app, ["add-cost", "--costs", str(costs), "--name", "Gym", "--amount", amount])
        assert result.exit_code == 2
    assert costs.read_text() == before


def test_cli_reports_bad_inputs_without_traceback(data_dir: Path, tmp_path: Path):
    bad_today = runner.invoke(app, ["metrics", "--series", str(data_dir / "series.csv"), "--today", "2025-13"])
    assert bad_today.exit_code == 2
    assert not isinstance(bad_today.exception, ValueError)

    series = tmp_path / "series.csv"
    series.write_text("month,value\n2025-01,10\nJanuary,20\n")
    bad_month = runner.invoke(app, ["series", "--series", str(series)])
    assert bad_month.exit_code == 2
    assert not isinstance(bad_month.exception, ValueError)

    missing = runner.invoke(app, ["remove-cost", "--costs", str(tmp_path / "nope.csv"), "--index", "0"])
    assert missing.exit_code == 2
    assert not isinstance(missing.exception, FileNotFoundError)


def test_cli_summary_lists_account_types_once_loaded(data_dir: Path):
    result = runner.invoke(
        app,
        ["summary", "--series", str(data_dir / "series.csv"), "--distribution", str(data_dir / "distribution.csv")],
    )
    assert result.exit_code == 0, result.output
    assert "Account types" in result.stdout
    assert "Investments" in result.stdout
