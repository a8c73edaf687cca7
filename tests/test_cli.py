"""Tests for the terminal interface"""

import pytest

import cli
from catalog import get


def _answers(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def test_collect_values_defaults_and_coercion(monkeypatch):
    """Test Enter keeps defaults and typed values are coerced"""
    _answers(monkeypatch, "£450,000", "")
    values = cli.collect_values(get("stamp-duty"))

    assert values == {"price": 450_000.0, "buyer": "next_home"}


def test_prompt_choice_reasks(monkeypatch, capsys):
    """Test an unknown option is rejected until a valid one is entered"""
    _answers(monkeypatch, "plan9", "Plan1")
    assert cli._prompt_choice("Plan", ["plan1", "plan2"], "plan2") == "plan1"
    assert "Choose from" in capsys.readouterr().out


def test_prompt_items(monkeypatch):
    """Test items typed on one line separated by semicolons"""
    _answers(monkeypatch, "Flights, 500; Hotel, 300")
    assert cli._prompt_items("Expenses", "A, 1") == (("Flights", 500.0), ("Hotel", 300.0))


def test_format_result_rows_and_placeholder():
    """Test boxed rows for a result and the placeholder for None"""
    c = get("rule-of-72")
    lines = cli.format_result(c, 12.0)
    assert any("Years to Double" in line and "12.0" in line for line in lines)
    assert all(len(line) == cli.W for line in "\n".join(lines).splitlines())

    lines = cli.format_result(c, None)
    assert any(c.placeholder in line for line in lines)


def test_save_exports(tmp_path):
    """Test CSV and PDF exports land in the export directory"""
    c = get("vat")
    result = c.compute({"amount": 100.0, "rate": "20", "mode": "add"})
    paths = cli.save_exports(c, result, "both", export_dir=str(tmp_path))

    assert sorted(p.rsplit(".", 1)[1] for p in paths) == ["csv", "pdf"]
    assert (tmp_path / "vat.csv").exists()
    assert (tmp_path / "vat.pdf").read_bytes().startswith(b"%PDF")


def test_run_cli_one_calculator(monkeypatch, capsys):
    """Test a full run of the VAT calculator without saving"""
    _answers(monkeypatch, "100", "", "", "no")
    cli.run_cli("vat")

    out = capsys.readouterr().out
    assert "VAT CALCULATOR" in out
    assert "£120.00" in out


def test_run_cli_by_number(monkeypatch, capsys):
    """Test picking a calculator from the numbered menu"""
    slugs = list(cli.CALCULATORS)
    _answers(monkeypatch, str(slugs.index("rule-of-72") + 1), "8", "no")
    cli.run_cli()

    assert "9.0" in capsys.readouterr().out


def test_run_cli_unknown_calculator():
    """Test an unknown slug exits with a message"""
    with pytest.raises(SystemExit):
        cli.run_cli("nope")
