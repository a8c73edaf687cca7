"""Unit tests for formatting, charts and exports"""

import matplotlib.pyplot as plt
import numpy as np
import pytest

import calculators as calc
import growth
import report
import tax


def test_fmt_and_pct():
    """Test currency and percentage strings"""
    assert report.fmt(1_234.4) == "£1,234"
    assert report.fmt(1_234.5, 2) == "£1,234.50"
    assert report.fmt(0, 2) == "£0.00"
    assert report.pct(21.004) == "21.0%"
    assert report.pct(2.5, 2) == "2.50%"


def test_csv_bytes():
    """Test header, quoting and BOM"""
    data = report.csv_bytes([("Total Value", "£1,234"), ("Years", "12.0")])

    assert data.startswith(b"\xef\xbb\xbf")
    text = data.decode("utf-8-sig")
    assert text.splitlines() == ['"Metric","Value"', '"Total Value","£1,234"', '"Years","12.0"']


def test_write_csv(tmp_path):
    """Test CSV is written to disk"""
    path = report.write_csv([("A", "1")], str(tmp_path / "out.csv"))

    assert (tmp_path / "out.csv").read_bytes() == report.csv_bytes([("A", "1")])
    assert path.endswith("out.csv")


def test_bands_chart_none_without_tax():
    """Test no chart when nothing is taxed"""
    assert report.bands_chart(tax.income_tax(10_000)) is None


def test_web_charts_skip_none():
    """Test charts are encoded as base64 PNG and empty charts skipped"""
    g = growth.grow_future(10_000, 250, 7, 10, every=1)
    images = report.get_web_charts([report.growth_chart(g), None])

    assert len(images) == 1
    assert images[0].startswith("iVBOR")  # PNG signature in base64


def test_all_charts_render():
    """Test every chart builder produces a figure"""
    schedule = growth.amortization_schedule(200_000, 4.5, 25)
    figures = [
        report.schedule_chart(schedule),
        report.effective_rate_chart(50_000),
        report.bands_chart(tax.stamp_duty(700_000), "Stamp Duty"),
    ]
    for fig in figures:
        assert isinstance(fig, plt.Figure)
        plt.close(fig)


def test_generate_pdf(tmp_path):
    """Test PDF bytes are returned and written"""
    r = calc.calculate_income_tax(50_000)
    path = tmp_path / "report.pdf"
    data = report.generate_pdf(
        "Income Tax", [("Net Income", report.fmt(r.net_income, 2))],
        [report.bands_chart(r.income_tax), None], path=str(path),
    )

    assert data.startswith(b"%PDF")
    assert path.read_bytes() == data


def test_generate_pdf_long_summary_spans_pages():
    """Test every row of a long schedule makes it into the PDF summary"""
    schedule = growth.amortization_schedule(250_000, 5, 35)
    rows = [("Monthly Payment", report.fmt(schedule.summary.payment, 2))] + [
        (f"Year {y.year} balance", report.fmt(y.balance, 2)) for y in schedule.years
    ] + [("Total Interest", report.fmt(schedule.summary.total_interest, 2))]
    assert len(rows) == 37

    pages = report._summary_pages("Mortgage", rows)
    try:
        assert len(pages) == 2
        # title and footer on every page, then a label and value per row
        row_texts = sum(len(fig.texts) - 2 for fig in pages)
        assert row_texts == 2 * len(rows)
        labels = [t.get_text() for fig in pages for t in fig.texts]
        assert "Year 35 balance" in labels
        assert "Mortgage (continued)" in labels
    finally:
        for fig in pages:
            plt.close(fig)


def test_generate_pdf_many_rows():
    """Test a multi-page summary still renders to a PDF"""
    rows = [(f"Row {i}", str(i)) for i in range(70)]
    assert report.generate_pdf("Long", rows).startswith(b"%PDF")


def test_effective_rate_chart_huge_salary():
    """Test an enormous salary still draws a finite chart"""
    fig = report.effective_rate_chart(1e300)
    try:
        assert all(map(np.isfinite, fig.axes[0].get_xlim()))
    finally:
        plt.close(fig)
