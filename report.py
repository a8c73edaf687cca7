"""
Presentation helpers for the calculators.

Provides:
  - Currency and percentage formatting (fmt, pct)
  - Chart builders for growth series, tax bands and loan schedules
  - Base64 PNG encoding for web embedding (figure_to_base64)
  - CSV export (csv_bytes, write_csv) and a printable one-page PDF
"""

from __future__ import annotations

import base64
import csv
import io
from typing import Iterable, List, Optional, Sequence, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter
import numpy as np

import growth
import tax

Rows = Sequence[Tuple[str, str]]

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#ffffff"
CARD = "#f8fafc"
TEXT = "#0f172a"
TEXT2 = "#475569"
BLUE = "#2563eb"
GREEN = "#16a34a"
AMBER = "#d97706"
RED = "#dc2626"
SLATE = "#94a3b8"
BORDER = "#e2e8f0"

A4W, A4H = 8.27, 11.69
WEB_W, WEB_H = 10, 5.5


# ═══════════════════════════════════════════════════════════════════
# Number formatting
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float, decimals: int = 0) -> str:
    """Format number as £X,XXX."""
    if decimals > 0:
        return f"£{val:,.{decimals}f}"
    return f"£{val:,.0f}"


def pct(val: float, decimals: int = 1) -> str:
    return f"{val:.{decimals}f}%"


def _gbp_fmt(x, _):
    if abs(x) >= 1e6:
        return f"£{x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"£{x / 1e3:.0f}k"
    return f"£{x:.0f}"


def _pct_fmt(x, _):
    return f"{x:.0f}%"


GBP_FMT = FuncFormatter(_gbp_fmt)
PCT_FMT = FuncFormatter(_pct_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply the light theme to a figure and its axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT2, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.4, color=BORDER)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=BG, edgecolor=BORDER, labelcolor=TEXT)


# ═══════════════════════════════════════════════════════════════════
# Charts
# ═══════════════════════════════════════════════════════════════════

def growth_chart(
    projection: growth.Growth,
    start: int = 0,
    x_label: str = "Year",
    figsize=(WEB_W, WEB_H),
) -> plt.Figure:
    """Projected value against money paid in, one point per series entry.

    *start* shifts the x axis, e.g. to plot against age rather than year.
    """
    x = np.array([p.year for p in projection.series]) + start
    value = np.array([p.value for p in projection.series])
    paid = np.array([p.contributed for p in projection.series])

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    ax.fill_between(x, paid, value, color=GREEN, alpha=0.12)
    ax.plot(x, value, color=GREEN, linewidth=2.2, marker="o", markersize=3,
            label="Projected value")
    ax.plot(x, paid, color=BLUE, linewidth=1.6, linestyle="--",
            label="Your contributions")

    ax.yaxis.set_major_formatter(GBP_FMT)
    ax.set_xlabel(x_label)
    ax.set_title("Growth Over Time", fontsize=12, pad=10)
    _legend(ax)
    return fig


def bands_chart(
    result: tax.BandResult,
    title: str = "Tax by Band",
    figsize=(WEB_W, WEB_H - 1.5),
) -> Optional[plt.Figure]:
    """Horizontal bar per band that charged tax. ``None`` if no tax is due."""
    if not result.breakdown:
        return None

    names = [f"{s.name} ({s.rate * 100:g}%)" for s in result.breakdown]
    taxes = np.array([s.tax_in_band for s in result.breakdown])

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)
    y = np.arange(len(names))
    ax.barh(y, taxes, color=BLUE, height=0.5)
    for yi, t in zip(y, taxes):
        ax.annotate(fmt(t, 2), xy=(t, yi), xytext=(4, 0),
                    textcoords="offset points", va="center", fontsize=8, color=TEXT)
    ax.set_yticks(y)
    ax.set_yticklabels(names, fontsize=8)
    ax.invert_yaxis()
    ax.xaxis.set_major_formatter(GBP_FMT)
    ax.set_title(title, fontsize=12, pad=10)
    return fig


def schedule_chart(
    schedule: growth.AmortizationSchedule,
    figsize=(WEB_W, WEB_H),
) -> plt.Figure:
    """Stacked interest/principal bars per year with the closing balance."""
    years = np.array([y.year for y in schedule.years])
    interest = np.array([y.interest for y in schedule.years])
    principal = np.array([y.principal for y in schedule.years])
    balance = np.array([y.balance for y in schedule.years])

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)
    ax.bar(years, principal, 0.6, color=BLUE, label="Principal")
    ax.bar(years, interest, 0.6, bottom=principal, color=AMBER, label="Interest")
    ax.yaxis.set_major_formatter(GBP_FMT)
    ax.set_xlabel("Year")
    ax.set_ylabel("Paid in year")

    ax2 = ax.twinx()
    ax2.plot(years, balance, color=RED, linewidth=1.8, label="Balance")
    ax2.yaxis.set_major_formatter(GBP_FMT)
    ax2.tick_params(colors=TEXT2, labelsize=8)
    ax2.set_ylim(bottom=0)

    handles, labels = ax.get_legend_handles_labels()
    h2, l2 = ax2.get_legend_handles_labels()
    ax.legend(handles + h2, labels + l2, loc="upper right", fontsize=8,
              facecolor=BG, edgecolor=BORDER, labelcolor=TEXT)
    ax.set_title("Repayment Schedule", fontsize=12, pad=10)
    return fig


MAX_CHART_INCOME = 10_000_000


def effective_rate_chart(
    salary: float,
    max_income: float = 200_000,
    figsize=(WEB_W, WEB_H),
) -> plt.Figure:
    """Effective income tax + NI rate across incomes, marking *salary*."""
    salary = min(salary, MAX_CHART_INCOME)
    upper = max(max_income, salary * 1.25)
    incomes = np.linspace(1_000, upper, 400)
    it = tax.income_tax_curve(incomes)
    ni = tax.national_insurance_curve(incomes)
    it_rate = it / incomes * 100
    total_rate = (it + ni) / incomes * 100

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)
    ax.plot(incomes, total_rate, color=BLUE, linewidth=2, label="Income Tax + NI")
    ax.plot(incomes, it_rate, color=SLATE, linewidth=1.5, linestyle="--",
            label="Income Tax only")

    you = float((tax.income_tax_curve(np.array([salary]))[0]
                 + tax.national_insurance_curve(np.array([salary]))[0]) / salary * 100)
    ax.axvline(salary, color=AMBER, linewidth=1, linestyle=":")
    ax.annotate(f"You: {you:.1f}%", xy=(salary, you), xytext=(6, -12),
                textcoords="offset points", fontsize=8, color=AMBER)

    ax.xaxis.set_major_formatter(GBP_FMT)
    ax.yaxis.set_major_formatter(PCT_FMT)
    ax.set_xlabel("Gross income")
    ax.set_ylabel("Effective rate")
    ax.set_title("Effective Tax Rate by Income", fontsize=12, pad=10)
    _legend(ax)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def get_web_charts(figures: Iterable[Optional[plt.Figure]]) -> List[str]:
    """Encode every non-empty figure and release it."""
    images = []
    for fig in figures:
        if fig is None:
            continue
        images.append(figure_to_base64(fig))
        plt.close(fig)
    return images


def csv_bytes(rows: Rows) -> bytes:
    """Two-column ``Metric, Value`` CSV, every cell quoted, UTF-8 with BOM."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["Metric", "Value"])
    writer.writerows(rows)
    return buf.getvalue().encode("utf-8-sig")


def write_csv(rows: Rows, path: str) -> str:
    with open(path, "wb") as fh:
        fh.write(csv_bytes(rows))
    return path


ROWS_PER_PAGE = 28


def _summary_pages(title: str, rows: Rows) -> List[plt.Figure]:
    """Summary table split over as many A4 pages as the rows need."""
    chunks = [rows[i:i + ROWS_PER_PAGE] for i in range(0, len(rows), ROWS_PER_PAGE)] or [[]]
    pages = []
    for n, chunk in enumerate(chunks):
        fig = plt.figure(figsize=(A4W, A4H))
        fig.patch.set_facecolor(BG)
        heading = title if n == 0 else f"{title} (continued)"
        fig.text(0.50, 0.93, heading, ha="center", fontsize=18, color=TEXT, fontweight="bold")

        y = 0.87
        for label, value in chunk:
            fig.text(0.10, y, label, fontsize=10, color=TEXT2)
            fig.text(0.90, y, value, fontsize=10, color=TEXT, ha="right", fontweight="bold")
            y -= 0.028

        fig.text(0.50, 0.03,
                 "Estimates only. This is not financial advice.",
                 ha="center", fontsize=8, color=SLATE, style="italic")
        pages.append(fig)
    return pages


def generate_pdf(
    title: str,
    rows: Rows,
    figures: Iterable[Optional[plt.Figure]] = (),
    path: Optional[str] = None,
) -> bytes:
    """Printable report: summary pages followed by any charts.

    Returns the PDF bytes and also writes them to *path* when given.
    """
    pages = _summary_pages(title, rows) + [f for f in figures if f is not None]

    buf = io.BytesIO()
    with PdfPages(buf) as pdf:
        for fig in pages:
            pdf.savefig(fig, facecolor=fig.get_facecolor())
    for fig in pages:
        plt.close(fig)

    data = buf.getvalue()
    if path:
        with open(path, "wb") as fh:
            fh.write(data)
    return data
