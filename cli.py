"""
Terminal interface for the UK money calculators.

Prompts for each field of a calculator, prints the result in a box and
optionally saves it as CSV or PDF under ``config.EXPORT_DIR``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import config as cfg
import forms
import report
from catalog import CALCULATORS, Calculator, Rows

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# Input collection
# ═══════════════════════════════════════════════════════════════════

def _strip_currency(s: str) -> str:
    """Remove currency symbols, commas, spaces and percent signs."""
    return s.replace("£", "").replace(",", "").replace(" ", "").replace("%", "")


def _prompt_number(label: str, default: str) -> float:
    raw = input(f"  {label} [{default}]: ").strip()
    if not raw:
        return forms.coerce_number(default)
    return forms.coerce_number(_strip_currency(raw))


def _prompt_choice(label: str, options: List[str], default: str) -> str:
    opts = "/".join(options)
    while True:
        raw = input(f"  {label} ({opts}) [{default}]: ").strip()
        if not raw:
            return default
        for option in options:
            if raw.lower() == option.lower():
                return option
        print(f"    Choose from: {opts}")


def _prompt_items(label: str, default: str) -> forms.Items:
    """Items are entered on one line separated by ';'."""
    shown = default.replace("\n", "; ")
    raw = input(f"  {label} [{shown}]: ").strip()
    if not raw:
        return forms.parse_items(default)
    return forms.parse_items(raw.replace(";", "\n"))


def collect_values(calculator: Calculator) -> Dict[str, Any]:
    """Prompt for every field of *calculator*. Enter keeps the default."""
    print("\n  Enter your details (press Enter for defaults):\n")
    values: Dict[str, Any] = {}
    for f in calculator.fields:
        if f.kind == "choice":
            values[f.name] = _prompt_choice(f.label, [k for k, _ in f.choices], f.default)
        elif f.kind == "items":
            values[f.name] = _prompt_items(f.label, f.default)
        else:
            values[f.name] = _prompt_number(f.label, f.default)
    return values


def choose_calculator() -> Calculator:
    slugs = list(CALCULATORS)
    print()
    for i, slug in enumerate(slugs, start=1):
        print(f"  {i:>2}. {CALCULATORS[slug].title}")
    while True:
        raw = input(f"\n  Calculator (1-{len(slugs)} or name) [1]: ").strip()
        if not raw:
            return CALCULATORS[slugs[0]]
        if raw in CALCULATORS:
            return CALCULATORS[raw]
        if raw.isdigit() and 1 <= int(raw) <= len(slugs):
            return CALCULATORS[slugs[int(raw) - 1]]
        print("    Unknown calculator, try again.")


# ═══════════════════════════════════════════════════════════════════
# Box-drawing output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{H * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{H * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 46) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H * (W - 2)}╝"


def format_result(calculator: Calculator, result: Any) -> List[str]:
    """Box lines for *result*, or the calculator's placeholder when ``None``."""
    lines = [_box_top(calculator.title.upper())]
    if result is None:
        lines.append(_box_line(calculator.placeholder))
    else:
        lines.extend(_box_row(label, value) for label, value in calculator.rows(result))
    lines.append(_box_bottom())
    return lines


# ═══════════════════════════════════════════════════════════════════
# Export
# ═══════════════════════════════════════════════════════════════════

def save_exports(calculator: Calculator, result: Any, kind: str,
                 export_dir: Optional[str] = None) -> List[str]:
    """Write the chosen export(s) for *result*; returns the paths written."""
    export_dir = export_dir or cfg.EXPORT_DIR
    os.makedirs(export_dir, exist_ok=True)
    rows: Rows = calculator.rows(result)
    paths = []
    if kind in ("csv", "both"):
        paths.append(report.write_csv(rows, os.path.join(export_dir, f"{calculator.slug}.csv")))
    if kind in ("pdf", "both"):
        path = os.path.join(export_dir, f"{calculator.slug}.pdf")
        report.generate_pdf(calculator.title, rows, calculator.charts(result), path=path)
        paths.append(path)
    for path in paths:
        logger.info("Saved %s", path)
    return paths


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(slug: Optional[str] = None) -> None:
    """Run one calculator interactively."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print(f"  UK Money Calculators ({cfg.TAX_YEAR} tax year)")
    print("=" * W)

    if slug is not None:
        if slug not in CALCULATORS:
            raise SystemExit(f"Unknown calculator '{slug}'. Choose from: {', '.join(CALCULATORS)}")
        calculator = CALCULATORS[slug]
    else:
        calculator = choose_calculator()

    values = collect_values(calculator)
    result = calculator.compute(values)
    logger.info("Computed %s (result=%s)", calculator.slug, "yes" if result is not None else "none")

    print()
    for line in format_result(calculator, result):
        print(line)
    print()

    if result is None:
        return
    kind = _prompt_choice("Save results?", ["no", "csv", "pdf", "both"], "no")
    if kind != "no":
        for path in save_exports(calculator, result, kind):
            print(f"  Saved to {path}")
    print()


if __name__ == "__main__":
    run_cli()
