"""
Form input coercion shared by the web app and the CLI.

Inputs are never rejected. Blank, non-numeric or non-finite numbers are
read as zero, unknown choices fall back to the field default, and item
lists are read line by line as ``label, amount``.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Tuple

Items = Tuple[Tuple[str, float], ...]


_INT_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def coerce_number(raw: Any) -> float:
    """Read *raw* as a number, treating anything unreadable as 0.

    Accepts decimals, exponents and unsigned ``0x``, ``0o`` or ``0b`` integer
    literals. Blank, unreadable and non-finite input all read as 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text or "_" in text:
            return 0.0
        base = _INT_PREFIXES.get(text[:2].lower())
        if base is not None:
            digits = text[2:]
            if not (digits.isascii() and digits.isalnum()):
                return 0.0
            try:
                return float(int(digits, base))
            except (ValueError, OverflowError):
                return 0.0
        try:
            value = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def coerce_choice(raw: Any, choices, default: str) -> str:
    value = str(raw).strip() if raw is not None else ""
    options = [key for key, _ in choices]
    return value if value in options else default


def parse_items(raw: Any) -> Items:
    """Parse ``label, amount`` lines into ``(label, amount)`` pairs.

    A line with no comma is a bare amount if it reads as a number and a
    zero-cost label otherwise. Blank lines are skipped.
    """
    items = []
    for n, line in enumerate(str(raw or "").splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        if "," in line:
            label, _, amount = line.rpartition(",")
            label = label.strip() or f"Item {n}"
        else:
            try:
                float(line)
            except ValueError:
                label, amount = line, "0"
            else:
                label, amount = f"Item {n}", line
        items.append((label, coerce_number(amount)))
    return tuple(items)


def format_items(items: Items) -> str:
    return "\n".join(f"{label}, {amount:g}" for label, amount in items)


def parse_form(fields, form: Mapping[str, Any]) -> Dict[str, Any]:
    """Coerce a submitted form into calculator values.

    Fields missing from *form* take their default; fields present but
    blank are coerced like any other value.
    """
    values: Dict[str, Any] = {}
    for f in fields:
        raw = form.get(f.name, f.default)
        if f.kind == "choice":
            values[f.name] = coerce_choice(raw, f.choices, f.default)
        elif f.kind == "items":
            values[f.name] = parse_items(raw)
        else:
            values[f.name] = coerce_number(raw)
    return values
