"""
Amortisation and compound-growth engines.

All return ``None`` when the formula is not computable (a zero or
negative rate, term or principal, a term longer than
``config.MAX_TERM_YEARS``, or a result that overflows) instead of
producing NaN or inf. Terms and horizons are rounded once to whole
months. Series and schedules are evaluated with numpy from the
closed-form expressions, one point per period, never carried forward
from the previous point.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

import config as cfg

logger = logging.getLogger(__name__)


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Amortization:
    """Level repayment of a principal over a fixed term."""

    payment: float          # monthly payment
    total_paid: float
    total_interest: float
    n_payments: int


@dataclass(frozen=True)
class ScheduleYear:
    year: int
    interest: float
    principal: float
    balance: float          # outstanding at the end of the year


@dataclass(frozen=True)
class AmortizationSchedule:
    summary: Amortization
    years: Tuple[ScheduleYear, ...] = field(repr=False)


@dataclass(frozen=True)
class GrowthPoint:
    year: float             # whole years, except a part-year final point
    value: float
    contributed: float


@dataclass(frozen=True)
class Growth:
    """Future value of a lump sum plus monthly contributions."""

    future_value: float
    principal_contributed: float
    interest_earned: float
    series: Tuple[GrowthPoint, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class SavingsGoal:
    achievable: bool
    months: Optional[int]   # None when the target is out of reach
    final_balance: float
    total_contributions: float
    total_interest: float


def _term_months(term_years: float) -> Optional[int]:
    """Term rounded to whole months, or ``None`` if out of range."""
    if not math.isfinite(term_years) or term_years <= 0 or term_years > cfg.MAX_TERM_YEARS:
        return None
    months = int(round(term_years * 12))
    return months if months >= 1 else None


# ─── Amortisation ─────────────────────────────────────────────────────

def amortize(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
) -> Optional[Amortization]:
    """Monthly payment that repays *principal* over *term_years*.

    The same formula gives the income a pension pot can fund as an
    annuity; only the direction of the cash flow differs.

    Parameters
    ----------
    principal : float
        Loan amount or pot size.
    annual_rate_percent : float
        Nominal annual rate, e.g. ``5`` for 5%.
    term_years : float
        Term in years, rounded to whole monthly payments.

    Returns
    -------
    Amortization or None
        ``None`` if any input is zero or negative, the term is out of
        range, or the payment overflows.
    """
    n = _term_months(term_years)
    if principal <= 0 or annual_rate_percent <= 0 or n is None:
        logger.debug(
            "amortize not computable: principal=%s rate=%s term=%s",
            principal, annual_rate_percent, term_years,
        )
        return None

    r = annual_rate_percent / 100 / 12
    discount = 1 - (1 + r) ** -n
    if discount <= 0:
        # rate too small to register against 1.0
        logger.debug("amortize not computable: rate=%s rounds to zero", annual_rate_percent)
        return None
    payment = principal * r / discount
    total_paid = payment * n
    if not (math.isfinite(payment) and math.isfinite(total_paid)):
        logger.debug("amortize overflowed: principal=%s rate=%s", principal, annual_rate_percent)
        return None
    return Amortization(
        payment=payment,
        total_paid=total_paid,
        total_interest=total_paid - principal,
        n_payments=n,
    )


def _balances(principal: float, r: float, payment: float, months: np.ndarray) -> np.ndarray:
    """Outstanding balance after each month count in *months*."""
    growth = (1 + r) ** months
    return principal * growth - payment * (growth - 1) / r


def amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
) -> Optional[AmortizationSchedule]:
    """Year-by-year split of repayments into interest and principal.

    A part year at the end covers only the months left in the term.
    """
    summary = amortize(principal, annual_rate_percent, term_years)
    if summary is None:
        return None

    r = annual_rate_percent / 100 / 12
    n = summary.n_payments
    n_years = -(-n // 12)
    month_ends = np.minimum(np.arange(0, n_years + 1) * 12, n)
    with np.errstate(over="ignore", invalid="ignore"):
        balances = np.maximum(_balances(principal, r, summary.payment, month_ends), 0.0)
    if not np.all(np.isfinite(balances)):
        logger.debug("amortization_schedule overflowed: principal=%s rate=%s", principal, annual_rate_percent)
        return None
    balances[-1] = 0.0

    principal_paid = balances[:-1] - balances[1:]
    months_in_year = np.diff(month_ends)
    interest_paid = summary.payment * months_in_year - principal_paid

    years = tuple(
        ScheduleYear(
            year=int(y + 1),
            interest=float(interest_paid[y]),
            principal=float(principal_paid[y]),
            balance=float(balances[y + 1]),
        )
        for y in range(n_years)
    )
    return AmortizationSchedule(summary=summary, years=years)


# ─── Compound Growth ─────────────────────────────────────────────────

def _future_values(
    present_value: float,
    contribution: float,
    monthly_rate: float,
    months: np.ndarray,
) -> np.ndarray:
    growth = (1 + monthly_rate) ** months
    return present_value * growth + contribution * ((growth - 1) / monthly_rate)


def _series_months(months: int, every: int) -> np.ndarray:
    """Month 0, every *every* years after that, and the final month."""
    points = list(range(0, months + 1, every * 12))
    if points[-1] != months:
        points.append(months)
    return np.array(points)


def _series(values: np.ndarray, paid: np.ndarray, point_months: np.ndarray) -> Tuple[GrowthPoint, ...]:
    return tuple(
        GrowthPoint(float(m) / 12, float(v), float(c))
        for m, v, c in zip(point_months, values, paid)
    )


def grow_future(
    present_value: float,
    periodic_contribution: float,
    annual_rate_percent: float,
    years: float,
    every: Optional[int] = None,
) -> Optional[Growth]:
    """Future value of *present_value* plus a monthly contribution.

    Contributions are made at the end of each month and growth compounds
    monthly at ``annual_rate_percent / 12``.

    Parameters
    ----------
    present_value : float
        Starting balance.
    periodic_contribution : float
        Amount added every month.
    annual_rate_percent : float
        Expected annual return, e.g. ``7`` for 7%.
    years : float
        Projection horizon, rounded to whole months.
    every : int, optional
        If given, also return a series with a point for year 0, every
        *every* years after that, and the end of the horizon.

    Returns
    -------
    Growth or None
        ``None`` for a zero or negative rate, a horizon out of range, or
        a value that overflows.
    """
    months = _term_months(years)
    if annual_rate_percent <= 0 or months is None:
        logger.debug("grow_future not computable: rate=%s years=%s", annual_rate_percent, years)
        return None

    i = annual_rate_percent / 100 / 12
    with np.errstate(over="ignore", invalid="ignore"):
        fv = float(_future_values(present_value, periodic_contribution, i, np.array(months)))
    contributed = present_value + periodic_contribution * months
    if not (math.isfinite(fv) and math.isfinite(contributed)):
        logger.debug("grow_future overflowed: rate=%s years=%s", annual_rate_percent, years)
        return None

    series: Tuple[GrowthPoint, ...] = ()
    if every:
        point_months = _series_months(months, every)
        values = _future_values(present_value, periodic_contribution, i, point_months)
        paid = present_value + periodic_contribution * point_months
        series = _series(values, paid, point_months)

    return Growth(
        future_value=fv,
        principal_contributed=contributed,
        interest_earned=fv - contributed,
        series=series,
    )


def compound_interest(
    principal: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    years: float,
    periods_per_year: int = 12,
) -> Optional[Growth]:
    """Lump sum compounded *periods_per_year* times a year plus monthly saving.

    The lump sum compounds at the chosen frequency; monthly contributions
    always compound monthly. A zero rate is allowed. The series has one
    point per year.
    """
    months = _term_months(years)
    if months is None or annual_rate_percent < 0 or periods_per_year <= 0:
        logger.debug("compound_interest not computable: rate=%s years=%s", annual_rate_percent, years)
        return None

    r = annual_rate_percent / 100
    point_months = _series_months(months, 1)
    t = point_months / 12
    with np.errstate(over="ignore", invalid="ignore"):
        lump = principal * (1 + r / periods_per_year) ** (periods_per_year * t)
        if r > 0:
            monthly_rate = r / 12
            saved = monthly_contribution * (((1 + monthly_rate) ** point_months - 1) / monthly_rate)
        else:
            saved = monthly_contribution * point_months
    values = lump + saved
    paid = principal + monthly_contribution * point_months
    if not (np.all(np.isfinite(values)) and np.all(np.isfinite(paid))):
        logger.debug("compound_interest overflowed: rate=%s years=%s", annual_rate_percent, years)
        return None

    return Growth(
        future_value=float(values[-1]),
        principal_contributed=float(paid[-1]),
        interest_earned=float(values[-1] - paid[-1]),
        series=_series(values, paid, point_months),
    )


def compound_value(
    present_value: float,
    annual_rate_percent: float,
    years: float,
) -> Optional[float]:
    """Lump sum compounded once a year. A zero rate is allowed."""
    if (present_value <= 0 or annual_rate_percent < 0 or years <= 0
            or not math.isfinite(years) or years > cfg.MAX_TERM_YEARS):
        return None
    try:
        value = present_value * (1 + annual_rate_percent / 100) ** years
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


# ─── Savings Goal ───────────────────────────────────────────────────

def months_to_target(
    target: float,
    current: float,
    monthly: float,
    annual_rate_percent: float,
) -> SavingsGoal:
    """How many months of saving *monthly* it takes to reach *target*.

    Interest is added before each end-of-month deposit. Targets not
    reached within ``config.SAVINGS_GOAL_MAX_MONTHS`` are out of reach.
    """
    if target <= current:
        return SavingsGoal(True, 0, current, current, 0.0)
    if monthly <= 0:
        return SavingsGoal(False, None, current, current, 0.0)

    months = np.arange(1, cfg.SAVINGS_GOAL_MAX_MONTHS + 1)
    i = annual_rate_percent / 100 / 12
    with np.errstate(over="ignore", invalid="ignore"):
        if i == 0:
            balances = current + monthly * months
        else:
            balances = _future_values(current, monthly, i, months)
        reached = np.nonzero(balances >= target)[0]

    if reached.size == 0:
        logger.debug("savings target %s not reached in %s months", target, months[-1])
        return SavingsGoal(False, None, current, current, 0.0)

    m = int(months[reached[0]])
    balance = float(balances[reached[0]])
    contributed = current + monthly * m
    return SavingsGoal(True, m, balance, contributed, balance - contributed)
