"""
UK tax calculation functions for the personal-finance calculators.

Every tax here is one walk over an ordered band table (``apply_bands``).
The vectorised twin ``band_tax`` takes numpy arrays so charts can sweep
a whole income range in one call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple

import numpy as np

import config as cfg

logger = logging.getLogger(__name__)


# ─── Band tables ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Band:
    """One tax band. ``limit`` is the cumulative upper bound on the taxable amount."""

    name: str
    limit: float
    rate: float


@dataclass(frozen=True)
class BandSlice:
    """The part of a taxable amount that fell inside one band."""

    name: str
    rate: float
    taxable_in_band: float
    tax_in_band: float


@dataclass(frozen=True)
class BandResult:
    """Outcome of walking a band table."""

    tax_owed: float
    taxable: float
    breakdown: Tuple[BandSlice, ...] = ()


def bands_from_config(rows: Iterable[Tuple[str, float, float]]) -> Tuple[Band, ...]:
    """Build a band table from ``(name, limit, rate)`` rows."""
    return tuple(Band(name, float(limit), rate) for name, limit, rate in rows)


def bands_from_thresholds(rows: Iterable[Tuple[float, float]]) -> Tuple[Band, ...]:
    """Build a band table from ``(limit, rate)`` rows, naming each by its range."""
    bands = []
    floor = 0.0
    for limit, rate in rows:
        if math.isinf(limit):
            name = f"Above £{floor:,.0f}"
        else:
            name = f"£{floor:,.0f} to £{limit:,.0f}"
        bands.append(Band(name, float(limit), rate))
        floor = limit
    return tuple(bands)


def _check_order(bands: Sequence[Band]) -> None:
    prev = 0.0
    for band in bands:
        if band.limit < prev:
            raise ValueError(
                f"Band '{band.name}' limit {band.limit} is below the previous limit {prev}"
            )
        prev = band.limit


# ─── Band engine ─────────────────────────────────────────────────────

def apply_bands(amount: float, allowance: float, bands: Sequence[Band]) -> BandResult:
    """Tax *amount* progressively across *bands* after a tax-free *allowance*.

    Parameters
    ----------
    amount : float
        Gross amount being taxed.
    allowance : float
        Tax-free amount removed before the first band.
    bands : sequence of Band
        Ordered by ascending ``limit``. The capacity of each band is its
        limit minus the previous band's limit; ``inf`` leaves the last
        band uncapped.

    Returns
    -------
    BandResult
        Total tax and the bands that actually charged tax.
    """
    _check_order(bands)
    taxable = max(0.0, amount - allowance)

    remaining = taxable
    floor = 0.0
    tax_owed = 0.0
    breakdown = []
    for band in bands:
        if remaining <= 0:
            break
        capacity = band.limit - floor
        in_band = min(remaining, capacity) if capacity > 0 else 0.0
        tax_in_band = in_band * band.rate
        tax_owed += tax_in_band
        remaining -= in_band
        if tax_in_band > 0:
            breakdown.append(BandSlice(band.name, band.rate, in_band, tax_in_band))
        floor = max(floor, band.limit)

    return BandResult(tax_owed=tax_owed, taxable=taxable, breakdown=tuple(breakdown))


def band_tax(amounts: np.ndarray, allowance, bands: Sequence[Band]) -> np.ndarray:
    """Vectorised ``apply_bands``: tax owed for every element of *amounts*.

    *allowance* may be a scalar or an array broadcastable against *amounts*.
    """
    _check_order(bands)
    amounts = np.asarray(amounts, dtype=float)
    taxable = np.maximum(amounts - allowance, 0.0)

    tax = np.zeros_like(taxable)
    floor = 0.0
    for band in bands:
        in_band = np.clip(taxable - floor, 0.0, max(band.limit - floor, 0.0))
        tax += in_band * band.rate
        floor = max(floor, band.limit)
    return tax


# ─── Personal Allowance ─────────────────────────────────────────────

def tapered_allowance(
    base_allowance: float,
    income: float,
    taper_threshold: float,
    taper_rate: float = 0.5,
) -> float:
    """Allowance after tapering for income above *taper_threshold*.

    With the default rate £1 is lost for every £2 over the threshold, so
    the allowance reaches zero at ``taper_threshold + 2 * base_allowance``.
    """
    if income <= taper_threshold:
        return base_allowance
    return max(0.0, base_allowance - (income - taper_threshold) * taper_rate)


def personal_allowance(income: float) -> float:
    """UK personal allowance for a given income."""
    return tapered_allowance(
        cfg.PERSONAL_ALLOWANCE, income, cfg.PA_TAPER_THRESHOLD, cfg.PA_TAPER_RATE
    )


# ─── Income Tax & NI ─────────────────────────────────────────────────

INCOME_TAX_BANDS = bands_from_config(cfg.INCOME_TAX_BANDS)
NI_BANDS = bands_from_config(cfg.NI_BANDS)


def income_tax(income: float) -> BandResult:
    """Income tax (England & Wales) with the tapered personal allowance."""
    return apply_bands(income, personal_allowance(income), INCOME_TAX_BANDS)


def national_insurance(income: float) -> BandResult:
    """Employee Class 1 National Insurance."""
    return apply_bands(income, cfg.NI_PRIMARY_THRESHOLD, NI_BANDS)


def income_tax_curve(incomes: np.ndarray) -> np.ndarray:
    """Income tax over an array of incomes (used for rate charts)."""
    incomes = np.asarray(incomes, dtype=float)
    excess = np.maximum(incomes - cfg.PA_TAPER_THRESHOLD, 0.0)
    pa = np.maximum(cfg.PERSONAL_ALLOWANCE - excess * cfg.PA_TAPER_RATE, 0.0)
    return band_tax(incomes, pa, INCOME_TAX_BANDS)


def national_insurance_curve(incomes: np.ndarray) -> np.ndarray:
    return band_tax(incomes, cfg.NI_PRIMARY_THRESHOLD, NI_BANDS)


def marginal_rate_breakdown(salary: float) -> Dict[str, float]:
    """Marginal and effective rate breakdown for a single salary.

    Uses a £1 delta to compute the marginal rate of each component.

    Returns
    -------
    dict
        Keys: ``'income_tax_pct'``, ``'ni_pct'``, ``'total_marginal_pct'``,
        ``'effective_pct'``.
    """
    s = np.array([salary, salary + 1.0])
    it = income_tax_curve(s)
    ni = national_insurance_curve(s)

    it_marginal = float(it[1] - it[0])
    ni_marginal = float(ni[1] - ni[0])
    total_deductions = float(it[0]) + float(ni[0])
    effective = total_deductions / salary if salary > 0 else 0.0

    return {
        "income_tax_pct": round(it_marginal * 100, 2),
        "ni_pct": round(ni_marginal * 100, 2),
        "total_marginal_pct": round((it_marginal + ni_marginal) * 100, 2),
        "effective_pct": round(effective * 100, 2),
    }


# ─── Dividend Tax ───────────────────────────────────────────────────

def dividend_bands(other_income: float) -> Tuple[Band, ...]:
    """Dividend bands left over once *other_income* has used its share.

    Dividends sit on top of other income, so the basic and higher bands
    only have whatever room the other income did not fill.
    """
    pa = personal_allowance(other_income)
    used = pa + max(0.0, other_income - pa)
    basic_room = max(0.0, cfg.BASIC_RATE_LIMIT - used)
    higher_room = max(0.0, cfg.HIGHER_RATE_LIMIT - max(cfg.BASIC_RATE_LIMIT, used))
    return (
        Band("Basic Rate", basic_room, cfg.DIVIDEND_BASIC_RATE),
        Band("Higher Rate", basic_room + higher_room, cfg.DIVIDEND_HIGHER_RATE),
        Band("Additional Rate", float("inf"), cfg.DIVIDEND_ADDITIONAL_RATE),
    )


def dividend_tax(other_income: float, dividend_income: float) -> BandResult:
    """Tax on dividends after the £500 dividend allowance."""
    return apply_bands(dividend_income, cfg.DIVIDEND_ALLOWANCE, dividend_bands(other_income))


# ─── Capital Gains Tax ──────────────────────────────────────────────

def capital_gains_bands(other_income: float, asset_type: str = "property") -> Tuple[Band, ...]:
    """CGT bands: the lower rate only reaches as far as the unused basic band."""
    if asset_type not in cfg.CGT_RATES:
        raise ValueError(f"Unknown asset type '{asset_type}'")
    lower, upper = cfg.CGT_RATES[asset_type]
    used = max(personal_allowance(other_income), other_income)
    basic_room = max(0.0, cfg.BASIC_RATE_LIMIT - used)
    return (
        Band("Basic Rate", basic_room, lower),
        Band("Higher Rate", float("inf"), upper),
    )


def capital_gains_tax(gain: float, other_income: float, asset_type: str = "property") -> BandResult:
    """Tax on a capital gain after the annual exempt amount."""
    return apply_bands(gain, cfg.CGT_ANNUAL_EXEMPT_AMOUNT, capital_gains_bands(other_income, asset_type))


# ─── Student Loan ───────────────────────────────────────────────────

def student_loan_repayment(salary: float, plan: str = "plan2") -> BandResult:
    """Annual student loan repayment: a single band above the plan threshold."""
    if plan not in cfg.STUDENT_LOAN_PLANS:
        raise ValueError(f"Unknown student loan plan '{plan}'")
    threshold, rate = cfg.STUDENT_LOAN_PLANS[plan]
    return apply_bands(salary, threshold, (Band("Repayment", float("inf"), rate),))


# ─── Council Tax ─────────────────────────────────────────────────────

def council_tax(band: str) -> float:
    """Estimated annual council tax for a property band in England."""
    band = band.upper()
    if band not in cfg.COUNCIL_TAX_MULTIPLIERS:
        raise ValueError(f"Unknown council tax band '{band}'")
    return cfg.AVERAGE_BAND_D_ENGLAND * cfg.COUNCIL_TAX_MULTIPLIERS[band]


# ─── Stamp Duty ─────────────────────────────────────────────────────

SDLT_STANDARD_BANDS = bands_from_thresholds(cfg.SDLT_STANDARD_BANDS)
SDLT_FTB_BANDS = bands_from_thresholds(cfg.SDLT_FTB_BANDS)

BUYER_TYPES = ("next_home", "first_time_buyer", "additional_home")


def stamp_duty(price: float, buyer: str = "next_home") -> BandResult:
    """Stamp Duty Land Tax on a residential purchase in England.

    First-time buyer relief only applies up to £625,000; above that the
    standard bands apply to the whole price. Additional homes pay the
    surcharge on the full price on top of the standard bands.
    """
    if buyer not in BUYER_TYPES:
        raise ValueError(f"Unknown buyer type '{buyer}'")

    if buyer == "first_time_buyer" and price <= cfg.SDLT_FTB_PRICE_CAP:
        result = apply_bands(price, 0.0, SDLT_FTB_BANDS)
    else:
        result = apply_bands(price, 0.0, SDLT_STANDARD_BANDS)

    if buyer == "additional_home" and price > 0:
        surcharge = price * cfg.SDLT_ADDITIONAL_SURCHARGE
        extra = BandSlice("Additional Property Surcharge", cfg.SDLT_ADDITIONAL_SURCHARGE,
                          price, surcharge)
        result = BandResult(
            tax_owed=result.tax_owed + surcharge,
            taxable=result.taxable,
            breakdown=result.breakdown + (extra,),
        )

    logger.debug("SDLT on %.2f (%s) = %.2f", price, buyer, result.tax_owed)
    return result
