"""Percentage and ratio calculations: commission, VAT, pay rises, rule of 72."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VatBreakdown:
    net: float
    vat: float
    gross: float
    rate_percent: float


@dataclass(frozen=True)
class SalaryIncrease:
    new_salary: float
    annual_increase: float
    monthly_increase: float


def commission(revenue: float, rate_percent: float) -> Optional[float]:
    """Gross commission on *revenue* at *rate_percent*."""
    if revenue <= 0 or rate_percent < 0:
        return None
    return revenue * rate_percent / 100


def add_vat(net: float, rate_percent: float) -> Optional[VatBreakdown]:
    """Add VAT to a net amount."""
    if net <= 0:
        return None
    vat = net * rate_percent / 100
    return VatBreakdown(net=net, vat=vat, gross=net + vat, rate_percent=rate_percent)


def remove_vat(gross: float, rate_percent: float) -> Optional[VatBreakdown]:
    """Strip VAT out of a gross amount."""
    if gross <= 0:
        return None
    net = gross / (1 + rate_percent / 100)
    return VatBreakdown(net=net, vat=gross - net, gross=gross, rate_percent=rate_percent)


def salary_increase(salary: float, percent: float) -> Optional[SalaryIncrease]:
    if salary <= 0:
        return None
    increase = salary * percent / 100
    return SalaryIncrease(
        new_salary=salary + increase,
        annual_increase=increase,
        monthly_increase=increase / 12,
    )


def rule_of_72(rate_percent: float) -> Optional[float]:
    """Approximate years for money to double at *rate_percent* a year."""
    if rate_percent <= 0:
        logger.debug("rule_of_72 not computable for rate %s", rate_percent)
        return None
    return 72 / rate_percent
