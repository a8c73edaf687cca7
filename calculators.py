"""
Individual calculators built on the tax, growth and ratio engines.

Each calculator has a frozen input record, a frozen output record and a
``calculate_*`` function. A ``None`` result means the inputs do not give
anything to display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import config as cfg
import growth
import ratios
import tax

logger = logging.getLogger(__name__)


# ─── Annuity ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AnnuityInputs:
    pot: float
    rate_percent: float
    term_years: float


@dataclass(frozen=True)
class AnnuityResult:
    monthly_payout: float
    annual_payout: float
    total_payout: float
    total_interest: float


def calculate_annuity(inputs: AnnuityInputs) -> Optional[AnnuityResult]:
    a = growth.amortize(inputs.pot, inputs.rate_percent, inputs.term_years)
    if a is None:
        return None
    return AnnuityResult(
        monthly_payout=a.payment,
        annual_payout=a.payment * 12,
        total_payout=a.total_paid,
        total_interest=a.total_interest,
    )


# ─── Loans ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LoanInputs:
    amount: float
    rate_percent: float
    term_years: float


def calculate_amortization(inputs: LoanInputs) -> Optional[growth.AmortizationSchedule]:
    return growth.amortization_schedule(inputs.amount, inputs.rate_percent, inputs.term_years)


@dataclass(frozen=True)
class LoanComparisonInputs:
    first: LoanInputs
    second: LoanInputs


@dataclass(frozen=True)
class LoanComparisonResult:
    first: growth.Amortization
    second: growth.Amortization
    first_cheaper_monthly: bool
    first_cheaper_overall: bool
    monthly_difference: float
    total_difference: float


def calculate_loan_comparison(inputs: LoanComparisonInputs) -> Optional[LoanComparisonResult]:
    """Compare two loan offers. Both must be computable."""
    first = growth.amortize(inputs.first.amount, inputs.first.rate_percent, inputs.first.term_years)
    second = growth.amortize(inputs.second.amount, inputs.second.rate_percent, inputs.second.term_years)
    if first is None or second is None:
        return None
    return LoanComparisonResult(
        first=first,
        second=second,
        first_cheaper_monthly=first.payment < second.payment,
        first_cheaper_overall=first.total_paid < second.total_paid,
        monthly_difference=abs(first.payment - second.payment),
        total_difference=abs(first.total_paid - second.total_paid),
    )


@dataclass(frozen=True)
class RemortgageInputs:
    property_value: float
    outstanding: float
    current_payment: float
    new_rate_percent: float
    new_term_years: float
    fees: float = 0.0


@dataclass(frozen=True)
class RemortgageResult:
    equity: float
    ltv_percent: float
    new_monthly_payment: float
    monthly_saving: float
    first_year_saving: float


def calculate_remortgage(inputs: RemortgageInputs) -> Optional[RemortgageResult]:
    """New payment on the outstanding balance and what switching saves."""
    if inputs.property_value <= 0 or inputs.current_payment <= 0:
        return None
    new = growth.amortize(inputs.outstanding, inputs.new_rate_percent, inputs.new_term_years)
    if new is None:
        return None
    monthly_saving = inputs.current_payment - new.payment
    return RemortgageResult(
        equity=inputs.property_value - inputs.outstanding,
        ltv_percent=inputs.outstanding / inputs.property_value * 100,
        new_monthly_payment=new.payment,
        monthly_saving=monthly_saving,
        first_year_saving=monthly_saving * 12 - inputs.fees,
    )


@dataclass(frozen=True)
class FinancedPurchaseInputs:
    price: float
    deposit: float
    rate_percent: float
    term_years: float


@dataclass(frozen=True)
class FinancedPurchaseResult:
    loan_amount: float
    deposit_percent: float
    interest_only_payment: float
    schedule: growth.AmortizationSchedule


def calculate_financed_purchase(inputs: FinancedPurchaseInputs) -> Optional[FinancedPurchaseResult]:
    """Repayment loan on a purchase less its deposit, e.g. car finance or a mortgage."""
    if inputs.price <= 0:
        return None
    loan = inputs.price - inputs.deposit
    schedule = growth.amortization_schedule(loan, inputs.rate_percent, inputs.term_years)
    if schedule is None:
        return None
    return FinancedPurchaseResult(
        loan_amount=loan,
        deposit_percent=inputs.deposit / inputs.price * 100,
        interest_only_payment=loan * inputs.rate_percent / 100 / 12,
        schedule=schedule,
    )


# ─── Mortgages & property ────────────────────────────────────────────

@dataclass(frozen=True)
class AffordabilityInputs:
    applicant1_income: float
    applicant2_income: float
    deposit: float
    monthly_debts: float = 0.0


@dataclass(frozen=True)
class AffordabilityResult:
    total_income: float
    estimated_borrowing: float
    max_property_price: float
    deposit: float
    loan_to_income: float
    multiplier: float


def calculate_affordability(inputs: AffordabilityInputs) -> Optional[AffordabilityResult]:
    """Rough lender view of how much could be borrowed.

    Annual debt repayments count double against income, and the income
    multiple moves between 4.5x and 5x.
    """
    total_income = inputs.applicant1_income + inputs.applicant2_income
    if total_income <= 0 or inputs.deposit <= 0:
        return None

    annual_debt = inputs.monthly_debts * 12
    disposable = max(0.0, total_income - annual_debt * cfg.AFFORDABILITY_DEBT_WEIGHT)

    multiplier = cfg.AFFORDABILITY_BASE_MULTIPLIER
    estimated_lti = disposable * cfg.AFFORDABILITY_BASE_MULTIPLIER / total_income
    if estimated_lti < 4:
        multiplier = cfg.AFFORDABILITY_LOW_LTI_MULTIPLIER
    if total_income > cfg.AFFORDABILITY_HIGH_INCOME:
        multiplier = cfg.AFFORDABILITY_HIGH_INCOME_MULTIPLIER

    borrowing = disposable * multiplier
    return AffordabilityResult(
        total_income=total_income,
        estimated_borrowing=borrowing,
        max_property_price=borrowing + inputs.deposit,
        deposit=inputs.deposit,
        loan_to_income=borrowing / total_income,
        multiplier=multiplier,
    )


@dataclass(frozen=True)
class FirstTimeBuyerInputs:
    property_price: float
    deposit: float
    income: float


@dataclass(frozen=True)
class FirstTimeBuyerResult:
    mortgage_needed: float
    max_borrowing: float
    loan_to_income: float
    deposit_percent: float
    affordable: bool
    stamp_duty: tax.BandResult


def calculate_first_time_buyer(inputs: FirstTimeBuyerInputs) -> Optional[FirstTimeBuyerResult]:
    if inputs.property_price <= 0 or inputs.income <= 0:
        return None
    mortgage_needed = inputs.property_price - inputs.deposit
    max_borrowing = inputs.income * cfg.FTB_INCOME_MULTIPLE
    return FirstTimeBuyerResult(
        mortgage_needed=mortgage_needed,
        max_borrowing=max_borrowing,
        loan_to_income=mortgage_needed / inputs.income,
        deposit_percent=inputs.deposit / inputs.property_price * 100,
        affordable=mortgage_needed <= max_borrowing,
        stamp_duty=tax.stamp_duty(inputs.property_price, "first_time_buyer"),
    )


@dataclass(frozen=True)
class StampDutyInputs:
    property_price: float
    buyer: str = "next_home"


@dataclass(frozen=True)
class StampDutyResult:
    total_tax: float
    effective_rate: float
    bands: tax.BandResult


def calculate_stamp_duty(inputs: StampDutyInputs) -> Optional[StampDutyResult]:
    if inputs.property_price <= 0:
        return None
    result = tax.stamp_duty(inputs.property_price, inputs.buyer)
    return StampDutyResult(
        total_tax=result.tax_owed,
        effective_rate=result.tax_owed / inputs.property_price * 100,
        bands=result,
    )


@dataclass(frozen=True)
class CouncilTaxResult:
    band: str
    annual: float
    monthly: float


def calculate_council_tax(band: str) -> CouncilTaxResult:
    annual = tax.council_tax(band)
    return CouncilTaxResult(band=band.upper(), annual=annual, monthly=annual / 12)


# ─── Income & tax ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DividendTaxInputs:
    other_income: float
    dividend_income: float


@dataclass(frozen=True)
class DividendTaxResult:
    tax_payable: float
    personal_allowance: float
    taxable_dividends: float
    bands: tax.BandResult


def calculate_dividend_tax(inputs: DividendTaxInputs) -> DividendTaxResult:
    bands = tax.dividend_tax(inputs.other_income, inputs.dividend_income)
    return DividendTaxResult(
        tax_payable=bands.tax_owed,
        personal_allowance=tax.personal_allowance(inputs.other_income),
        taxable_dividends=bands.taxable,
        bands=bands,
    )


@dataclass(frozen=True)
class CapitalGainsInputs:
    sale_price: float
    purchase_price: float
    costs: float
    other_income: float
    asset_type: str = "property"


@dataclass(frozen=True)
class CapitalGainsResult:
    total_gain: float
    taxable_gain: float
    tax_payable: float
    bands: tax.BandResult


def calculate_capital_gains(inputs: CapitalGainsInputs) -> Optional[CapitalGainsResult]:
    """CGT on a disposal, with the gain stacked on top of other income."""
    if inputs.sale_price <= 0 or inputs.purchase_price <= 0:
        return None
    gain = inputs.sale_price - inputs.purchase_price - inputs.costs
    bands = tax.capital_gains_tax(gain, inputs.other_income, inputs.asset_type)
    return CapitalGainsResult(
        total_gain=gain,
        taxable_gain=bands.taxable,
        tax_payable=bands.tax_owed,
        bands=bands,
    )


@dataclass(frozen=True)
class IncomeTaxResult:
    gross_income: float
    personal_allowance: float
    income_tax: tax.BandResult
    national_insurance: tax.BandResult
    total_deductions: float
    net_income: float
    effective_rate: float
    marginal: dict = field(default_factory=dict)


def calculate_income_tax(gross_income: float) -> Optional[IncomeTaxResult]:
    """Income tax and NI on a salary, with effective and marginal rates."""
    if gross_income <= 0:
        return None
    it = tax.income_tax(gross_income)
    ni = tax.national_insurance(gross_income)
    deductions = it.tax_owed + ni.tax_owed
    return IncomeTaxResult(
        gross_income=gross_income,
        personal_allowance=tax.personal_allowance(gross_income),
        income_tax=it,
        national_insurance=ni,
        total_deductions=deductions,
        net_income=gross_income - deductions,
        effective_rate=deductions / gross_income * 100,
        marginal=tax.marginal_rate_breakdown(gross_income),
    )


@dataclass(frozen=True)
class StudentLoanResult:
    plan: str
    annual: float
    monthly: float


def calculate_student_loan(salary: float, plan: str = "plan2") -> StudentLoanResult:
    annual = tax.student_loan_repayment(salary, plan).tax_owed
    return StudentLoanResult(plan=plan, annual=annual, monthly=annual / 12)


@dataclass(frozen=True)
class PensionInputs:
    salary: float
    employee_percent: float
    employer_percent: float
    tax_band: str = "basic"


@dataclass(frozen=True)
class PensionResult:
    qualifying_earnings: float
    employee_contribution: float
    employer_contribution: float
    total_contribution: float
    tax_relief: float
    net_cost: float
    monthly_employee: float
    monthly_employer: float
    monthly_net_cost: float


def calculate_pension(inputs: PensionInputs) -> Optional[PensionResult]:
    """Auto-enrolment contributions on qualifying earnings."""
    if inputs.salary <= 0:
        return None
    if inputs.tax_band not in cfg.PENSION_TAX_RELIEF:
        raise ValueError(f"Unknown tax band '{inputs.tax_band}'")

    qualifying = max(
        0.0,
        min(inputs.salary, cfg.QUALIFYING_EARNINGS_UPPER) - cfg.QUALIFYING_EARNINGS_LOWER,
    )
    employee = qualifying * inputs.employee_percent / 100
    employer = qualifying * inputs.employer_percent / 100
    relief = employee * cfg.PENSION_TAX_RELIEF[inputs.tax_band]
    net_cost = employee - relief
    return PensionResult(
        qualifying_earnings=qualifying,
        employee_contribution=employee,
        employer_contribution=employer,
        total_contribution=employee + employer,
        tax_relief=relief,
        net_cost=net_cost,
        monthly_employee=employee / 12,
        monthly_employer=employer / 12,
        monthly_net_cost=net_cost / 12,
    )


# ─── Savings & investment ───────────────────────────────────────────

@dataclass(frozen=True)
class InvestmentInputs:
    initial: float
    monthly: float
    rate_percent: float
    years: float


def calculate_investment(inputs: InvestmentInputs) -> Optional[growth.Growth]:
    return growth.grow_future(
        inputs.initial, inputs.monthly, inputs.rate_percent, inputs.years, every=1
    )


@dataclass(frozen=True)
class RetirementInputs:
    current_age: float
    retirement_age: float
    current_savings: float
    monthly: float
    rate_percent: float


@dataclass(frozen=True)
class RetirementResult:
    current_age: int
    projection: growth.Growth


def calculate_retirement(inputs: RetirementInputs) -> Optional[RetirementResult]:
    """Projected pot at retirement, with a point every five years of age."""
    years = inputs.retirement_age - inputs.current_age
    projection = growth.grow_future(
        inputs.current_savings, inputs.monthly, inputs.rate_percent, years, every=5
    )
    if projection is None:
        return None
    return RetirementResult(current_age=int(inputs.current_age), projection=projection)


@dataclass(frozen=True)
class FutureValueResult:
    future_value: float
    total_interest: float


def calculate_future_value(present_value: float, rate_percent: float,
                           years: float) -> Optional[FutureValueResult]:
    fv = growth.compound_value(present_value, rate_percent, years)
    if fv is None:
        return None
    return FutureValueResult(future_value=fv, total_interest=fv - present_value)


@dataclass(frozen=True)
class CompoundInterestInputs:
    principal: float
    monthly: float
    rate_percent: float
    years: float
    periods_per_year: int = 12


def calculate_compound_interest(inputs: CompoundInterestInputs) -> Optional[growth.Growth]:
    return growth.compound_interest(
        inputs.principal, inputs.monthly, inputs.rate_percent, inputs.years, inputs.periods_per_year
    )


@dataclass(frozen=True)
class SavingsGoalInputs:
    goal: float
    current: float
    monthly: float
    rate_percent: float


def calculate_savings_goal(inputs: SavingsGoalInputs) -> growth.SavingsGoal:
    return growth.months_to_target(inputs.goal, inputs.current, inputs.monthly, inputs.rate_percent)


# ─── Ratios ─────────────────────────────────────────────────────────

def calculate_vat(amount: float, rate_percent: float, mode: str = "add") -> Optional[ratios.VatBreakdown]:
    if mode == "remove":
        return ratios.remove_vat(amount, rate_percent)
    return ratios.add_vat(amount, rate_percent)


# ─── Budgets ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class WeddingInputs:
    items: Tuple[Tuple[str, float], ...]
    guests: float = 0.0
    cost_per_head: float = 0.0


@dataclass(frozen=True)
class WeddingResult:
    catering_total: float
    subtotal: float
    contingency: float
    grand_total: float


def calculate_wedding_budget(inputs: WeddingInputs) -> WeddingResult:
    catering = inputs.guests * inputs.cost_per_head
    subtotal = sum(cost for _, cost in inputs.items) + catering
    contingency = subtotal * cfg.WEDDING_CONTINGENCY
    return WeddingResult(
        catering_total=catering,
        subtotal=subtotal,
        contingency=contingency,
        grand_total=subtotal + contingency,
    )


@dataclass(frozen=True)
class TravelResult:
    items: Tuple[Tuple[str, float], ...]
    total: float


def calculate_travel_budget(items: Tuple[Tuple[str, float], ...]) -> TravelResult:
    return TravelResult(items=tuple(items), total=sum(cost for _, cost in items))
