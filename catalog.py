"""
Registry of calculators.

Each entry describes its form fields, how to turn coerced form values
into a result, how to present the result as ``(metric, value)`` rows and
which charts to draw. The CLI and the web app are both driven from
``CALCULATORS``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import calculators as calc
import config as cfg
import ratios
import tax
from report import bands_chart, effective_rate_chart, fmt, growth_chart, pct, schedule_chart

Rows = List[Tuple[str, str]]


@dataclass(frozen=True)
class Field:
    name: str
    label: str
    default: str = ""
    kind: str = "number"       # 'number', 'choice' or 'items'
    choices: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Calculator:
    slug: str
    title: str
    summary: str
    fields: Tuple[Field, ...]
    compute: Callable[[Dict[str, Any]], Any]
    rows: Callable[[Any], Rows]
    charts: Callable[[Any], list] = lambda result: []
    faqs: Tuple[Tuple[str, str], ...] = ()
    placeholder: str = "Enter your details to see a result."


def _band_rows(result: tax.BandResult) -> Rows:
    return [
        (f"Tax on {fmt(s.taxable_in_band, 2)} at {s.rate * 100:.2f}% ({s.name})", fmt(s.tax_in_band, 2))
        for s in result.breakdown
    ]


# ─── Annuity & loans ─────────────────────────────────────────────────

def _annuity(v):
    return calc.calculate_annuity(calc.AnnuityInputs(v["pot"], v["rate"], v["term"]))


def _annuity_rows(r: calc.AnnuityResult) -> Rows:
    return [
        ("Annual Payout", fmt(r.annual_payout)),
        ("Monthly Payout", fmt(r.monthly_payout, 2)),
        ("Total Payout", fmt(r.total_payout)),
        ("Total Interest", fmt(r.total_interest)),
    ]


def _amortization(v):
    return calc.calculate_amortization(calc.LoanInputs(v["amount"], v["rate"], v["term"]))


def _amortization_rows(s) -> Rows:
    rows = [
        ("Monthly Payment", fmt(s.summary.payment, 2)),
        ("Total Repaid", fmt(s.summary.total_paid, 2)),
        ("Total Interest", fmt(s.summary.total_interest, 2)),
    ]
    for y in s.years:
        rows.append((f"Year {y.year} balance", fmt(y.balance, 2)))
    return rows


def _loan_comparison(v):
    return calc.calculate_loan_comparison(calc.LoanComparisonInputs(
        first=calc.LoanInputs(v["amount1"], v["rate1"], v["term1"]),
        second=calc.LoanInputs(v["amount2"], v["rate2"], v["term2"]),
    ))


def _loan_comparison_rows(r: calc.LoanComparisonResult) -> Rows:
    cheaper_monthly = "Loan 1" if r.first_cheaper_monthly else "Loan 2"
    cheaper_total = "Loan 1" if r.first_cheaper_overall else "Loan 2"
    return [
        ("Loan 1 Monthly Payment", fmt(r.first.payment, 2)),
        ("Loan 1 Total Repaid", fmt(r.first.total_paid, 2)),
        ("Loan 1 Total Interest", fmt(r.first.total_interest, 2)),
        ("Loan 2 Monthly Payment", fmt(r.second.payment, 2)),
        ("Loan 2 Total Repaid", fmt(r.second.total_paid, 2)),
        ("Loan 2 Total Interest", fmt(r.second.total_interest, 2)),
        ("Lower Monthly Payment", f"{cheaper_monthly} (by {fmt(r.monthly_difference, 2)})"),
        ("Cheaper Overall", f"{cheaper_total} (by {fmt(r.total_difference, 2)})"),
    ]


def _remortgage(v):
    return calc.calculate_remortgage(calc.RemortgageInputs(
        property_value=v["property_value"],
        outstanding=v["outstanding"],
        current_payment=v["current_payment"],
        new_rate_percent=v["rate"],
        new_term_years=v["term"],
        fees=v["fees"],
    ))


def _remortgage_rows(r: calc.RemortgageResult) -> Rows:
    return [
        ("Equity", fmt(r.equity)),
        ("Loan to Value", pct(r.ltv_percent)),
        ("New Monthly Payment", fmt(r.new_monthly_payment, 2)),
        ("Monthly Saving", fmt(r.monthly_saving, 2)),
        ("First Year Saving (after fees)", fmt(r.first_year_saving, 2)),
    ]


# ─── Property ────────────────────────────────────────────────────────

def _affordability(v):
    return calc.calculate_affordability(calc.AffordabilityInputs(
        v["income1"], v["income2"], v["deposit"], v["monthly_debts"],
    ))


def _affordability_rows(r: calc.AffordabilityResult) -> Rows:
    return [
        ("Estimated Borrowing Amount", fmt(r.estimated_borrowing)),
        ("Maximum Property Price", fmt(r.max_property_price)),
        ("Your Deposit", fmt(r.deposit)),
        ("Loan-to-Income (LTI) Ratio", f"{r.loan_to_income:.2f}"),
        ("Income Multiple Used", f"{r.multiplier:g}x"),
    ]


def _first_time_buyer(v):
    return calc.calculate_first_time_buyer(calc.FirstTimeBuyerInputs(
        v["price"], v["deposit"], v["income"],
    ))


def _first_time_buyer_rows(r: calc.FirstTimeBuyerResult) -> Rows:
    return [
        ("Mortgage Needed", fmt(r.mortgage_needed)),
        ("Maximum Borrowing (4.5x income)", fmt(r.max_borrowing)),
        ("Loan-to-Income Ratio", f"{r.loan_to_income:.2f}"),
        ("Deposit", pct(r.deposit_percent)),
        ("Affordable", "Yes" if r.affordable else "No"),
        ("Stamp Duty", fmt(r.stamp_duty.tax_owed, 2)),
    ]


BUYER_CHOICES = (
    ("next_home", "Next home"),
    ("first_time_buyer", "First-time buyer"),
    ("additional_home", "Additional home"),
)


def _stamp_duty(v):
    return calc.calculate_stamp_duty(calc.StampDutyInputs(v["price"], v["buyer"]))


def _stamp_duty_rows(r: calc.StampDutyResult) -> Rows:
    return [
        ("Total Stamp Duty", fmt(r.total_tax, 2)),
        ("Effective Tax Rate", pct(r.effective_rate, 2)),
    ] + _band_rows(r.bands)


def _council_tax_rows(r: calc.CouncilTaxResult) -> Rows:
    return [
        (f"Annual Council Tax (Band {r.band})", fmt(r.annual)),
        ("Monthly Payment", fmt(r.monthly)),
    ]


# ─── Income & tax ────────────────────────────────────────────────────

def _dividend_rows(r: calc.DividendTaxResult) -> Rows:
    return [
        ("Estimated Dividend Tax", fmt(r.tax_payable, 2)),
        ("Personal Allowance", fmt(r.personal_allowance)),
        ("Dividend Allowance", fmt(cfg.DIVIDEND_ALLOWANCE)),
        ("Taxable Dividends", fmt(r.taxable_dividends, 2)),
    ] + _band_rows(r.bands)


def _income_tax_rows(r: calc.IncomeTaxResult) -> Rows:
    return [
        ("Income Tax", fmt(r.income_tax.tax_owed, 2)),
        ("Personal Allowance", fmt(r.personal_allowance)),
        ("Taxable Income", fmt(r.income_tax.taxable)),
        ("Monthly Income Tax", fmt(r.income_tax.tax_owed / 12, 2)),
    ] + _band_rows(r.income_tax)


def _effective_rate_rows(r: calc.IncomeTaxResult) -> Rows:
    m = r.marginal
    return [
        ("Effective Tax Rate", pct(r.effective_rate, 2)),
        ("Gross Income", fmt(r.gross_income)),
        ("Income Tax", fmt(r.income_tax.tax_owed, 2)),
        ("National Insurance", fmt(r.national_insurance.tax_owed, 2)),
        ("Total Deductions", fmt(r.total_deductions, 2)),
        ("Net Income", fmt(r.net_income, 2)),
        ("Monthly Net Income", fmt(r.net_income / 12, 2)),
        ("Marginal Rate", f"{pct(m['total_marginal_pct'])} "
                          f"({pct(m['income_tax_pct'])} IT + {pct(m['ni_pct'])} NI)"),
    ]


PLAN_CHOICES = (
    ("plan1", "Plan 1"),
    ("plan2", "Plan 2"),
    ("plan4", "Plan 4 (Scotland)"),
    ("plan5", "Plan 5"),
    ("postgraduate", "Postgraduate Loan"),
)


def _student_loan_rows(r: calc.StudentLoanResult) -> Rows:
    threshold, rate = cfg.STUDENT_LOAN_PLANS[r.plan]
    return [
        ("Repayment Threshold", fmt(threshold)),
        ("Repayment Rate", pct(rate * 100, 0)),
        ("Annual Repayment", fmt(r.annual, 2)),
        ("Monthly Repayment", fmt(r.monthly, 2)),
    ]


TAX_BAND_CHOICES = (
    ("basic", "Basic rate (20%)"),
    ("higher", "Higher rate (40%)"),
    ("additional", "Additional rate (45%)"),
)


def _pension(v):
    return calc.calculate_pension(calc.PensionInputs(
        v["salary"], v["employee"], v["employer"], v["tax_band"],
    ))


def _pension_rows(r: calc.PensionResult) -> Rows:
    return [
        ("Qualifying Earnings", fmt(r.qualifying_earnings, 2)),
        ("Employee Contribution (annual)", fmt(r.employee_contribution, 2)),
        ("Employee Contribution (monthly)", fmt(r.monthly_employee, 2)),
        ("Employer Contribution (annual)", fmt(r.employer_contribution, 2)),
        ("Employer Contribution (monthly)", fmt(r.monthly_employer, 2)),
        ("Total Contribution", fmt(r.total_contribution, 2)),
        ("Tax Relief", fmt(r.tax_relief, 2)),
        ("Net Cost to You (annual)", fmt(r.net_cost, 2)),
        ("Net Cost to You (monthly)", fmt(r.monthly_net_cost, 2)),
    ]


# ─── Savings & investment ───────────────────────────────────────────

def _investment(v):
    return calc.calculate_investment(calc.InvestmentInputs(
        v["initial"], v["monthly"], v["rate"], v["years"],
    ))


def _growth_rows(g) -> Rows:
    return [
        ("Total Value", fmt(g.future_value)),
        ("Total Contributions", fmt(g.principal_contributed)),
        ("Total Interest Earned", fmt(g.interest_earned)),
    ]


def _retirement(v):
    return calc.calculate_retirement(calc.RetirementInputs(
        v["current_age"], v["retirement_age"], v["savings"], v["monthly"], v["rate"],
    ))


def _retirement_rows(r: calc.RetirementResult) -> Rows:
    g = r.projection
    rows = [
        ("Retirement Pot", fmt(g.future_value, 2)),
        ("Total Contributions", fmt(g.principal_contributed, 2)),
        ("Total Investment Growth", fmt(g.interest_earned, 2)),
    ]
    for p in g.series:
        rows.append((f"Projected savings at age {r.current_age + p.year:g}", fmt(p.value, 2)))
    return rows


def _future_value_rows(r: calc.FutureValueResult) -> Rows:
    return [
        ("Future Value", fmt(r.future_value, 2)),
        ("Total Interest", fmt(r.total_interest, 2)),
    ]


# ─── Loans & mortgages ───────────────────────────────────────────────

def _personal_loan(v):
    return calc.calculate_amortization(calc.LoanInputs(v["amount"], v["rate"], v["months"] / 12))


def _loan_summary_rows(s) -> Rows:
    return [
        ("Monthly Payment", fmt(s.summary.payment, 2)),
        ("Number of Payments", str(s.summary.n_payments)),
        ("Total Repaid", fmt(s.summary.total_paid, 2)),
        ("Total Interest", fmt(s.summary.total_interest, 2)),
    ]


def _car_loan(v):
    return calc.calculate_financed_purchase(calc.FinancedPurchaseInputs(
        v["price"], v["deposit"], v["rate"], v["months"] / 12,
    ))


def _mortgage(v):
    return calc.calculate_financed_purchase(calc.FinancedPurchaseInputs(
        v["price"], v["deposit"], v["rate"], v["term"],
    ))


def _financed_rows(r: calc.FinancedPurchaseResult) -> Rows:
    return [
        ("Amount Borrowed", fmt(r.loan_amount, 2)),
        ("Deposit", pct(r.deposit_percent)),
    ] + _loan_summary_rows(r.schedule)


def _mortgage_rows(r: calc.FinancedPurchaseResult) -> Rows:
    return _financed_rows(r) + [("Interest-Only Monthly Payment", fmt(r.interest_only_payment, 2))]


# ─── Capital gains ───────────────────────────────────────────────────

ASSET_CHOICES = (
    ("property", "Residential property"),
    ("other", "Other assets, e.g. shares"),
)


def _capital_gains(v):
    return calc.calculate_capital_gains(calc.CapitalGainsInputs(
        v["sale_price"], v["purchase_price"], v["costs"], v["income"], v["asset_type"],
    ))


def _capital_gains_rows(r: calc.CapitalGainsResult) -> Rows:
    return [
        ("Capital Gains Tax Payable", fmt(r.tax_payable, 2)),
        ("Total Gain", fmt(r.total_gain, 2)),
        ("Annual Exempt Amount", fmt(cfg.CGT_ANNUAL_EXEMPT_AMOUNT)),
        ("Taxable Gain", fmt(r.taxable_gain, 2)),
    ] + _band_rows(r.bands)


# ─── Compound interest & savings goals ──────────────────────────────

FREQUENCY_CHOICES = tuple(cfg.COMPOUNDING_FREQUENCIES.items())


def _compound_interest(v):
    return calc.calculate_compound_interest(calc.CompoundInterestInputs(
        v["principal"], v["monthly"], v["rate"], v["years"], int(v["frequency"]),
    ))


def _savings_goal(v):
    return calc.calculate_savings_goal(calc.SavingsGoalInputs(
        v["goal"], v["current"], v["monthly"], v["rate"],
    ))


def _savings_goal_rows(g) -> Rows:
    if not g.achievable:
        return [("Time to Goal", "Not reachable with these savings")]
    return [
        ("Time to Goal", f"{g.months // 12} years {g.months % 12} months"),
        ("Final Balance", fmt(g.final_balance, 2)),
        ("Total Contributions", fmt(g.total_contributions, 2)),
        ("Interest Earned", fmt(g.total_interest, 2)),
    ]


# ─── Ratios ─────────────────────────────────────────────────────────

VAT_CHOICES = tuple(cfg.VAT_RATES.items())
VAT_MODE_CHOICES = (("add", "Add VAT"), ("remove", "Remove VAT"))


def _vat_rows(r) -> Rows:
    return [
        ("Net Amount (excl. VAT)", fmt(r.net, 2)),
        (f"VAT @ {r.rate_percent:g}%", fmt(r.vat, 2)),
        ("Gross Amount (incl. VAT)", fmt(r.gross, 2)),
    ]


def _salary_increase_rows(r) -> Rows:
    return [
        ("New Salary", fmt(r.new_salary)),
        ("Annual Increase", fmt(r.annual_increase)),
        ("Monthly Increase", fmt(r.monthly_increase, 2)),
    ]


# ─── Budgets ─────────────────────────────────────────────────────────

def _wedding(v):
    fixed = [
        ("Venue Hire", v["venue"]),
        ("Attire", v["attire"]),
        ("Photography/Videography", v["photography"]),
        ("Entertainment", v["entertainment"]),
        ("Flowers & Decorations", v["flowers"]),
        ("Cake", v["cake"]),
    ]
    return calc.calculate_wedding_budget(calc.WeddingInputs(
        items=tuple(fixed) + v["extras"],
        guests=v["guests"],
        cost_per_head=v["per_head"],
    ))


def _wedding_rows(r: calc.WeddingResult) -> Rows:
    return [
        ("Catering Total", fmt(r.catering_total)),
        ("Subtotal", fmt(r.subtotal)),
        (f"Contingency ({cfg.WEDDING_CONTINGENCY * 100:.0f}%)", fmt(r.contingency)),
        ("Grand Total", fmt(r.grand_total)),
    ]


def _travel_rows(r: calc.TravelResult) -> Rows:
    return [(label, fmt(cost)) for label, cost in r.items] + [("Total Budget", fmt(r.total))]


# ═══════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════

_ENTRIES = [
    Calculator(
        slug="annuity",
        title="Annuity Calculator",
        summary="Estimate the regular income you could receive from your pension pot with a fixed-term annuity.",
        fields=(
            Field("pot", "Annuity Pot (£)", "100000"),
            Field("rate", "Estimated Annual Rate (%)", "5"),
            Field("term", "Annuity Term (Years)", "20"),
        ),
        compute=_annuity,
        rows=_annuity_rows,
        faqs=(
            ("What is an annuity?",
             "An annuity turns a pension pot into a regular income, either for life or for a fixed term."),
            ("How are annuity rates determined?",
             "Providers set rates from gilt yields, your age, health and the options you choose, "
             "such as inflation linking or a spouse's pension."),
            ("A note on accuracy",
             "This calculator assumes a fixed-term annuity at a level rate. Real quotes will differ."),
        ),
        placeholder="Enter a pot, a rate and a term above zero to see your income.",
    ),
    Calculator(
        slug="amortization",
        title="Loan Amortisation Calculator",
        summary="See how each year's repayments split between interest and principal.",
        fields=(
            Field("amount", "Loan Amount (£)", "200000"),
            Field("rate", "Annual Interest Rate (%)", "4.5"),
            Field("term", "Term (Years)", "25"),
        ),
        compute=_amortization,
        rows=_amortization_rows,
        charts=lambda s: [schedule_chart(s)],
        faqs=(
            ("What is amortisation?",
             "Amortisation is paying a loan off with level instalments. Early payments are mostly "
             "interest; later payments are mostly principal."),
        ),
    ),
    Calculator(
        slug="loan-comparison",
        title="Loan Comparison Calculator",
        summary="Compare two loan offers side by side on monthly cost and total cost.",
        fields=(
            Field("amount1", "Loan 1 Amount (£)", "10000"),
            Field("rate1", "Loan 1 APR (%)", "7.5"),
            Field("term1", "Loan 1 Term (Years)", "5"),
            Field("amount2", "Loan 2 Amount (£)", "10000"),
            Field("rate2", "Loan 2 APR (%)", "8.0"),
            Field("term2", "Loan 2 Term (Years)", "4"),
        ),
        compute=_loan_comparison,
        rows=_loan_comparison_rows,
        faqs=(
            ("Is the lowest monthly payment the cheapest loan?",
             "Not always. A longer term lowers the monthly payment but usually increases the total interest paid."),
        ),
    ),
    Calculator(
        slug="remortgage",
        title="Remortgage Calculator",
        summary="Work out your new monthly payment and how much switching could save.",
        fields=(
            Field("property_value", "Current Property Value (£)", "300000"),
            Field("outstanding", "Outstanding Mortgage (£)", "150000"),
            Field("current_payment", "Current Monthly Payment (£)", "800"),
            Field("rate", "New Interest Rate (%)", "4.5"),
            Field("term", "New Mortgage Term (Years)", "25"),
            Field("fees", "Fees for New Mortgage (£)", "999"),
        ),
        compute=_remortgage,
        rows=_remortgage_rows,
        faqs=(
            ("When should I consider remortgaging?",
             "Usually when a fixed or tracker deal ends and you would otherwise move onto the lender's standard variable rate."),
            ("What is Loan to Value (LTV)?",
             "LTV is the mortgage balance as a percentage of the property's value. Lower LTVs usually get better rates."),
            ("Are there fees involved in remortgaging?",
             "Often: arrangement, valuation and legal fees, plus early repayment charges on the old deal."),
        ),
    ),
    Calculator(
        slug="personal-loan",
        title="Personal Loan Calculator",
        summary="Work out the monthly repayment and total cost of a personal loan.",
        fields=(
            Field("amount", "Loan Amount (£)", "10000"),
            Field("rate", "Interest Rate (APR %)", "5.5"),
            Field("months", "Loan Term (Months)", "60"),
        ),
        compute=_personal_loan,
        rows=_loan_summary_rows,
        charts=lambda s: [schedule_chart(s)],
        faqs=(
            ("What is an APR on a personal loan?",
             "The Annual Percentage Rate is the yearly cost of borrowing, including interest and any compulsory fees."),
            ("What's the difference between a personal loan and a credit card?",
             "A personal loan is a fixed sum repaid in fixed instalments; a credit card is a revolving limit "
             "with a variable minimum payment."),
        ),
    ),
    Calculator(
        slug="car-loan",
        title="Car Loan Calculator",
        summary="Estimate monthly payments on car finance after your deposit.",
        fields=(
            Field("price", "Vehicle Price (£)", "20000"),
            Field("deposit", "Deposit (£)", "2000"),
            Field("rate", "Interest Rate (APR %)", "7.9"),
            Field("months", "Loan Term (Months)", "48"),
        ),
        compute=_car_loan,
        rows=_financed_rows,
        charts=lambda r: [schedule_chart(r.schedule)],
        faqs=(
            ("What is PCP vs HP?",
             "Hire purchase spreads the whole price over the term. PCP defers a large final balloon payment."),
            ("Should I pay a deposit on a car loan?",
             "A larger deposit means borrowing less, so lower payments and less interest overall."),
        ),
        placeholder="The deposit must be less than the price, with a rate and term above zero.",
    ),
    Calculator(
        slug="mortgage-repayment",
        title="Mortgage Repayment Calculator",
        summary="See your monthly repayment mortgage cost and how the balance falls each year.",
        fields=(
            Field("price", "Property Price (£)", "300000"),
            Field("deposit", "Deposit (£)", "30000"),
            Field("rate", "Interest Rate (%)", "4.5"),
            Field("term", "Mortgage Term (Years)", "25"),
        ),
        compute=_mortgage,
        rows=_mortgage_rows,
        charts=lambda r: [schedule_chart(r.schedule)],
        faqs=(
            ("How is the payment calculated?",
             "Based on the amount borrowed, the term and the interest rate, with equal monthly repayments."),
            ("What is an interest-only mortgage?",
             "You pay only the interest each month and repay the full loan at the end of the term."),
        ),
    ),
    Calculator(
        slug="mortgage-affordability",
        title="Mortgage Affordability Calculator",
        summary="Estimate how much you could borrow based on your income, deposit and debts.",
        fields=(
            Field("income1", "Applicant 1 Annual Income (£)", "45000"),
            Field("income2", "Applicant 2 Annual Income (£)", "0"),
            Field("deposit", "Deposit (£)", "30000"),
            Field("monthly_debts", "Monthly Debt Repayments (£)", "0"),
        ),
        compute=_affordability,
        rows=_affordability_rows,
        faqs=(
            ("How much can I borrow?",
             "Most lenders cap borrowing at around 4 to 4.5 times income, higher for some professions and high earners."),
            ("A note on accuracy",
             "Lenders run their own affordability checks. Treat this as a guide only."),
        ),
        placeholder="Enter an income and a deposit to see an estimate.",
    ),
    Calculator(
        slug="first-time-buyer",
        title="First-Time Buyer Calculator",
        summary="Check whether a property is within reach and what stamp duty you would pay as a first-time buyer.",
        fields=(
            Field("price", "Property Price (£)", "300000"),
            Field("deposit", "Deposit (£)", "30000"),
            Field("income", "Household Income (£)", "60000"),
        ),
        compute=_first_time_buyer,
        rows=_first_time_buyer_rows,
        charts=lambda r: [bands_chart(r.stamp_duty, "Stamp Duty by Band")],
        faqs=(
            ("Do first-time buyers pay stamp duty?",
             "First-time buyers pay nothing on the first £425,000 and 5% up to £625,000. Above £625,000 no relief applies."),
        ),
    ),
    Calculator(
        slug="stamp-duty",
        title="Stamp Duty Calculator",
        summary="Calculate Stamp Duty Land Tax on a property purchase in England.",
        fields=(
            Field("price", "Property Price (£)", "350000"),
            Field("buyer", "Buyer Type", "next_home", "choice", BUYER_CHOICES),
        ),
        compute=_stamp_duty,
        rows=_stamp_duty_rows,
        charts=lambda r: [bands_chart(r.bands, "Stamp Duty by Band")],
        faqs=(
            ("What is Stamp Duty Land Tax (SDLT)?",
             "SDLT is a tax on property purchases in England and Northern Ireland, charged in bands on the price."),
            ("What is the additional rate for second homes?",
             "Buying an additional residential property adds a surcharge on the whole price."),
        ),
    ),
    Calculator(
        slug="council-tax",
        title="Council Tax Estimator",
        summary="Get an estimate for your annual council tax bill based on your property band in England.",
        fields=(
            Field("band", "Council Tax Band", "D", "choice",
                  tuple((b, f"Band {b}") for b in cfg.COUNCIL_TAX_MULTIPLIERS)),
        ),
        compute=lambda v: calc.calculate_council_tax(v["band"]),
        rows=_council_tax_rows,
        faqs=(
            ("How are council tax bands determined?",
             "Properties in England are banded A to H on their value on 1 April 1991."),
            ("Can I get a discount?",
             "Discounts such as the 25% single person discount are not included in this estimate."),
        ),
    ),
    Calculator(
        slug="dividend-tax",
        title="Dividend Tax Calculator",
        summary=f"Estimate the tax you'll owe on your dividend income for the {cfg.TAX_YEAR} tax year.",
        fields=(
            Field("other_income", "Other Annual Income, e.g. Salary (£)", "50000"),
            Field("dividends", "Total Annual Dividend Income (£)", "5000"),
        ),
        compute=lambda v: calc.calculate_dividend_tax(
            calc.DividendTaxInputs(v["other_income"], v["dividends"])),
        rows=_dividend_rows,
        charts=lambda r: [bands_chart(r.bands, "Dividend Tax by Band")],
        faqs=(
            ("What is the Dividend Allowance?",
             f"The first £{cfg.DIVIDEND_ALLOWANCE} of dividends each year is tax free."),
            ("How is dividend tax calculated?",
             "Dividends are added on top of your other income and taxed at 8.75%, 33.75% or 39.35% "
             "depending on which band they fall into."),
        ),
    ),
    Calculator(
        slug="capital-gains-tax",
        title="Capital Gains Tax Calculator",
        summary=f"Estimate Capital Gains Tax on selling an asset in the {cfg.TAX_YEAR} tax year.",
        fields=(
            Field("sale_price", "Selling Price (£)", "300000"),
            Field("purchase_price", "Purchase Price (£)", "200000"),
            Field("costs", "Buying & Selling Costs (£)", "8000"),
            Field("income", "Annual Taxable Income (£)", "45000"),
            Field("asset_type", "Asset Type", "property", "choice", ASSET_CHOICES),
        ),
        compute=_capital_gains,
        rows=_capital_gains_rows,
        charts=lambda r: [bands_chart(r.bands, "Capital Gains Tax by Band")],
        faqs=(
            ("What is Capital Gains Tax (CGT)?",
             "A tax on the profit when you sell an asset that has gone up in value. The gain is taxed, "
             "not the amount you receive."),
            ("What is the CGT annual exemption?",
             f"The first £{cfg.CGT_ANNUAL_EXEMPT_AMOUNT:,} of gains each tax year is tax free."),
            ("How does my income tax band affect my CGT rate?",
             "Gains are added on top of your income. The part inside your unused basic rate band is taxed "
             "at the lower rate, the rest at the higher rate."),
        ),
    ),
    Calculator(
        slug="income-tax",
        title="Income Tax Calculator",
        summary=f"Work out the income tax on your salary for the {cfg.TAX_YEAR} tax year.",
        fields=(Field("income", "Gross Annual Income (£)", "50000"),),
        compute=lambda v: calc.calculate_income_tax(v["income"]),
        rows=_income_tax_rows,
        charts=lambda r: [bands_chart(r.income_tax, "Income Tax by Band")],
        faqs=(
            ("What is the personal allowance?",
             "The first £12,570 of income is tax free. It shrinks by £1 for every £2 earned over £100,000."),
            ("Why is the marginal rate so high between £100,000 and £125,140?",
             "The personal allowance is withdrawn at £1 for every £2 earned, which adds 20% to the 40% rate."),
        ),
    ),
    Calculator(
        slug="effective-tax-rate",
        title="Effective Tax Rate Calculator",
        summary="See income tax and National Insurance as a share of your pay, and your take-home pay.",
        fields=(Field("income", "Gross Annual Income (£)", "50000"),),
        compute=lambda v: calc.calculate_income_tax(v["income"]),
        rows=_effective_rate_rows,
        charts=lambda r: [effective_rate_chart(r.gross_income)],
        faqs=(
            ("What is the effective tax rate?",
             "Total income tax and NI divided by gross income. It is always lower than your marginal rate."),
            ("What is the marginal rate?",
             "The share of your next £1 of pay lost to income tax and NI."),
        ),
    ),
    Calculator(
        slug="student-loan",
        title="Student Loan Repayment Calculator",
        summary="See how much you repay on your student loan each month.",
        fields=(
            Field("salary", "Annual Salary (£)", "35000"),
            Field("plan", "Repayment Plan", "plan2", "choice", PLAN_CHOICES),
        ),
        compute=lambda v: calc.calculate_student_loan(v["salary"], v["plan"]),
        rows=_student_loan_rows,
        faqs=(
            ("When do I start repaying?",
             "Repayments start once your income is above your plan's threshold. You repay a percentage of the excess."),
        ),
    ),
    Calculator(
        slug="pension-contribution",
        title="Pension Contribution Calculator",
        summary="Work out workplace pension contributions on qualifying earnings and your tax relief.",
        fields=(
            Field("salary", "Annual Salary (£)", "35000"),
            Field("employee", "Employee Contribution (%)", "5"),
            Field("employer", "Employer Contribution (%)", "3"),
            Field("tax_band", "Your Tax Band", "basic", "choice", TAX_BAND_CHOICES),
        ),
        compute=_pension,
        rows=_pension_rows,
        faqs=(
            ("What is the minimum pension contribution in the UK?",
             "Under auto-enrolment the minimum is 8% of qualifying earnings, with at least 3% from the employer."),
            ("How much tax relief do I get?",
             "Relief is given at your marginal rate: 20%, 40% or 45%."),
        ),
    ),
    Calculator(
        slug="investment",
        title="Investment & Savings Growth Calculator",
        summary="Project the future value of your investments with regular contributions.",
        fields=(
            Field("initial", "Initial Investment (£)", "10000"),
            Field("monthly", "Monthly Contribution (£)", "250"),
            Field("rate", "Expected Annual Return (%)", "7"),
            Field("years", "Investment Period (Years)", "20"),
        ),
        compute=_investment,
        rows=_growth_rows,
        charts=lambda g: [growth_chart(g)],
        faqs=(
            ("What is compound growth?",
             "Returns earn returns of their own, so growth speeds up the longer money stays invested."),
        ),
        placeholder="Enter a return and a period above zero to see a projection.",
    ),
    Calculator(
        slug="retirement-savings",
        title="Retirement Savings Calculator",
        summary="Estimate the size of your pension pot when you retire.",
        fields=(
            Field("current_age", "Current Age", "30"),
            Field("retirement_age", "Retirement Age", "67"),
            Field("savings", "Current Savings (£)", "50000"),
            Field("monthly", "Monthly Contribution (£)", "500"),
            Field("rate", "Expected Annual Return (%)", "7"),
        ),
        compute=_retirement,
        rows=_retirement_rows,
        charts=lambda r: [growth_chart(r.projection, start=r.current_age, x_label="Age")],
        faqs=(
            ("How much do I need to retire?",
             "It depends on the lifestyle you want. Many people aim for two thirds of their pre-retirement income."),
        ),
        placeholder="Retirement age must be after your current age and the return above zero.",
    ),
    Calculator(
        slug="future-value",
        title="Future Value Calculator",
        summary="See what a lump sum grows to with annual compounding.",
        fields=(
            Field("present_value", "Present Value (£)", "10000"),
            Field("rate", "Annual Interest Rate (%)", "7"),
            Field("years", "Number of Years", "10"),
        ),
        compute=lambda v: calc.calculate_future_value(v["present_value"], v["rate"], v["years"]),
        rows=_future_value_rows,
    ),
    Calculator(
        slug="compound-interest",
        title="Compound Interest Calculator",
        summary="See how savings grow with compound interest and monthly contributions.",
        fields=(
            Field("principal", "Initial Deposit (£)", "5000"),
            Field("monthly", "Monthly Contribution (£)", "100"),
            Field("rate", "Annual Interest Rate (%)", "5"),
            Field("years", "Number of Years", "10"),
            Field("frequency", "Compounding Frequency", "12", "choice", FREQUENCY_CHOICES),
        ),
        compute=_compound_interest,
        rows=_growth_rows,
        charts=lambda g: [growth_chart(g)],
        faqs=(
            ("How does compounding frequency matter?",
             "The more often interest is added, the sooner it starts earning interest itself."),
        ),
        placeholder="Enter a number of years above zero to see your savings grow.",
    ),
    Calculator(
        slug="savings-goal",
        title="Savings Goal Calculator",
        summary="Find out how long it will take to reach a savings target.",
        fields=(
            Field("goal", "Savings Goal (£)", "10000"),
            Field("current", "Current Savings (£)", "1000"),
            Field("monthly", "Monthly Savings (£)", "250"),
            Field("rate", "Annual Interest Rate (%)", "4"),
        ),
        compute=_savings_goal,
        rows=_savings_goal_rows,
    ),
    Calculator(
        slug="commission",
        title="Commission Calculator",
        summary="Calculate your commission earnings from sales revenue and commission rate.",
        fields=(
            Field("revenue", "Total Revenue / Sales Amount (£)", "50000"),
            Field("rate", "Commission Rate (%)", "5"),
        ),
        compute=lambda v: ratios.commission(v["revenue"], v["rate"]),
        rows=lambda c: [("Commission Earned", fmt(c, 2))],
        faqs=(
            ("Is commission income taxable?",
             "Yes. Commission is taxed as employment income through PAYE like the rest of your pay."),
        ),
    ),
    Calculator(
        slug="vat",
        title="VAT Calculator",
        summary="Add or remove VAT from any amount.",
        fields=(
            Field("amount", "Amount (£)", "100"),
            Field("rate", "VAT Rate", "20", "choice", VAT_CHOICES),
            Field("mode", "Calculation", "add", "choice", VAT_MODE_CHOICES),
        ),
        compute=lambda v: calc.calculate_vat(v["amount"], float(v["rate"]), v["mode"]),
        rows=_vat_rows,
        faqs=(
            ("What are the current VAT rates in the UK?",
             "20% standard, 5% reduced (e.g. home energy) and 0% zero rate (most food, children's clothes)."),
            ("What is the difference between net and gross price?",
             "Net excludes VAT; gross includes it."),
        ),
    ),
    Calculator(
        slug="salary-increase",
        title="Salary Increase Calculator",
        summary="See what a percentage pay rise is worth.",
        fields=(
            Field("salary", "Current Salary (£)", "50000"),
            Field("percent", "Increase (%)", "5"),
        ),
        compute=lambda v: ratios.salary_increase(v["salary"], v["percent"]),
        rows=_salary_increase_rows,
    ),
    Calculator(
        slug="rule-of-72",
        title="Rule of 72 Calculator",
        summary="Estimate how long it takes for money to double.",
        fields=(Field("rate", "Annual Rate of Return (%)", "6"),),
        compute=lambda v: ratios.rule_of_72(v["rate"]),
        rows=lambda years: [("Years to Double", f"{years:.1f}")],
        faqs=(
            ("What is the Rule of 72?",
             "Divide 72 by the annual return to estimate how many years it takes to double your money."),
            ("How accurate is it?",
             "It is most accurate for rates between about 6% and 10%."),
        ),
        placeholder="How long will it take to double? Enter a rate above zero.",
    ),
    Calculator(
        slug="wedding-budget",
        title="Wedding Budget Calculator",
        summary="Plan your wedding costs with a built-in contingency.",
        fields=(
            Field("venue", "Venue Hire (£)", "4500"),
            Field("per_head", "Catering per Head (£)", "75"),
            Field("guests", "Number of Guests", "80"),
            Field("attire", "Attire (£)", "2000"),
            Field("photography", "Photography/Videography (£)", "1800"),
            Field("entertainment", "Entertainment (£)", "1000"),
            Field("flowers", "Flowers & Decorations (£)", "1200"),
            Field("cake", "Cake (£)", "400"),
            Field("extras", "Other Costs (one 'item, amount' per line)", "", "items"),
        ),
        compute=_wedding,
        rows=_wedding_rows,
    ),
    Calculator(
        slug="travel-budget",
        title="Travel Budget Calculator",
        summary="Add up the cost of your trip.",
        fields=(
            Field("items", "Expenses (one 'category, amount' per line)", cfg.TRAVEL_DEFAULT_ITEMS, "items"),
        ),
        compute=lambda v: calc.calculate_travel_budget(v["items"]),
        rows=_travel_rows,
        placeholder="Enter your costs to see your budget.",
    ),
]

CALCULATORS: Dict[str, Calculator] = {c.slug: c for c in _ENTRIES}


def get(slug: str) -> Optional[Calculator]:
    return CALCULATORS.get(slug)
