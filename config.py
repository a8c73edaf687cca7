"""
UK constants and runtime settings for the personal-finance calculators.

All monetary values in GBP. Tax year 2024/25 unless stated otherwise.
Band tables are ``(upper limit, rate)`` pairs measured on the *taxable*
amount (after any allowance). The last band has no upper limit (inf).
"""

import os

# ── Runtime settings ─────────────────────────────────────────────────
WEB_HOST = os.environ.get("CALC_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("CALC_WEB_PORT", "5000"))
LOG_LEVEL = os.environ.get("CALC_LOG_LEVEL", "INFO")
EXPORT_DIR = os.environ.get("CALC_EXPORT_DIR", ".")

TAX_YEAR = "2024/25"

# ── Personal Allowance ───────────────────────────────────────────────
PERSONAL_ALLOWANCE = 12_570
PA_TAPER_THRESHOLD = 100_000       # PA reduces £1 per £2 above this
PA_TAPER_RATE = 0.5

# ── Income Tax (England & Wales) ─────────────────────────────────────
BASIC_RATE_LIMIT = 50_270          # gross income where higher rate starts
HIGHER_RATE_LIMIT = 125_140        # gross income where additional rate starts

INCOME_TAX_BANDS = [
    ("Basic Rate", 37_700, 0.20),
    ("Higher Rate", 125_140, 0.40),
    ("Additional Rate", float("inf"), 0.45),
]

# ── National Insurance (Employee Class 1) ────────────────────────────
NI_PRIMARY_THRESHOLD = 12_570
NI_BANDS = [
    ("Main Rate", 37_700, 0.08),
    ("Upper Rate", float("inf"), 0.02),
]

# ── Dividend Tax ─────────────────────────────────────────────────────
DIVIDEND_ALLOWANCE = 500
DIVIDEND_BASIC_RATE = 0.0875
DIVIDEND_HIGHER_RATE = 0.3375
DIVIDEND_ADDITIONAL_RATE = 0.3935

# ── Capital Gains Tax ────────────────────────────────────────────────
CGT_ANNUAL_EXEMPT_AMOUNT = 3_000
# asset type -> (rate inside the unused basic band, rate above it)
CGT_RATES = {
    "property": (0.18, 0.24),
    "other": (0.10, 0.20),
}

# ── Student Loans ────────────────────────────────────────────────────
# plan -> (annual threshold, rate)
STUDENT_LOAN_PLANS = {
    "plan1": (24_990, 0.09),
    "plan2": (27_295, 0.09),
    "plan4": (31_395, 0.09),
    "plan5": (25_000, 0.09),
    "postgraduate": (21_000, 0.06),
}

# ── Council Tax (England) ────────────────────────────────────────────
AVERAGE_BAND_D_ENGLAND = 2_171
COUNCIL_TAX_MULTIPLIERS = {
    "A": 6 / 9,
    "B": 7 / 9,
    "C": 8 / 9,
    "D": 1.0,
    "E": 11 / 9,
    "F": 13 / 9,
    "G": 15 / 9,
    "H": 18 / 9,
}

# ── Stamp Duty Land Tax ──────────────────────────────────────────────
SDLT_STANDARD_BANDS = [
    (250_000, 0.00),
    (925_000, 0.05),
    (1_500_000, 0.10),
    (float("inf"), 0.12),
]
SDLT_FTB_BANDS = [
    (425_000, 0.00),
    (625_000, 0.05),
]
SDLT_FTB_PRICE_CAP = 625_000       # no relief above this price
SDLT_ADDITIONAL_SURCHARGE = 0.03

# ── Loans & growth ───────────────────────────────────────────────────
MAX_TERM_YEARS = 100               # longer terms and horizons are not computable
SAVINGS_GOAL_MAX_MONTHS = 1_200
COMPOUNDING_FREQUENCIES = {
    "1": "Annually",
    "4": "Quarterly",
    "12": "Monthly",
    "365": "Daily",
}

# ── Mortgages ────────────────────────────────────────────────────────
FTB_INCOME_MULTIPLE = 4.5
AFFORDABILITY_BASE_MULTIPLIER = 4.5
AFFORDABILITY_LOW_LTI_MULTIPLIER = 4.75
AFFORDABILITY_HIGH_INCOME_MULTIPLIER = 5.0
AFFORDABILITY_HIGH_INCOME = 100_000
AFFORDABILITY_DEBT_WEIGHT = 2      # annual debt counted twice by lenders

# ── Pensions (auto-enrolment) ────────────────────────────────────────
QUALIFYING_EARNINGS_LOWER = 6_240
QUALIFYING_EARNINGS_UPPER = 50_270
PENSION_TAX_RELIEF = {
    "basic": 0.20,
    "higher": 0.40,
    "additional": 0.45,
}

# ── VAT ──────────────────────────────────────────────────────────────
VAT_RATES = {
    "20": "Standard Rate (20%)",
    "5": "Reduced Rate (5%)",
    "0": "Zero Rate (0%)",
}

# ── Budgets ──────────────────────────────────────────────────────────
WEDDING_CONTINGENCY = 0.10
TRAVEL_DEFAULT_ITEMS = "Flights, 800\nAccommodation, 1000\nFood & Drink, 700\nActivities, 400"
