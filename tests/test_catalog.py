"""Tests for the calculator registry"""

import matplotlib.pyplot as plt
import pytest

import forms
from catalog import CALCULATORS, get

SLUGS = sorted(CALCULATORS)


def test_registry_size_and_lookup():
    """Test every calculator is registered under its slug"""
    assert len(CALCULATORS) == 28
    assert get("stamp-duty").title == "Stamp Duty Calculator"
    assert get("missing") is None
    for slug, c in CALCULATORS.items():
        assert c.slug == slug


@pytest.mark.parametrize("slug", SLUGS)
def test_defaults_compute_and_render(slug):
    """Test each calculator works from its own defaults"""
    c = CALCULATORS[slug]
    values = forms.parse_form(c.fields, {})
    result = c.compute(values)

    assert result is not None
    rows = c.rows(result)
    assert rows
    assert all(isinstance(label, str) and isinstance(value, str) for label, value in rows)

    for fig in c.charts(result):
        if fig is not None:
            plt.close(fig)


@pytest.mark.parametrize("slug", SLUGS)
def test_blank_form_never_raises(slug):
    """Test a completely blank form is coerced rather than rejected"""
    c = CALCULATORS[slug]
    blank = {f.name: "" for f in c.fields}
    result = c.compute(forms.parse_form(c.fields, blank))

    if result is not None:
        assert c.rows(result)


def test_choice_defaults_are_valid():
    """Test every choice field defaults to one of its options"""
    for c in CALCULATORS.values():
        for f in c.fields:
            if f.kind == "choice":
                assert f.default in [key for key, _ in f.choices]


def test_stamp_duty_rows():
    """Test stamp duty rows list the charged bands"""
    c = get("stamp-duty")
    rows = dict(c.rows(c.compute({"price": 300_000, "buyer": "next_home"})))

    assert rows["Total Stamp Duty"] == "£2,500.00"
    assert rows["Tax on £50,000.00 at 5.00% (£250,000 to £925,000)"] == "£2,500.00"


def test_wedding_extras_are_included():
    """Test free-form extras add to the wedding subtotal"""
    c = get("wedding-budget")
    values = forms.parse_form(c.fields, {"extras": "Rings, 1000"})
    with_extras = c.compute(values)
    without = c.compute(forms.parse_form(c.fields, {}))

    assert with_extras.subtotal == pytest.approx(without.subtotal + 1_000)


def test_capital_gains_rows():
    """Test the CGT rows show the exemption and both bands"""
    c = get("capital-gains-tax")
    rows = dict(c.rows(c.compute(forms.parse_form(c.fields, {}))))

    assert rows["Capital Gains Tax Payable"] == "£21,043.80"
    assert rows["Annual Exempt Amount"] == "£3,000"
    assert rows["Tax on £5,270.00 at 18.00% (Basic Rate)"] == "£948.60"


def test_loan_terms_in_months():
    """Test personal and car loans take their term in months"""
    personal = get("personal-loan").compute({"amount": 10_000, "rate": 5.5, "months": 60})
    car = get("car-loan").compute({"price": 20_000, "deposit": 2_000, "rate": 7.9, "months": 48})

    assert personal.summary.n_payments == 60
    assert car.schedule.summary.n_payments == 48


def test_compound_interest_frequency_choice():
    """Test the frequency choice reaches the engine as a number of periods"""
    c = get("compound-interest")
    annual = c.compute(forms.parse_form(c.fields, {"frequency": "1"}))
    daily = c.compute(forms.parse_form(c.fields, {"frequency": "365"}))
    fallback = c.compute(forms.parse_form(c.fields, {"frequency": "weekly"}))

    assert daily.future_value > annual.future_value
    assert fallback == c.compute(forms.parse_form(c.fields, {}))


def test_savings_goal_rows():
    """Test the goal shows a duration, or a message when out of reach"""
    c = get("savings-goal")
    reached = dict(c.rows(c.compute({"goal": 1_000, "current": 0, "monthly": 100, "rate": 0})))
    missed = dict(c.rows(c.compute({"goal": 1_000, "current": 0, "monthly": 0, "rate": 5})))

    assert reached["Time to Goal"] == "0 years 10 months"
    assert missed["Time to Goal"] == "Not reachable with these savings"
