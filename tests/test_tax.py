"""Unit tests for the band engine and UK taxes"""

import numpy as np
import pytest

import tax
from tax import Band, apply_bands, band_tax


def test_income_tax_basic_rate():
    """Test £50,000 salary stays in the basic band"""
    result = tax.income_tax(50_000)

    assert result.tax_owed == pytest.approx(7_486)
    assert result.taxable == pytest.approx(37_430)
    assert [s.name for s in result.breakdown] == ["Basic Rate"]


def test_income_tax_tapered_allowance():
    """Test £120,000 salary loses part of its personal allowance"""
    result = tax.income_tax(120_000)

    assert tax.personal_allowance(120_000) == pytest.approx(2_570)
    assert result.tax_owed == pytest.approx(39_432)
    assert [s.name for s in result.breakdown] == ["Basic Rate", "Higher Rate"]


def test_income_tax_below_allowance():
    """Test no tax and an empty breakdown under the personal allowance"""
    result = tax.income_tax(10_000)

    assert result.tax_owed == 0
    assert result.breakdown == ()


def test_national_insurance():
    """Test 8% main rate and 2% above the upper limit"""
    assert tax.national_insurance(35_000).tax_owed == pytest.approx(1_794.40)
    assert tax.national_insurance(60_000).tax_owed == pytest.approx(3_016 + 9_730 * 0.02)
    assert tax.national_insurance(12_000).tax_owed == 0


def test_tapered_allowance_known_value():
    """Test £1 lost for every £2 over the threshold"""
    assert tax.tapered_allowance(12_570, 120_000, 100_000, 0.5) == 2_570


def test_tapered_allowance_continuous_and_zero():
    """Test allowance is continuous at the threshold and gone at T + 2A"""
    assert tax.tapered_allowance(12_570, 100_000, 100_000) == 12_570
    assert tax.tapered_allowance(12_570, 100_001, 100_000) == pytest.approx(12_569.5)
    assert tax.tapered_allowance(12_570, 125_140, 100_000) == 0
    assert tax.tapered_allowance(12_570, 500_000, 100_000) == 0


def test_apply_bands_monotonic_and_breakdown_sums():
    """Test more income never means less tax, and slices add up"""
    previous = -1.0
    for income in range(0, 300_001, 7_500):
        result = tax.income_tax(income)
        assert result.tax_owed >= previous
        assert sum(s.tax_in_band for s in result.breakdown) == pytest.approx(result.tax_owed)
        previous = result.tax_owed


def test_apply_bands_rejects_unordered_table():
    """Test unordered band limits are a programming error"""
    bands = (Band("High", 1_000, 0.4), Band("Low", 500, 0.2))
    with pytest.raises(ValueError):
        apply_bands(2_000, 0, bands)


def test_band_tax_matches_apply_bands():
    """Test vectorised band tax agrees with the scalar walk"""
    incomes = np.array([0, 12_570, 30_000, 50_270, 99_000, 160_000])
    vectorised = band_tax(incomes, tax.personal_allowance(0), tax.INCOME_TAX_BANDS)
    scalar = [apply_bands(i, tax.personal_allowance(0), tax.INCOME_TAX_BANDS).tax_owed
              for i in incomes]

    assert vectorised == pytest.approx(scalar)


def test_income_tax_curve_includes_taper():
    """Test the income tax curve applies the tapered allowance per income"""
    incomes = np.array([50_000, 120_000, 200_000])
    expected = [tax.income_tax(i).tax_owed for i in incomes]

    assert tax.income_tax_curve(incomes) == pytest.approx(expected)


def test_marginal_rate_breakdown():
    """Test marginal rates in the basic band and the taper trap"""
    basic = tax.marginal_rate_breakdown(30_000)
    assert basic["income_tax_pct"] == pytest.approx(20)
    assert basic["ni_pct"] == pytest.approx(8)
    assert basic["total_marginal_pct"] == pytest.approx(28)

    taper = tax.marginal_rate_breakdown(110_000)
    assert taper["income_tax_pct"] == pytest.approx(60)
    assert taper["ni_pct"] == pytest.approx(2)


def test_dividend_tax_stacks_on_other_income():
    """Test £5,000 dividends on a £50,000 salary straddle basic and higher bands"""
    result = tax.dividend_tax(50_000, 5_000)

    assert result.taxable == pytest.approx(4_500)
    assert [s.taxable_in_band for s in result.breakdown] == pytest.approx([270, 4_230])
    assert result.tax_owed == pytest.approx(270 * 0.0875 + 4_230 * 0.3375)
    assert result.tax_owed == pytest.approx(1_451.25)


def test_dividend_tax_within_allowance():
    """Test dividends under the £500 allowance are tax free"""
    result = tax.dividend_tax(20_000, 400)

    assert result.tax_owed == 0
    assert result.taxable == 0


def test_dividend_tax_higher_band_reduced_by_other_income():
    """Test a £100,000 salary leaves only part of the higher band"""
    result = tax.dividend_tax(100_000, 30_500)

    # Higher band room is 125,140 - 100,000 = 25,140; the rest is additional rate
    assert [s.name for s in result.breakdown] == ["Higher Rate", "Additional Rate"]
    assert result.breakdown[0].taxable_in_band == pytest.approx(25_140)
    assert result.breakdown[1].taxable_in_band == pytest.approx(4_860)


def test_capital_gains_tax_property_straddles_bands():
    """Test a £92,000 property gain on a £45,000 income"""
    result = tax.capital_gains_tax(92_000, 45_000, "property")

    assert result.taxable == pytest.approx(89_000)
    assert [s.taxable_in_band for s in result.breakdown] == pytest.approx([5_270, 83_730])
    assert result.tax_owed == pytest.approx(5_270 * 0.18 + 83_730 * 0.24)
    assert result.tax_owed == pytest.approx(21_043.8)


def test_capital_gains_tax_other_assets():
    """Test shares use the 10% and 20% rates"""
    result = tax.capital_gains_tax(40_000, 20_000, "other")
    assert result.tax_owed == pytest.approx(30_270 * 0.10 + 6_730 * 0.20)


def test_capital_gains_tax_exempt_and_higher_rate_only():
    """Test gains under the exemption are free and higher earners skip the lower rate"""
    assert tax.capital_gains_tax(2_500, 30_000).tax_owed == 0

    result = tax.capital_gains_tax(13_000, 60_000)
    assert [s.name for s in result.breakdown] == ["Higher Rate"]
    assert result.tax_owed == pytest.approx(10_000 * 0.24)


def test_capital_gains_tax_unknown_asset():
    with pytest.raises(ValueError):
        tax.capital_gains_tax(10_000, 30_000, "crypto")


def test_student_loan_plans():
    """Test repayment above each plan threshold"""
    assert tax.student_loan_repayment(35_000, "plan2").tax_owed == pytest.approx((35_000 - 27_295) * 0.09)
    assert tax.student_loan_repayment(35_000, "postgraduate").tax_owed == pytest.approx(14_000 * 0.06)
    assert tax.student_loan_repayment(20_000, "plan1").tax_owed == 0


def test_student_loan_unknown_plan():
    """Test an unknown plan raises"""
    with pytest.raises(ValueError):
        tax.student_loan_repayment(35_000, "plan9")


def test_council_tax_bands():
    """Test Band D average and multipliers"""
    assert tax.council_tax("D") == pytest.approx(2_171)
    assert tax.council_tax("a") == pytest.approx(2_171 * 6 / 9)
    assert tax.council_tax("H") == pytest.approx(4_342)
    with pytest.raises(ValueError):
        tax.council_tax("Z")


def test_stamp_duty_standard():
    """Test 5% on the slice above £250,000"""
    result = tax.stamp_duty(300_000)

    assert result.tax_owed == pytest.approx(2_500)
    assert result.breakdown[0].name == "£250,000 to £925,000"


def test_stamp_duty_first_time_buyer_relief():
    """Test relief applies up to £625,000 and not above"""
    assert tax.stamp_duty(400_000, "first_time_buyer").tax_owed == 0
    assert tax.stamp_duty(500_000, "first_time_buyer").tax_owed == pytest.approx(3_750)
    assert tax.stamp_duty(700_000, "first_time_buyer").tax_owed == pytest.approx(
        tax.stamp_duty(700_000, "next_home").tax_owed
    )
    assert tax.stamp_duty(700_000, "next_home").tax_owed == pytest.approx(22_500)


def test_stamp_duty_additional_home_surcharge():
    """Test the surcharge is charged on the whole price"""
    result = tax.stamp_duty(300_000, "additional_home")

    assert result.tax_owed == pytest.approx(11_500)
    assert result.breakdown[-1].name == "Additional Property Surcharge"


def test_stamp_duty_top_band():
    """Test 12% above £1.5m"""
    expected = 675_000 * 0.05 + 575_000 * 0.10 + 500_000 * 0.12
    assert tax.stamp_duty(2_000_000).tax_owed == pytest.approx(expected)


def test_stamp_duty_unknown_buyer():
    """Test an unknown buyer type raises"""
    with pytest.raises(ValueError):
        tax.stamp_duty(300_000, "landlord")
