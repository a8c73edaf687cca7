"""Unit tests for percentage and ratio calculations"""

import pytest

import ratios


def test_commission():
    """Test 5% commission on £50,000"""
    assert ratios.commission(50_000, 5) == pytest.approx(2_500)
    assert ratios.commission(50_000, 0) == 0
    assert ratios.commission(0, 5) is None


def test_add_vat():
    """Test standard rate VAT on £100"""
    v = ratios.add_vat(100, 20)

    assert v.vat == pytest.approx(20)
    assert v.gross == pytest.approx(120)
    assert v.rate_percent == 20


def test_remove_vat():
    """Test stripping VAT from a gross amount"""
    v = ratios.remove_vat(120, 20)

    assert v.net == pytest.approx(100)
    assert v.vat == pytest.approx(20)


@pytest.mark.parametrize("rate", [0, 5, 20])
def test_vat_add_then_remove(rate):
    """Test removing VAT undoes adding it"""
    gross = ratios.add_vat(249.99, rate).gross
    assert ratios.remove_vat(gross, rate).net == pytest.approx(249.99)


def test_vat_not_computable():
    """Test zero amounts give None"""
    assert ratios.add_vat(0, 20) is None
    assert ratios.remove_vat(-5, 20) is None


def test_salary_increase():
    """Test a 5% rise on £50,000"""
    s = ratios.salary_increase(50_000, 5)

    assert s.new_salary == pytest.approx(52_500)
    assert s.annual_increase == pytest.approx(2_500)
    assert s.monthly_increase == pytest.approx(208.33, abs=0.01)
    assert ratios.salary_increase(0, 5) is None


def test_rule_of_72():
    """Test doubling time and the zero-rate guard"""
    assert ratios.rule_of_72(6) == pytest.approx(12)
    assert ratios.rule_of_72(0) is None
    assert ratios.rule_of_72(-1) is None
