"""
Tests for currency conversion and plan parsing.
"""

import pytest

from ec2_price_compare.domain.pricing_models import Plan
from ec2_price_compare.pricing.currency import CurrencyNormalizer, format_amount


def test_usd_to_cny_and_back():
    normalizer = CurrencyNormalizer(7.3)

    assert normalizer.to_secondary(1.0) == pytest.approx(7.3)
    assert normalizer.to_primary(7.3) == pytest.approx(1.0)
    assert normalizer.to_primary(normalizer.to_secondary(0.1664)) == pytest.approx(0.1664)


def test_no_rounding_applied():
    normalizer = CurrencyNormalizer(7.3)

    assert normalizer.to_primary(1.2) == 1.2 / 7.3


def test_to_primary_amount_by_currency():
    normalizer = CurrencyNormalizer(7.3)

    assert normalizer.to_primary_amount(0.5, 'USD') == 0.5
    assert normalizer.to_primary_amount(7.3, 'CNY') == pytest.approx(1.0)
    assert normalizer.to_primary_amount(None, None) is None
    with pytest.raises(ValueError):
        normalizer.to_primary_amount(1.0, 'EUR')


def test_rate_must_be_positive():
    with pytest.raises(ValueError):
        CurrencyNormalizer(0)


def test_default_rate_from_config():
    assert CurrencyNormalizer().rate > 0


def test_format_amount():
    assert format_amount(0.1664) == '$0.1664'
    assert format_amount(1.2, 'CNY') == '¥1.2000'
    assert format_amount(1, 'EUR') == '1.0000 EUR'


@pytest.mark.parametrize('value,plan', [
    (None, Plan.ON_DEMAND),
    ('OnDemand', Plan.ON_DEMAND),
    ('onDemand', Plan.ON_DEMAND),
    ('Reserved1Year', Plan.RESERVED_1_YEAR),
    ('reserved1y', Plan.RESERVED_1_YEAR),
    ('Reserved3Year', Plan.RESERVED_3_YEAR),
    ('reserved3y', Plan.RESERVED_3_YEAR),
])
def test_plan_aliases(value, plan):
    assert Plan.from_alias(value) is plan


def test_unknown_plan_rejected():
    with pytest.raises(ValueError):
        Plan.from_alias('Spot')
