"""
Tests for configuration loading and validation.
"""

import pytest

from ec2_price_compare.core.config import Config


def test_defaults(monkeypatch):
    for name in ('CNY_TO_USD_RATE', 'AWS_CN_REGION', 'PRICING_MAX_RESULTS', 'AWS_ACCESS_KEY_ID'):
        monkeypatch.delenv(name, raising=False)

    settings = Config()

    assert settings.CNY_TO_USD_RATE == 7.3
    assert settings.AWS_CN_REGION == 'cn-northwest-1'
    assert settings.PRICING_MAX_RESULTS == 100
    assert settings.AWS_ACCESS_KEY_ID is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv('CNY_TO_USD_RATE', '7.1')
    monkeypatch.setenv('MCP_SILENT_MODE', 'true')

    settings = Config()

    assert settings.CNY_TO_USD_RATE == 7.1
    assert settings.MCP_SILENT_MODE is True


def test_validate_rejects_non_positive_rate():
    settings = Config()
    settings.CNY_TO_USD_RATE = -1

    with pytest.raises(ValueError):
        settings.validate()


def test_validate_rejects_insecure_endpoint():
    settings = Config()
    settings.AWS_CN_PRICING_ENDPOINT = 'http://api.pricing.cn-northwest-1.amazonaws.com.cn'

    with pytest.raises(ValueError):
        settings.validate()


def test_validate_rejects_page_size_out_of_range():
    settings = Config()
    settings.PRICING_MAX_RESULTS = 500

    with pytest.raises(ValueError):
        settings.validate()
