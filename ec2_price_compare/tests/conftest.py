"""
Shared pytest fixtures for price comparison tests.
"""

import sys
import os
import json
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Fixed exchange rate for deterministic conversions
os.environ.setdefault('CNY_TO_USD_RATE', '7.3')
os.environ.setdefault('AWS_REGION', 'us-east-1')

import pytest
from fastapi.testclient import TestClient
from botocore.exceptions import EndpointConnectionError

from ec2_price_compare.core.config import Config
from ec2_price_compare.main import app
from ec2_price_compare.pricing.aws_pricing_client import AWSPricingClient
from ec2_price_compare.pricing.currency import CurrencyNormalizer
from ec2_price_compare.services.price_engine import PriceResolutionEngine


T3_XLARGE_ATTRIBUTES = {
    'instanceType': 't3.xlarge',
    'vcpu': '4',
    'memory': '16 GiB',
    'storage': 'EBS only',
    'networkPerformance': 'Up to 5 Gigabit',
    'instanceFamily': 'General purpose',
    'currentGeneration': 'Yes',
    'physicalProcessor': 'Intel Skylake E5 2686 v5',
    'clockSpeed': '3.1 GHz',
    'dedicatedEbsThroughput': 'Up to 2780 Mbps',
    'processorArchitecture': '64-bit',
    'processorFeatures': 'AVX; AVX2; Intel AVX512',
    'enhancedNetworkingSupported': 'No',
}


def make_term(price=None, currency='USD', lease=None, offering=None, purchase=None):
    """Build a raw leaf term with one hourly price dimension."""
    attributes = {}
    if lease:
        attributes = {
            'LeaseContractLength': lease,
            'OfferingClass': offering,
            'PurchaseOption': purchase,
        }
    price_per_unit = {currency: price} if price is not None else {}
    return {
        'offerTermCode': 'JRTCKXETXF',
        'termAttributes': attributes,
        'priceDimensions': {
            'SKU.JRTCKXETXF.6YS6EN2CT7': {
                'unit': 'Hrs',
                'description': 'Linux/UNIX hourly rate',
                'rateCode': 'SKU.JRTCKXETXF.6YS6EN2CT7',
                'pricePerUnit': price_per_unit,
            }
        },
    }


def make_document(terms, attributes=None):
    """Build a raw PriceList item (JSON string) the way GetProducts returns it."""
    return json.dumps({
        'product': {
            'productFamily': 'Compute Instance',
            'attributes': attributes if attributes is not None else dict(T3_XLARGE_ATTRIBUTES),
            'sku': 'SKU',
        },
        'terms': terms,
    })


def on_demand_document(price, currency='USD', attributes=None):
    return make_document(
        {'OnDemand': {'SKU.JRTCKXETXF': make_term(price, currency)}},
        attributes=attributes,
    )


def reserved_document(price, currency='USD', lease='1yr', purchase='No Upfront', attributes=None):
    return make_document(
        {'Reserved': {
            'SKU.RESERVED': make_term(price, currency, lease, 'convertible', purchase),
        }},
        attributes=attributes,
    )


class FakePricingClient:
    """
    Stand-in for a boto3 pricing client.

    Responses are keyed by (regionCode, termType); a value is either a list
    of PriceList items or an exception to raise.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def get_products(self, ServiceCode, Filters, MaxResults):
        fields = {f['Field']: f['Value'] for f in Filters}
        self.calls.append({'ServiceCode': ServiceCode, 'Filters': Filters, 'MaxResults': MaxResults})
        outcome = self.responses.get((fields['regionCode'], fields['termType']), [])
        if isinstance(outcome, Exception):
            raise outcome
        return {'PriceList': list(outcome), 'FormatVersion': 'aws_v1'}


def transport_error(region='us-west-2'):
    return EndpointConnectionError(endpoint_url=f'https://api.pricing.{region}.amazonaws.com')


@pytest.fixture
def settings():
    """Configuration with the default fixed exchange rate."""
    return Config()


@pytest.fixture
def standard_client():
    return FakePricingClient()


@pytest.fixture
def restricted_client():
    return FakePricingClient()


@pytest.fixture
def pricing_client(settings, standard_client, restricted_client):
    """Pricing adapter backed by fake boto3 clients."""
    return AWSPricingClient(
        settings,
        standard_client=standard_client,
        restricted_client=restricted_client,
    )


@pytest.fixture
def engine(pricing_client):
    """Price engine with fake catalog clients and a fixed 7.3 rate."""
    return PriceResolutionEngine(pricing_client, CurrencyNormalizer(7.3))


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)
