"""
Tests for the instance type inventory.
"""

import pytest
from unittest.mock import Mock
from botocore.exceptions import ClientError

from ec2_price_compare.pricing.instance_catalog import (
    InstanceCatalog,
    InstanceCatalogError,
    describe_instance_type,
)
from ec2_price_compare.pricing.currency import CurrencyNormalizer
from ec2_price_compare.services.price_engine import PriceResolutionEngine


def _item(instance_type, vcpus=None, memory_mib=None):
    item = {'InstanceType': instance_type}
    if vcpus:
        item['VCpuInfo'] = {'DefaultVCpus': vcpus}
    if memory_mib:
        item['MemoryInfo'] = {'SizeInMiB': memory_mib}
    return item


def test_description_includes_vcpus_and_memory():
    info = describe_instance_type(_item('m5.xlarge', vcpus=4, memory_mib=16384))

    assert info.family == 'm5'
    assert info.description == 'm5 series - m5.xlarge (4 vCPUs, 16 GB RAM)'


def test_description_without_cpu_info():
    info = describe_instance_type(_item('c5.xlarge'))

    assert info.description == 'c5 series - c5.xlarge'


def test_item_without_type_is_skipped():
    assert describe_instance_type({}) is None


def _ec2_client(pages=None, error=None):
    ec2_client = Mock()
    paginator = ec2_client.get_paginator.return_value
    if error is not None:
        paginator.paginate.side_effect = error
    else:
        paginator.paginate.return_value = iter(pages)
    return ec2_client


@pytest.mark.asyncio
async def test_reads_every_page_and_sorts(settings):
    ec2_client = _ec2_client([
        {'InstanceTypes': [_item('t3.xlarge', 4, 16384), _item('c5.xlarge', 4, 8192)], 'NextToken': 'page-2'},
        {'InstanceTypes': [_item('c5a.xlarge', 4, 8192), _item('t3.xlarge', 4, 16384)]},
    ])
    catalog = InstanceCatalog(settings, ec2_client=ec2_client)

    result = await catalog.list_instance_types()

    assert [info.instance_type for info in result] == ['c5.xlarge', 'c5a.xlarge', 't3.xlarge']
    ec2_client.get_paginator.assert_called_once_with('describe_instance_types')
    ec2_client.get_paginator.return_value.paginate.assert_called_once_with(
        Filters=[{'Name': 'instance-type', 'Values': ['*.xlarge']}],
        PaginationConfig={'PageSize': 100},
    )


@pytest.mark.asyncio
async def test_errors_propagate(settings):
    ec2_client = _ec2_client(error=ClientError(
        {'Error': {'Code': 'AuthFailure', 'Message': 'invalid credentials'}},
        'DescribeInstanceTypes'
    ))
    catalog = InstanceCatalog(settings, ec2_client=ec2_client)

    with pytest.raises(InstanceCatalogError):
        await catalog.list_instance_types()


@pytest.mark.asyncio
async def test_engine_delegates_listing(settings, pricing_client):
    ec2_client = _ec2_client([{'InstanceTypes': [_item('r5.xlarge', 4, 32768)]}])
    engine = PriceResolutionEngine(
        pricing_client,
        CurrencyNormalizer(7.3),
        InstanceCatalog(settings, ec2_client=ec2_client),
    )

    result = await engine.list_instance_types()

    assert result[0].to_dict() == {
        'instanceType': 'r5.xlarge',
        'family': 'r5',
        'description': 'r5 series - r5.xlarge (4 vCPUs, 32 GB RAM)',
    }
