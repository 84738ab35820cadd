"""
EC2 instance type inventory.
Lists instance types through DescribeInstanceTypes on the China partition
EC2 endpoint, following every page of results.
"""
from typing import Dict, List, Optional
import logging

import boto3
from botocore.exceptions import ClientError, BotoCoreError

from ec2_price_compare.core.config import Config, config as default_config
from ec2_price_compare.domain.pricing_models import InstanceTypeInfo


logger = logging.getLogger(__name__)


INSTANCE_TYPE_PATTERN = "*.xlarge"
PAGE_SIZE = 100


class InstanceCatalogError(Exception):
    """Raised when the instance type listing fails."""
    pass


def create_inventory_client(settings: Config):
    """Create the EC2 client used for the instance inventory."""
    return boto3.client(
        "ec2",
        region_name=settings.AWS_CN_REGION,
        endpoint_url=settings.AWS_CN_EC2_ENDPOINT,
        aws_access_key_id=settings.AWS_CN_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_CN_SECRET_ACCESS_KEY,
    )


def describe_instance_type(item: Dict) -> Optional[InstanceTypeInfo]:
    """
    Build a listing entry from one DescribeInstanceTypes item.

    Returns:
        InstanceTypeInfo, or None if the item has no instance type
    """
    instance_type = item.get("InstanceType")
    if not instance_type:
        return None

    family = instance_type.split(".")[0]
    description = f"{family} series - {instance_type}"

    vcpus = (item.get("VCpuInfo") or {}).get("DefaultVCpus")
    if vcpus:
        description += f" ({vcpus} vCPUs"
        memory_mib = (item.get("MemoryInfo") or {}).get("SizeInMiB")
        if memory_mib:
            description += f", {round(memory_mib / 1024)} GB RAM"
        description += ")"

    return InstanceTypeInfo(
        instance_type=instance_type,
        family=family,
        description=description,
    )


class InstanceCatalog:
    """Paginated listing of EC2 instance types."""

    def __init__(self, settings: Optional[Config] = None, ec2_client=None):
        self.settings = settings or default_config
        self._ec2_client = ec2_client

    @property
    def ec2_client(self):
        # Created lazily: pricing lookups never need the EC2 endpoint
        if self._ec2_client is None:
            self._ec2_client = create_inventory_client(self.settings)
        return self._ec2_client

    async def list_instance_types(self) -> List[InstanceTypeInfo]:
        """
        List instance types matching the size pattern.

        Returns:
            Instance types sorted by family, then by type

        Raises:
            InstanceCatalogError: If any page request fails
        """
        logger.info("Fetching instance types...")
        instance_types: Dict[str, InstanceTypeInfo] = {}

        try:
            paginator = self.ec2_client.get_paginator("describe_instance_types")
            pages = paginator.paginate(
                Filters=[{"Name": "instance-type", "Values": [INSTANCE_TYPE_PATTERN]}],
                PaginationConfig={"PageSize": PAGE_SIZE},
            )
            for page in pages:
                for item in page.get("InstanceTypes", []):
                    info = describe_instance_type(item)
                    if info is not None:
                        instance_types[info.instance_type] = info
        except (ClientError, BotoCoreError) as error:
            logger.error(f"Failed to get instance types: {error}")
            raise InstanceCatalogError(f"Failed to list instance types: {str(error)}") from error

        result = sorted(
            instance_types.values(),
            key=lambda info: (info.family, info.instance_type)
        )
        logger.info(f"Retrieved {len(result)} instance types")
        return result
