"""
AWS Pricing API client.
Uses boto3 to query the official AWS Price List API in both the global
and the China partition.
"""
from typing import Dict, List, Optional
import logging

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError, BotoCoreError

from ec2_price_compare.core.config import Config, config as default_config
from ec2_price_compare.domain.catalog_models import CatalogDocument, CatalogParseError
from ec2_price_compare.domain.pricing_models import (
    Plan,
    LookupResult,
    RESERVED_OFFERING_CLASS,
    RESERVED_PURCHASE_OPTION,
)
from ec2_price_compare.pricing.aws_region_map import Zone, classify_zone


logger = logging.getLogger(__name__)


SERVICE_CODE = "AmazonEC2"
OPERATING_SYSTEM = "Linux"


class CatalogQueryError(Exception):
    """Raised when a pricing catalog query fails."""
    pass


def build_price_filters(instance_type: str, region: str, plan: Plan) -> List[Dict[str, str]]:
    """
    Build GetProducts filters for one instance type, region and plan.

    Args:
        instance_type: EC2 instance type (e.g., 't3.xlarge')
        region: AWS region code (e.g., 'us-east-1')
        plan: Requested pricing plan

    Returns:
        List of TERM_MATCH filters
    """
    filters = [
        {"Type": "TERM_MATCH", "Field": "instanceType", "Value": instance_type},
        {"Type": "TERM_MATCH", "Field": "regionCode", "Value": region},
        {"Type": "TERM_MATCH", "Field": "operatingSystem", "Value": OPERATING_SYSTEM},
        {"Type": "TERM_MATCH", "Field": "tenancy", "Value": "Shared"},
        {"Type": "TERM_MATCH", "Field": "capacitystatus", "Value": "Used"},
        {"Type": "TERM_MATCH", "Field": "preInstalledSw", "Value": "NA"},
        {"Type": "TERM_MATCH", "Field": "termType", "Value": plan.term_type},
    ]

    if plan.is_reserved:
        filters.extend([
            {"Type": "TERM_MATCH", "Field": "PurchaseOption", "Value": RESERVED_PURCHASE_OPTION},
            {"Type": "TERM_MATCH", "Field": "leaseContractLength", "Value": plan.lease_contract_length},
            {"Type": "TERM_MATCH", "Field": "offeringClass", "Value": RESERVED_OFFERING_CLASS},
        ])

    return filters


def _boto_config(settings: Config) -> BotoConfig:
    return BotoConfig(
        connect_timeout=settings.AWS_CONNECT_TIMEOUT,
        read_timeout=settings.AWS_READ_TIMEOUT,
        retries={"max_attempts": 0}  # A failed region lookup is reported, never retried
    )


def create_standard_pricing_client(settings: Config):
    """Create the pricing client for the global partition."""
    return boto3.client(
        "pricing",
        region_name=settings.AWS_REGION,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        config=_boto_config(settings),
    )


def create_restricted_pricing_client(settings: Config):
    """Create the pricing client for the China partition."""
    return boto3.client(
        "pricing",
        region_name=settings.AWS_CN_REGION,
        endpoint_url=settings.AWS_CN_PRICING_ENDPOINT,
        aws_access_key_id=settings.AWS_CN_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_CN_SECRET_ACCESS_KEY,
        config=_boto_config(settings),
    )


class AWSPricingClient:
    """Client for querying EC2 price documents, one boto3 client per zone."""

    def __init__(
        self,
        settings: Optional[Config] = None,
        standard_client=None,
        restricted_client=None
    ):
        """
        Initialize pricing clients.

        Args:
            settings: Configuration (defaults to the environment config)
            standard_client: Pre-built pricing client for the global partition
            restricted_client: Pre-built pricing client for the China partition

        Raises:
            CatalogQueryError: If a boto3 client cannot be created
        """
        self.settings = settings or default_config
        try:
            self._clients = {
                Zone.STANDARD: standard_client or create_standard_pricing_client(self.settings),
                Zone.RESTRICTED: restricted_client or create_restricted_pricing_client(self.settings),
            }
        except BotoCoreError as error:
            raise CatalogQueryError(f"Failed to create AWS pricing clients: {error}") from error

    def client_for(self, region: str):
        """Return the pricing client serving the region's zone."""
        return self._clients[classify_zone(region)]

    async def query(self, instance_type: str, region: str, plan: Plan) -> List[CatalogDocument]:
        """
        Query EC2 price documents for an instance type in a region.

        Only the first page is read; the filters narrow the result to a
        handful of documents.

        Args:
            instance_type: EC2 instance type (e.g., 't3.xlarge')
            region: AWS region code
            plan: Requested pricing plan

        Returns:
            Parsed catalog documents (empty if the catalog has none)

        Raises:
            CatalogQueryError: If the API call fails or a document cannot be parsed
        """
        filters = build_price_filters(instance_type, region, plan)
        logger.debug(
            "Price search for %s in %s (%s): %s",
            instance_type, region, plan.value, filters
        )

        try:
            response = self.client_for(region).get_products(
                ServiceCode=SERVICE_CODE,
                Filters=filters,
                MaxResults=self.settings.PRICING_MAX_RESULTS
            )
            return [
                CatalogDocument.from_json(item)
                for item in response.get("PriceList") or []
            ]
        except ClientError as error:
            logger.error(f"AWS pricing API error for region {region}: {error}")
            raise CatalogQueryError(f"Failed to query AWS pricing: {str(error)}") from error
        except (BotoCoreError, CatalogParseError) as error:
            logger.error(f"Error reading AWS pricing response for region {region}: {error}")
            raise CatalogQueryError(f"Failed to read AWS pricing response: {str(error)}") from error
        except Exception as error:
            logger.error(f"Unexpected error querying AWS pricing for region {region}: {error}")
            raise CatalogQueryError(f"Unexpected error querying AWS pricing: {str(error)}") from error

    async def lookup(self, instance_type: str, region: str, plan: Plan) -> LookupResult:
        """
        Query a region and capture the outcome as a LookupResult.

        Failures are returned in the result instead of raised, so one
        region's error never aborts a multi-region comparison.
        """
        try:
            documents = await self.query(instance_type, region, plan)
        except CatalogQueryError as error:
            return LookupResult(region=region, plan=plan, error=error)
        return LookupResult(region=region, plan=plan, documents=documents)
