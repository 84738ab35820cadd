"""
Price resolution engine.
Resolves per-region prices for an instance type and plan, pairs each with
its on-demand baseline and assembles comparison records.
"""
from typing import Dict, Any, List, Optional
import logging

from ec2_price_compare.core.config import Config, config as default_config
from ec2_price_compare.domain.pricing_models import (
    Plan,
    LookupResult,
    PriceQuote,
    ComparisonRecord,
    InstanceSpecification,
    InstanceTypeInfo,
)
from ec2_price_compare.pricing.aws_pricing_client import AWSPricingClient, CatalogQueryError
from ec2_price_compare.pricing.aws_region_map import get_all_aws_regions, get_region_name
from ec2_price_compare.pricing.currency import CurrencyNormalizer, PRIMARY_CURRENCY, format_amount
from ec2_price_compare.pricing.instance_catalog import InstanceCatalog
from ec2_price_compare.pricing.spec_extractor import extract_specifications
from ec2_price_compare.pricing.term_resolver import (
    PriceParseError,
    resolve_price_dimension,
    select_price,
)


logger = logging.getLogger(__name__)


class PriceEngineError(Exception):
    """Raised when the price engine cannot be constructed."""
    pass


def quote_from_lookup(lookup: LookupResult) -> PriceQuote:
    """
    Turn a region's lookup result into a price quote.

    Sentinel policy:
    - query failed -> price None
    - no documents, reserved plan -> price 0 in USD (plan not offered)
    - no documents, on-demand -> price None
    - no matching term / dimension / populated price -> price None
    """
    plan = lookup.plan

    if lookup.failed:
        logger.error(
            f"Price lookup failed for region {lookup.region} ({plan.value}): {lookup.error}"
        )
        return PriceQuote(price=None, currency=None)

    document = lookup.first_document
    if document is None:
        logger.info(f"No price found for region {lookup.region} with price type {plan.value}")
        if plan.is_reserved:
            return PriceQuote(price=0.0, currency=PRIMARY_CURRENCY)
        return PriceQuote(price=None, currency=None)

    try:
        price, currency = select_price(resolve_price_dimension(document, plan))
    except PriceParseError as error:
        logger.error(f"Unreadable price for region {lookup.region}: {error}")
        return PriceQuote(price=None, currency=None, document=document)

    if price is None:
        logger.warning(f"No USD or CNY price found for region {lookup.region} ({plan.value})")
        return PriceQuote(price=None, currency=None, document=document)

    return PriceQuote(price=price, currency=currency, document=document)


class PriceResolutionEngine:
    """Service for comparing EC2 prices across regions."""

    def __init__(
        self,
        catalog: AWSPricingClient,
        normalizer: CurrencyNormalizer,
        inventory: Optional[InstanceCatalog] = None
    ):
        """
        Args:
            catalog: Pricing catalog adapter
            normalizer: Currency normalizer holding the configured rate
            inventory: Instance type listing (only needed by list_instance_types)
        """
        self.catalog = catalog
        self.normalizer = normalizer
        self.inventory = inventory

    async def _resolve_pass(self, instance_type: str, regions: List[str], plan: Plan) -> List[PriceQuote]:
        quotes = []
        for region in regions:
            lookup = await self.catalog.lookup(instance_type, region, plan)
            quotes.append(quote_from_lookup(lookup))
        return quotes

    async def resolve_all(
        self,
        instance_type: str,
        regions: List[str],
        plan: Plan = Plan.ON_DEMAND
    ) -> List[ComparisonRecord]:
        """
        Resolve prices for an instance type in every requested region.

        The on-demand baseline is always resolved; for reserved plans a
        second pass resolves the requested term. Regions are processed in
        order and each region's failure stays local to its record.

        Args:
            instance_type: EC2 instance type (e.g., 't3.xlarge')
            regions: Region codes, in the order records should be returned
            plan: Requested pricing plan

        Returns:
            One ComparisonRecord per region, same order as `regions`
        """
        if not instance_type or not regions:
            logger.info("No instance type or regions specified for pricing - returning empty list")
            return []

        logger.info(
            f"Getting prices for {instance_type} in {len(regions)} regions with price type {plan.value}"
        )

        baseline = await self._resolve_pass(instance_type, regions, Plan.ON_DEMAND)
        if plan is Plan.ON_DEMAND:
            targets = baseline
        else:
            targets = await self._resolve_pass(instance_type, regions, plan)

        # Hardware specs are taken from the first region (in list order) that yields them
        specifications: Optional[InstanceSpecification] = None
        for quote in targets:
            if quote.document is not None:
                specifications = extract_specifications(quote.document)
                if specifications is not None:
                    break

        records = [
            ComparisonRecord(
                region=region,
                instance_type=instance_type,
                price=target.price,
                currency=target.currency,
                on_demand_price=base.price,
                on_demand_currency=base.currency,
                specifications=specifications,
            )
            for region, target, base in zip(regions, targets, baseline)
        ]

        logger.info(f"Price retrieval complete for {len(records)} regions")
        return records

    def get_exchange_rate(self) -> float:
        """Return the configured CNY-per-USD rate."""
        return self.normalizer.rate

    async def list_instance_types(self) -> List[InstanceTypeInfo]:
        """
        List available instance types.

        Raises:
            PriceEngineError: If no instance inventory is configured
        """
        if self.inventory is None:
            raise PriceEngineError("Instance inventory is not configured")
        return await self.inventory.list_instance_types()

    async def get_instance_specs(
        self,
        instance_type: str,
        region: str = "us-east-1"
    ) -> Optional[InstanceSpecification]:
        """Look up the hardware specifications of an instance type in one region."""
        records = await self.resolve_all(instance_type, [region], Plan.ON_DEMAND)
        return records[0].specifications if records else None

    async def find_cheapest_region(
        self,
        instance_type: str,
        plan: Plan = Plan.ON_DEMAND,
        regions: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Find the cheapest region for an instance type with all prices in USD.

        Regions without a price (None) are left out, as are regions where a
        reserved plan is not offered (price 0).

        Args:
            instance_type: EC2 instance type
            plan: Requested pricing plan
            regions: Regions to compare (defaults to every supported region)

        Returns:
            Summary with the cheapest region and all priced regions sorted by USD price
        """
        regions = regions or get_all_aws_regions()
        records = await self.resolve_all(instance_type, regions, plan)

        priced = []
        for record in records:
            if not record.price:
                continue
            price_in_usd = self.normalizer.to_primary_amount(record.price, record.currency)
            priced.append({
                "region": record.region,
                "regionName": get_region_name(record.region),
                "priceInUsd": price_in_usd,
                "displayPrice": format_amount(price_in_usd),
                "originalPrice": record.price,
                "originalCurrency": record.currency,
                "specifications": (
                    record.specifications.to_dict() if record.specifications else None
                ),
            })

        priced.sort(key=lambda entry: entry["priceInUsd"])

        cheapest = None
        if priced:
            cheapest = {
                key: priced[0][key]
                for key in (
                    "region", "regionName", "priceInUsd", "displayPrice",
                    "originalPrice", "originalCurrency"
                )
            }

        return {
            "instanceType": instance_type,
            "priceType": plan.value,
            "cheapestRegion": cheapest,
            "allRegions": priced,
            "exchangeRate": {"cnyToUsd": self.get_exchange_rate()},
            "queriedRegionsCount": len(regions),
            "resultRegionsCount": len(priced),
        }


def create_price_engine(settings: Optional[Config] = None) -> PriceResolutionEngine:
    """
    Build a price engine from configuration.

    Raises:
        PriceEngineError: If the configuration is invalid or clients cannot be created
    """
    settings = settings or default_config
    try:
        settings.validate()
        catalog = AWSPricingClient(settings)
        normalizer = CurrencyNormalizer(settings.CNY_TO_USD_RATE)
    except (ValueError, CatalogQueryError) as error:
        raise PriceEngineError(f"Price engine misconfigured: {error}") from error
    return PriceResolutionEngine(catalog, normalizer, InstanceCatalog(settings))


_price_engine: Optional[PriceResolutionEngine] = None


def get_price_engine() -> PriceResolutionEngine:
    """Get or create the shared price engine."""
    global _price_engine
    if _price_engine is None:
        _price_engine = create_price_engine()
    return _price_engine
