"""
MCP server for EC2 price comparison.
Exposes the price engine to LLMs as tools, resources and prompts over stdio.
"""
from typing import Any, Awaitable, Callable, List, Literal, Optional
import json
import logging
import sys

from fastmcp import FastMCP

from ec2_price_compare.core.config import config
from ec2_price_compare.domain.pricing_models import Plan
from ec2_price_compare.pricing.aws_region_map import AWS_REGIONS_BY_GEOGRAPHY
from ec2_price_compare.pricing.currency import SUPPORTED_CURRENCIES
from ec2_price_compare.services.price_engine import (
    PriceResolutionEngine,
    PriceEngineError,
    get_price_engine,
)


logger = logging.getLogger(__name__)

SERVER_NAME = "ec2-price-comparison"

ToolPriceType = Literal["onDemand", "reserved1y", "reserved3y"]


def _error(message: str) -> str:
    logger.error(message)
    return json.dumps({"error": message})


async def get_instance_prices(
    engine: PriceResolutionEngine,
    instance_type: str,
    regions: Optional[List[str]] = None,
    price_type: Optional[str] = None
) -> str:
    """Prices for an instance type in the given regions, as a JSON list."""
    try:
        plan = Plan.from_alias(price_type)
        records = await engine.resolve_all(instance_type, regions or [], plan)
    except Exception as error:
        return _error(f"Failed to fetch instance prices: {error}")
    return json.dumps([record.to_dict() for record in records])


async def get_instance_specs(
    engine: PriceResolutionEngine,
    instance_type: str,
    region: str = "us-east-1"
) -> str:
    """Hardware specifications of an instance type, as JSON (null if unknown)."""
    try:
        specs = await engine.get_instance_specs(instance_type, region)
    except Exception as error:
        return _error(f"Failed to fetch instance specifications: {error}")
    return json.dumps(specs.to_dict() if specs else None)


async def find_cheapest_region(
    engine: PriceResolutionEngine,
    instance_type: str,
    price_type: Optional[str] = None
) -> str:
    """Cheapest region across all supported regions with prices in USD, as JSON."""
    try:
        plan = Plan.from_alias(price_type)
        result = await engine.find_cheapest_region(instance_type, plan)
    except Exception as error:
        return _error(f"Failed to find cheapest region: {error}")
    result["note"] = "All prices converted to USD for accurate comparison, including China regions"
    return json.dumps(result)


async def read_instance_types(engine: PriceResolutionEngine) -> str:
    try:
        instance_types = await engine.list_instance_types()
    except Exception as error:
        return _error(f"Failed to fetch instance types: {error}")
    return json.dumps([info.to_dict() for info in instance_types])


def read_exchange_rate(engine: PriceResolutionEngine) -> str:
    return json.dumps({"cnyToUsd": engine.get_exchange_rate()})


def read_supported_regions() -> str:
    regions = {
        geography: [{"code": code, "name": name} for code, name in entries.items()]
        for geography, entries in AWS_REGIONS_BY_GEOGRAPHY.items()
    }
    return json.dumps({
        "description": "All AWS regions supported by EC2 Price Comparison, including China regions",
        "regions": regions,
        "note": "Price comparisons cover all AWS regions including China (cn-north-1 and cn-northwest-1)",
        "chinaSupport": True,
        "currencySupport": list(SUPPORTED_CURRENCIES),
    })


COMPARE_PRICES_PROMPT = (
    "I'd like you to compare EC2 instance prices for me across different AWS regions "
    "including China (Beijing and Ningxia). Do not search the web: use the getInstancePrices "
    "tool for pricing data and the ec2://supported-regions resource for the list of regions. "
    "Use the ec2://exchange-rate resource to convert CNY prices to USD and compare in USD by "
    "default. Return a markdown comparison table and highlight the cheapest region.\n\n"
    "Start by asking me which instance type I'm interested in and which regions to include."
)

FIND_CHEAPEST_REGION_PROMPT = (
    "I need to find the cheapest region for running a specific EC2 instance type. "
    "Use the findCheapestRegion tool to compare prices across all regions including China, "
    "and report all prices in USD.\n\n"
    "Start by asking me which instance type to compare and whether I want on-demand or "
    "reserved pricing."
)

INSTANCE_SPECS_PROMPT = (
    "I need information about an EC2 instance type. Use the getInstanceSpecs tool and "
    "return a formatted markdown description.\n\n"
    "Start by asking me which instance type I'd like to learn about."
)


def create_mcp_server(
    engine_factory: Callable[[], PriceResolutionEngine] = get_price_engine
) -> FastMCP:
    """
    Build the MCP server.

    Args:
        engine_factory: Returns the price engine backing every tool call

    Returns:
        Configured FastMCP instance
    """
    mcp = FastMCP(SERVER_NAME)

    async def with_engine(handler: Callable[..., Awaitable[str]], *args: Any) -> str:
        try:
            engine = engine_factory()
        except PriceEngineError as error:
            return _error(str(error))
        return await handler(engine, *args)

    @mcp.tool(name="getInstancePrices")
    async def get_instance_prices_tool(
        instanceType: str,
        regions: Optional[List[str]] = None,
        priceType: Optional[ToolPriceType] = None
    ) -> str:
        """Get EC2 prices for an instance type in the given AWS regions (including China)."""
        return await with_engine(get_instance_prices, instanceType, regions, priceType)

    @mcp.tool(name="getInstanceSpecs")
    async def get_instance_specs_tool(instanceType: str, region: str = "us-east-1") -> str:
        """Get hardware specifications (vCPU, memory, storage, network) of an EC2 instance type."""
        return await with_engine(get_instance_specs, instanceType, region)

    @mcp.tool(name="findCheapestRegion")
    async def find_cheapest_region_tool(
        instanceType: str,
        priceType: Optional[ToolPriceType] = None
    ) -> str:
        """Find the cheapest AWS region for an EC2 instance type, with all prices converted to USD."""
        return await with_engine(find_cheapest_region, instanceType, priceType)

    @mcp.resource("ec2://instance-types", name="instance-types")
    async def instance_types_resource() -> str:
        return await with_engine(read_instance_types)

    @mcp.resource("ec2://exchange-rate", name="exchange-rate")
    async def exchange_rate_resource() -> str:
        async def handler(engine: PriceResolutionEngine) -> str:
            return read_exchange_rate(engine)
        return await with_engine(handler)

    @mcp.resource("ec2://supported-regions", name="supported-regions")
    def supported_regions_resource() -> str:
        return read_supported_regions()

    @mcp.prompt(
        name="compare-prices",
        description="Compare EC2 instance prices across AWS regions including China regions"
    )
    def compare_prices_prompt() -> str:
        return COMPARE_PRICES_PROMPT

    @mcp.prompt(
        name="find-cheapest-region",
        description="Find the cheapest AWS region for a specific EC2 instance type with automatic USD conversion"
    )
    def find_cheapest_region_prompt() -> str:
        return FIND_CHEAPEST_REGION_PROMPT

    @mcp.prompt(
        name="instance-specs",
        description="Get detailed specifications for an EC2 instance type"
    )
    def instance_specs_prompt() -> str:
        return INSTANCE_SPECS_PROMPT

    return mcp


def main() -> None:
    """Run the MCP server over stdio."""
    if config.MCP_SILENT_MODE:
        logging.disable(logging.CRITICAL)
    else:
        # stdout carries the protocol, so logs go to stderr
        logging.basicConfig(
            stream=sys.stderr,
            level=config.LOG_LEVEL,
            format="[MCP] %(levelname)s %(name)s: %(message)s"
        )

    logger.info("Starting MCP server...")
    create_mcp_server().run()


if __name__ == "__main__":
    main()
