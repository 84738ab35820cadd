"""
API routes for EC2 price comparison.
"""
from typing import Dict, Any, List, Optional
import logging

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field

from ec2_price_compare.api.errors import ApiError, bad_request, server_error
from ec2_price_compare.domain.pricing_models import Plan
from ec2_price_compare.services import price_engine


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pricing", tags=["pricing"])


class PricesRequest(BaseModel):
    """Request model for a multi-region price lookup."""
    model_config = ConfigDict(populate_by_name=True)

    instance_type: Optional[str] = Field(None, alias="instanceType", description="EC2 instance type (e.g., t3.xlarge)")
    regions: Optional[List[str]] = Field(None, description="Region codes to compare")
    price_type: Optional[str] = Field(None, alias="priceType", description="OnDemand, Reserved1Year or Reserved3Year")


def _parse_plan(price_type: Optional[str]) -> Plan:
    try:
        return Plan.from_alias(price_type)
    except ValueError as error:
        raise bad_request(str(error), code="INVALID_PARAMETER") from error


async def _resolve_prices(instance_type: str, regions: Optional[List[str]], plan: Plan) -> List[Dict[str, Any]]:
    try:
        engine = price_engine.get_price_engine()
        records = await engine.resolve_all(instance_type, regions or [], plan)
    except Exception as error:
        logger.error(f"Error fetching prices for {instance_type}: {error}")
        raise server_error("Failed to fetch prices") from error
    return [record.to_dict() for record in records]


@router.get("/regions")
async def get_regions() -> Dict[str, Any]:
    """
    List regions.

    Regions are managed by the front end, so this always returns an empty list.
    """
    return {"success": True, "data": []}


@router.get("/instance-types")
async def get_instance_types() -> Dict[str, Any]:
    """List available EC2 instance types."""
    try:
        engine = price_engine.get_price_engine()
        instance_types = await engine.list_instance_types()
    except Exception as error:
        logger.error(f"Error fetching instance types: {error}")
        raise server_error("Failed to fetch instance types") from error
    return {
        "success": True,
        "data": [info.to_dict() for info in instance_types],
    }


@router.get("/ec2/{instance_type}")
async def get_prices_by_instance_type(
    instance_type: str,
    regions: Optional[List[str]] = Query(None),
    price_type: Optional[str] = Query(None, alias="priceType")
) -> Dict[str, Any]:
    """
    Get EC2 prices for an instance type.

    Args:
        instance_type: EC2 instance type from the path
        regions: Repeated `regions` query parameters
        price_type: Optional plan (defaults to OnDemand)

    Returns:
        One comparison record per region
    """
    plan = _parse_plan(price_type)
    data = await _resolve_prices(instance_type, regions, plan)
    return {"success": True, "data": data}


@router.post("/prices")
async def get_prices(request: PricesRequest) -> Dict[str, Any]:
    """
    Get EC2 prices for the instance type and regions in the request body.

    Raises:
        ApiError: 400 if the instance type is missing or the price type is unknown
    """
    if not request.instance_type:
        raise ApiError(400, "MISSING_PARAMETER", "Instance type is required")

    plan = _parse_plan(request.price_type)
    data = await _resolve_prices(request.instance_type, request.regions, plan)
    return {"success": True, "data": data}


@router.get("/exchange-rate")
async def get_exchange_rate() -> Dict[str, Any]:
    """Get the configured CNY-per-USD exchange rate."""
    try:
        rate = price_engine.get_price_engine().get_exchange_rate()
    except Exception as error:
        logger.error(f"Error fetching exchange rate: {error}")
        raise server_error("Failed to fetch exchange rate") from error
    return {"success": True, "data": {"rate": rate}}
