"""
Domain models for price comparison.
Defines pricing plans, per-region lookup results and comparison records.
"""
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum

from ec2_price_compare.domain.catalog_models import CatalogDocument


class Plan(str, Enum):
    """Pricing plan requested by the caller."""
    ON_DEMAND = "OnDemand"
    RESERVED_1_YEAR = "Reserved1Year"
    RESERVED_3_YEAR = "Reserved3Year"

    @property
    def is_reserved(self) -> bool:
        return self is not Plan.ON_DEMAND

    @property
    def term_type(self) -> str:
        """termType filter value for the pricing API."""
        return "Reserved" if self.is_reserved else "OnDemand"

    @property
    def lease_contract_length(self) -> Optional[str]:
        if self is Plan.RESERVED_1_YEAR:
            return "1yr"
        if self is Plan.RESERVED_3_YEAR:
            return "3yr"
        return None

    @classmethod
    def from_alias(cls, value: Optional[str]) -> "Plan":
        """
        Parse a plan from its API name or tool-protocol alias.

        Accepts "OnDemand"/"Reserved1Year"/"Reserved3Year" as well as
        "onDemand"/"reserved1y"/"reserved3y". None means on-demand.

        Raises:
            ValueError: If the value is not a known plan
        """
        if value is None:
            return cls.ON_DEMAND
        aliases = {
            "ondemand": cls.ON_DEMAND,
            "reserved1y": cls.RESERVED_1_YEAR,
            "reserved1year": cls.RESERVED_1_YEAR,
            "reserved3y": cls.RESERVED_3_YEAR,
            "reserved3year": cls.RESERVED_3_YEAR,
        }
        plan = aliases.get(str(value).strip().lower())
        if plan is None:
            raise ValueError(f"Unknown price type: {value}")
        return plan


# Contract attributes every reserved plan is priced against
RESERVED_OFFERING_CLASS = "convertible"
RESERVED_PURCHASE_OPTION = "No Upfront"


@dataclass(frozen=True)
class LookupResult:
    """
    Outcome of one catalog query for one region.

    Exactly one of `documents` (possibly empty) or `error` is meaningful:
    a failed query carries the error and no documents.
    """
    region: str
    plan: Plan
    documents: List[CatalogDocument] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def first_document(self) -> Optional[CatalogDocument]:
        return self.documents[0] if self.documents else None


@dataclass(frozen=True)
class PriceQuote:
    """A resolved price for one region and plan."""
    price: Optional[float]
    currency: Optional[str]
    document: Optional[CatalogDocument] = None


@dataclass(frozen=True)
class InstanceSpecification:
    """Hardware attributes of an instance type, verbatim from the catalog."""
    vcpu: Optional[int] = None
    memory: Optional[str] = None
    storage: Optional[str] = None
    network_performance: Optional[str] = None
    instance_family: Optional[str] = None
    current_generation: Optional[str] = None
    physical_processor: Optional[str] = None
    clock_speed: Optional[str] = None
    dedicated_ebs_throughput: Optional[str] = None
    processor_architecture: Optional[str] = None
    processor_features: Optional[str] = None
    enhanced_networking_supported: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (unset fields omitted)."""
        result = {
            "vcpu": self.vcpu,
            "memory": self.memory,
            "storage": self.storage,
            "networkPerformance": self.network_performance,
            "instanceFamily": self.instance_family,
            "currentGeneration": self.current_generation,
            "physicalProcessor": self.physical_processor,
            "clockSpeed": self.clock_speed,
            "dedicatedEbsThroughput": self.dedicated_ebs_throughput,
            "processorArchitecture": self.processor_architecture,
            "processorFeatures": self.processor_features,
            "enhancedNetworkingSupported": self.enhanced_networking_supported,
        }
        return {key: value for key, value in result.items() if value is not None}


@dataclass(frozen=True)
class ComparisonRecord:
    """
    Price comparison for one region.

    price is None when the lookup failed, 0 when a reserved plan is not
    offered in the region. savings_percentage is never computed here since
    the two prices may be in different currencies.
    """
    region: str
    instance_type: str
    price: Optional[float]
    currency: Optional[str]
    on_demand_price: Optional[float]
    on_demand_currency: Optional[str]
    operating_system: str = "Linux"
    savings_percentage: Optional[float] = None
    specifications: Optional[InstanceSpecification] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "region": self.region,
            "instanceType": self.instance_type,
            "operatingSystem": self.operating_system,
            "price": self.price,
            "currency": self.currency,
            "onDemandPrice": self.on_demand_price,
            "onDemandCurrency": self.on_demand_currency,
            "savingsPercentage": self.savings_percentage,
        }
        if self.specifications is not None:
            result["specifications"] = self.specifications.to_dict()
        return result


@dataclass(frozen=True)
class InstanceTypeInfo:
    """Entry of the instance type listing."""
    instance_type: str
    family: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instanceType": self.instance_type,
            "family": self.family,
            "description": self.description,
        }
