"""
Instance specification extraction from catalog product attributes.
"""
from typing import Optional

from ec2_price_compare.domain.catalog_models import CatalogDocument
from ec2_price_compare.domain.pricing_models import InstanceSpecification


def _parse_vcpu(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def extract_specifications(document: Optional[CatalogDocument]) -> Optional[InstanceSpecification]:
    """
    Map a document's product attributes to an InstanceSpecification.

    Values are passed through verbatim ("16 GiB" stays "16 GiB"); only the
    vCPU count is converted to an integer.

    Returns:
        InstanceSpecification, or None if the document has no product attributes
    """
    if document is None or document.product is None or not document.product.attributes:
        return None

    attributes = document.product.attributes
    return InstanceSpecification(
        vcpu=_parse_vcpu(attributes.get("vcpu")),
        memory=attributes.get("memory") or None,
        storage=attributes.get("storage") or None,
        network_performance=attributes.get("networkPerformance") or None,
        instance_family=attributes.get("instanceFamily") or None,
        current_generation=attributes.get("currentGeneration") or None,
        physical_processor=attributes.get("physicalProcessor") or None,
        clock_speed=attributes.get("clockSpeed") or None,
        dedicated_ebs_throughput=attributes.get("dedicatedEbsThroughput") or None,
        processor_architecture=attributes.get("processorArchitecture") or None,
        processor_features=attributes.get("processorFeatures") or None,
        enhanced_networking_supported=attributes.get("enhancedNetworkingSupported") or None,
    )
