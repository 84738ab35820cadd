"""
AWS region directory and zone classification.
Regions in the China partition use separate pricing endpoints, credentials
and settle in CNY; everything else goes through the global partition.
"""
from typing import Dict, List
from enum import Enum


RESTRICTED_REGION_PREFIX = "cn-"


class Zone(Enum):
    """Pricing zone a region belongs to."""
    STANDARD = "standard"
    RESTRICTED = "restricted"


def classify_zone(region_code: str) -> Zone:
    """
    Classify a region code into its pricing zone.

    Args:
        region_code: AWS region code (e.g., 'cn-north-1')

    Returns:
        Zone.RESTRICTED for China partition regions, Zone.STANDARD otherwise
    """
    if region_code.startswith(RESTRICTED_REGION_PREFIX):
        return Zone.RESTRICTED
    return Zone.STANDARD


# Supported regions grouped by geography
AWS_REGIONS_BY_GEOGRAPHY: Dict[str, Dict[str, str]] = {
    "North America": {
        "us-east-1": "US East (N. Virginia)",
        "us-east-2": "US East (Ohio)",
        "us-west-1": "US West (N. California)",
        "us-west-2": "US West (Oregon)",
        "ca-central-1": "Canada (Central)",
        "ca-west-1": "Canada West (Calgary)",
        "mx-central-1": "Mexico (Central)",
    },
    "South America": {
        "sa-east-1": "South America (São Paulo)",
    },
    "Europe": {
        "eu-central-1": "Europe (Frankfurt)",
        "eu-central-2": "Europe (Zurich)",
        "eu-west-1": "Europe (Ireland)",
        "eu-west-2": "Europe (London)",
        "eu-west-3": "Europe (Paris)",
        "eu-north-1": "Europe (Stockholm)",
        "eu-south-1": "Europe (Milan)",
        "eu-south-2": "Europe (Spain)",
    },
    "Asia Pacific": {
        "ap-east-1": "Asia Pacific (Hong Kong)",
        "ap-south-1": "Asia Pacific (Mumbai)",
        "ap-south-2": "Asia Pacific (Hyderabad)",
        "ap-northeast-1": "Asia Pacific (Tokyo)",
        "ap-northeast-2": "Asia Pacific (Seoul)",
        "ap-northeast-3": "Asia Pacific (Osaka)",
        "ap-southeast-1": "Asia Pacific (Singapore)",
        "ap-southeast-2": "Asia Pacific (Sydney)",
        "ap-southeast-3": "Asia Pacific (Jakarta)",
        "ap-southeast-4": "Asia Pacific (Melbourne)",
        "ap-southeast-5": "Asia Pacific (Malaysia)",
        "ap-southeast-7": "Asia Pacific (Thailand)",
    },
    "Middle East": {
        "me-south-1": "Middle East (Bahrain)",
        "me-central-1": "Middle East (UAE)",
        "il-central-1": "Israel (Tel Aviv)",
    },
    "Africa": {
        "af-south-1": "Africa (Cape Town)",
    },
    "China": {
        "cn-north-1": "China (Beijing)",
        "cn-northwest-1": "China (Ningxia)",
    },
}

AWS_REGION_NAMES: Dict[str, str] = {
    code: name
    for regions in AWS_REGIONS_BY_GEOGRAPHY.values()
    for code, name in regions.items()
}


def get_region_name(region_code: str) -> str:
    """
    Get the human-readable name for a region code.

    Returns:
        Region name (e.g., 'Asia Pacific (Mumbai)'), or the code itself if unknown
    """
    return AWS_REGION_NAMES.get(region_code, region_code)


def get_all_aws_regions() -> List[str]:
    """
    Get all supported AWS region codes.

    Returns:
        List of AWS region codes
    """
    return list(AWS_REGION_NAMES.keys())
