"""
Domain models for AWS Price List catalog documents.
Each PriceList entry returned by the pricing API is parsed once into these
read-only structures so that term resolution works on a uniform shape.
"""
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field
import json


class CatalogParseError(Exception):
    """Raised when a catalog document cannot be parsed."""
    pass


@dataclass(frozen=True)
class PriceDimension:
    """A single price dimension of a term (e.g. hourly usage rate)."""
    price_per_unit: Dict[str, str]
    unit: Optional[str] = None
    description: Optional[str] = None
    rate_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceDimension":
        if not isinstance(data, dict):
            raise CatalogParseError("Price dimension must be an object")
        price_per_unit = data.get("pricePerUnit") or {}
        if not isinstance(price_per_unit, dict):
            raise CatalogParseError("pricePerUnit must be an object")
        return cls(
            price_per_unit={str(k): str(v) for k, v in price_per_unit.items()},
            unit=data.get("unit"),
            description=data.get("description"),
            rate_code=data.get("rateCode"),
        )


@dataclass(frozen=True)
class TermAttributes:
    """Contract attributes of a reserved term (empty for on-demand terms)."""
    lease_contract_length: Optional[str] = None
    offering_class: Optional[str] = None
    purchase_option: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TermAttributes":
        data = data or {}
        return cls(
            lease_contract_length=data.get("LeaseContractLength"),
            offering_class=data.get("OfferingClass"),
            purchase_option=data.get("PurchaseOption"),
        )


@dataclass(frozen=True)
class Term:
    """A leaf pricing term: contract attributes plus ordered price dimensions."""
    term_attributes: TermAttributes
    price_dimensions: Dict[str, PriceDimension] = field(default_factory=dict)

    def first_dimension(self) -> Optional[PriceDimension]:
        """Return the first price dimension in document order, if any."""
        for dimension in self.price_dimensions.values():
            return dimension
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Term":
        dimensions = data.get("priceDimensions") or {}
        if not isinstance(dimensions, dict):
            raise CatalogParseError("priceDimensions must be an object")
        return cls(
            term_attributes=TermAttributes.from_dict(data.get("termAttributes")),
            price_dimensions={
                key: PriceDimension.from_dict(value) for key, value in dimensions.items()
            },
        )


@dataclass(frozen=True)
class TermContainer:
    """A map of sub-term id -> Term (reserved/on-demand variants nest one level deeper)."""
    sub_terms: Dict[str, Term] = field(default_factory=dict)

    def first_term(self) -> Optional[Term]:
        for term in self.sub_terms.values():
            return term
        return None


TermEntry = Union[Term, TermContainer]


def _is_leaf_term(data: Dict[str, Any]) -> bool:
    return "termAttributes" in data or "priceDimensions" in data


def parse_term_entry(data: Any) -> TermEntry:
    """
    Resolve a raw terms-map value into a Term or a TermContainer.

    Args:
        data: Raw JSON value from the document's `terms` map

    Returns:
        Term if the value carries term fields directly, TermContainer otherwise

    Raises:
        CatalogParseError: If the value (or a nested value) is not an object
    """
    if not isinstance(data, dict):
        raise CatalogParseError("Term entry must be an object")

    if _is_leaf_term(data):
        return Term.from_dict(data)

    sub_terms = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            raise CatalogParseError(f"Sub-term '{key}' must be an object")
        sub_terms[key] = Term.from_dict(value)
    return TermContainer(sub_terms=sub_terms)


@dataclass(frozen=True)
class Product:
    """Product section of a catalog document."""
    attributes: Dict[str, str]
    product_family: Optional[str] = None
    sku: Optional[str] = None


@dataclass(frozen=True)
class CatalogDocument:
    """One parsed PriceList entry: product plus resolved term entries."""
    product: Optional[Product]
    terms: Dict[str, TermEntry]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogDocument":
        if not isinstance(data, dict):
            raise CatalogParseError("Catalog document must be an object")

        product = None
        raw_product = data.get("product")
        if isinstance(raw_product, dict):
            attributes = raw_product.get("attributes")
            product = Product(
                attributes=dict(attributes) if isinstance(attributes, dict) else {},
                product_family=raw_product.get("productFamily"),
                sku=raw_product.get("sku"),
            )

        raw_terms = data.get("terms") or {}
        if not isinstance(raw_terms, dict):
            raise CatalogParseError("terms must be an object")

        return cls(
            product=product,
            terms={key: parse_term_entry(value) for key, value in raw_terms.items()},
        )

    @classmethod
    def from_json(cls, raw: Union[str, bytes, Dict[str, Any]]) -> "CatalogDocument":
        """
        Parse a PriceList item as returned by pricing:GetProducts.

        The API returns each item as a JSON string; already-decoded
        dictionaries are accepted as well.

        Raises:
            CatalogParseError: If the payload is not valid JSON or has an unexpected shape
        """
        if isinstance(raw, dict):
            return cls.from_dict(raw)
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as error:
            raise CatalogParseError(f"Invalid catalog document JSON: {error}") from error
        return cls.from_dict(data)
