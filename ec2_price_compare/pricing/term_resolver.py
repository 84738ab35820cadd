"""
Term resolution for catalog documents.
Locates the pricing term matching a plan and extracts its price.
"""
from typing import Iterator, Optional, Tuple
import math
import logging

from ec2_price_compare.domain.catalog_models import (
    CatalogDocument,
    PriceDimension,
    Term,
    TermContainer,
)
from ec2_price_compare.domain.pricing_models import (
    Plan,
    RESERVED_OFFERING_CLASS,
    RESERVED_PURCHASE_OPTION,
)
from ec2_price_compare.pricing.currency import PRIMARY_CURRENCY, SECONDARY_CURRENCY


logger = logging.getLogger(__name__)


class PriceParseError(Exception):
    """Raised when a populated price is not a number."""
    pass


def _iter_terms(document: CatalogDocument) -> Iterator[Term]:
    """Yield every leaf term in document order, flattening containers."""
    for entry in document.terms.values():
        if isinstance(entry, TermContainer):
            yield from entry.sub_terms.values()
        else:
            yield entry


def matches_plan(term: Term, plan: Plan) -> bool:
    """Check whether a term's contract attributes satisfy a reserved plan."""
    attributes = term.term_attributes
    return (
        attributes.lease_contract_length == plan.lease_contract_length
        and attributes.offering_class == RESERVED_OFFERING_CLASS
        and attributes.purchase_option == RESERVED_PURCHASE_OPTION
    )


def resolve_term(document: CatalogDocument, plan: Plan) -> Optional[Term]:
    """
    Find the term of a document that prices the given plan.

    On-demand documents carry a single term shape, so the first term is
    used. Reserved documents are scanned in order and the first term with
    matching lease length, offering class and purchase option wins.

    Args:
        document: Parsed catalog document
        plan: Requested pricing plan

    Returns:
        The matching Term, or None if there is none
    """
    if not document.terms:
        return None

    if plan is Plan.ON_DEMAND:
        for entry in document.terms.values():
            if isinstance(entry, TermContainer):
                first = entry.first_term()
                if first is not None:
                    return first
                continue
            return entry
        return None

    for term in _iter_terms(document):
        if matches_plan(term, plan):
            return term
    return None


def resolve_price_dimension(document: CatalogDocument, plan: Plan) -> Optional[PriceDimension]:
    """Return the first price dimension of the plan's matching term, if any."""
    term = resolve_term(document, plan)
    if term is None:
        logger.info(f"No {plan.value} term found in catalog document")
        return None
    dimension = term.first_dimension()
    if dimension is None:
        logger.info(f"Matched {plan.value} term has no price dimensions")
    return dimension


def select_price(dimension: Optional[PriceDimension]) -> Tuple[Optional[float], Optional[str]]:
    """
    Pick the price and currency of a dimension.

    USD is preferred, CNY is used when USD is not populated.

    Returns:
        (price, currency), or (None, None) if neither currency is populated

    Raises:
        PriceParseError: If the populated price is not a finite number
    """
    if dimension is None:
        return None, None

    for currency in (PRIMARY_CURRENCY, SECONDARY_CURRENCY):
        raw = dimension.price_per_unit.get(currency)
        if raw:
            try:
                price = float(raw)
            except ValueError as error:
                raise PriceParseError(f"Invalid {currency} price '{raw}'") from error
            # float() also accepts 'nan' and 'inf'
            if not math.isfinite(price):
                raise PriceParseError(f"Invalid {currency} price '{raw}'")
            return price, currency

    return None, None
