"""
Currency conversion utilities.
Prices come back from the catalog in USD (global partition) or CNY
(China partition); a single configured rate converts between the two.
"""
from typing import Optional

from ec2_price_compare.core.config import config


PRIMARY_CURRENCY = "USD"
SECONDARY_CURRENCY = "CNY"
SUPPORTED_CURRENCIES = (PRIMARY_CURRENCY, SECONDARY_CURRENCY)

CURRENCY_SYMBOLS = {
    PRIMARY_CURRENCY: "$",
    SECONDARY_CURRENCY: "¥",
}


class CurrencyNormalizer:
    """Converts amounts between USD and CNY using a fixed rate."""

    def __init__(self, rate: Optional[float] = None):
        """
        Args:
            rate: CNY per one USD (defaults to CNY_TO_USD_RATE)
        """
        self.rate = config.CNY_TO_USD_RATE if rate is None else rate
        if self.rate <= 0:
            raise ValueError(f"Exchange rate must be positive (got: {self.rate})")

    def to_secondary(self, primary_amount: float) -> float:
        """Convert a USD amount to CNY."""
        return primary_amount * self.rate

    def to_primary(self, secondary_amount: float) -> float:
        """Convert a CNY amount to USD."""
        return secondary_amount / self.rate

    def to_primary_amount(self, amount: Optional[float], currency: Optional[str]) -> Optional[float]:
        """
        Convert an amount in any supported currency to USD.

        Returns None when the amount is None.

        Raises:
            ValueError: If the currency is not supported
        """
        if amount is None:
            return None
        if currency in (None, PRIMARY_CURRENCY):
            return amount
        if currency == SECONDARY_CURRENCY:
            return self.to_primary(amount)
        raise ValueError(f"Unsupported currency: {currency}")


def format_amount(amount: float, currency: str = PRIMARY_CURRENCY) -> str:
    """
    Format a currency value for display.

    Args:
        amount: Amount to format
        currency: Currency code (USD, CNY)

    Returns:
        Formatted string with four decimals, e.g. "$0.1664" or "¥1.2000"
    """
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount:.4f}"
    return f"{amount:.4f} {currency}"
