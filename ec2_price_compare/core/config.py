"""
Configuration module for loading environment variables.
AWS credentials, China partition endpoints and the exchange rate are all
read from the environment so that no secret lives in code.
"""
import os
from typing import Optional


def _optional(name: str) -> Optional[str]:
    """Return an env value, treating empty strings as unset."""
    value = os.getenv(name, "")
    return value or None


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        # Server Configuration
        self.PORT: int = int(os.getenv("PORT", "3001"))
        self.APP_ENV: str = os.getenv("APP_ENV", "development")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

        # Standard (global) partition
        self.AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")
        self.AWS_ACCESS_KEY_ID: Optional[str] = _optional("AWS_ACCESS_KEY_ID")
        self.AWS_SECRET_ACCESS_KEY: Optional[str] = _optional("AWS_SECRET_ACCESS_KEY")

        # China partition: separate endpoints and credentials
        self.AWS_CN_REGION: str = os.getenv("AWS_CN_REGION", "cn-northwest-1")
        self.AWS_CN_PRICING_ENDPOINT: str = os.getenv(
            "AWS_CN_PRICING_ENDPOINT",
            "https://api.pricing.cn-northwest-1.amazonaws.com.cn"
        )
        self.AWS_CN_EC2_ENDPOINT: str = os.getenv(
            "AWS_CN_EC2_ENDPOINT",
            "https://ec2.cn-northwest-1.amazonaws.com.cn"
        )
        self.AWS_CN_ACCESS_KEY_ID: Optional[str] = _optional("AWS_CN_ACCESS_KEY_ID")
        self.AWS_CN_SECRET_ACCESS_KEY: Optional[str] = _optional("AWS_CN_SECRET_ACCESS_KEY")

        # Pricing Configuration
        self.CNY_TO_USD_RATE: float = float(os.getenv("CNY_TO_USD_RATE", "7.3"))  # CNY per 1 USD
        self.PRICING_MAX_RESULTS: int = int(os.getenv("PRICING_MAX_RESULTS", "100"))
        self.AWS_CONNECT_TIMEOUT: int = int(os.getenv("AWS_CONNECT_TIMEOUT", "10"))
        self.AWS_READ_TIMEOUT: int = int(os.getenv("AWS_READ_TIMEOUT", "10"))

        # MCP server: suppress logging when a parent process owns stderr
        self.MCP_SILENT_MODE: bool = os.getenv("MCP_SILENT_MODE", "false").lower() == "true"

    def validate(self) -> None:
        """
        Validates that required configuration values are set.

        Raises:
            ValueError: If any required configuration is missing or invalid.
        """
        if self.CNY_TO_USD_RATE <= 0:
            raise ValueError(
                f"CNY_TO_USD_RATE must be positive (got: {self.CNY_TO_USD_RATE})"
            )
        if not self.AWS_REGION:
            raise ValueError("AWS_REGION is required")
        if not self.AWS_CN_REGION:
            raise ValueError("AWS_CN_REGION is required")

        for name in ("AWS_CN_PRICING_ENDPOINT", "AWS_CN_EC2_ENDPOINT"):
            endpoint = getattr(self, name)
            if not endpoint.startswith("https://"):
                raise ValueError(f"{name} must be an https URL (got: {endpoint})")

        if self.PRICING_MAX_RESULTS < 1 or self.PRICING_MAX_RESULTS > 100:
            raise ValueError("PRICING_MAX_RESULTS must be between 1 and 100")


config = Config()
