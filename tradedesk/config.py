"""TradeDesk configuration management.

Loads configuration from environment variables with sensible defaults.
Money defaults follow the US locale the service businesses operate in
(USD, sales tax applied after discount).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

KNOWN_TRADES = ("hvac", "electrical", "plumbing", "locksmith", "general-contractor")


@dataclass
class APIConfig:
    """Persistence collaborator (REST backend) connection settings."""

    base_url: str = "http://localhost:8000/api"
    token: str | None = None
    timeout_seconds: float = 30.0


@dataclass
class BillingConfig:
    """Estimate and invoice defaults."""

    currency: str = "USD"
    tax_rate_percent: Decimal = Decimal("9.25")  # Memphis combined sales tax
    estimate_valid_days: int = 7


@dataclass
class AppConfig:
    """Root application configuration.

    Loads from environment variables with fail-fast on invalid values.
    """

    environment: str = "development"
    default_trade: str = "hvac"
    log_level: str = "INFO"
    json_logs: bool = False

    api: APIConfig = field(default_factory=APIConfig)
    billing: BillingConfig = field(default_factory=BillingConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - TRADEDESK_API_URL: Backend base URL (default: http://localhost:8000/api)
        - TRADEDESK_API_TOKEN: Backend auth token (required in production)
        - DEFAULT_TRADE: Fallback trade when a business has none (default: hvac)
        - TAX_RATE_PERCENT: Estimate tax rate (default: 9.25)
        - LOG_LEVEL / JSON_LOGS: Logging verbosity and format

        Raises:
            KeyError: If a required variable is missing or DEFAULT_TRADE is unknown
            ValueError: If a numeric variable cannot be parsed
        """
        environment = os.getenv("ENVIRONMENT", "development")
        token = os.getenv("TRADEDESK_API_TOKEN") or None

        # Production Validation
        if environment == "production" and not token:
            raise KeyError("TRADEDESK_API_TOKEN environment variable is required in production.")

        default_trade = os.getenv("DEFAULT_TRADE", "hvac").strip().lower()
        if default_trade not in KNOWN_TRADES:
            raise KeyError(
                f"DEFAULT_TRADE '{default_trade}' is not a known trade. "
                f"Expected one of: {', '.join(KNOWN_TRADES)}"
            )

        tax_raw = os.getenv("TAX_RATE_PERCENT", "9.25")
        try:
            tax_rate = Decimal(tax_raw)
        except InvalidOperation:
            raise ValueError(f"TAX_RATE_PERCENT must be a number, got '{tax_raw}'")
        if tax_rate < 0:
            raise ValueError("TAX_RATE_PERCENT must be non-negative")

        return cls(
            environment=environment,
            default_trade=default_trade,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
            api=APIConfig(
                base_url=os.getenv("TRADEDESK_API_URL", "http://localhost:8000/api").rstrip("/"),
                token=token,
                timeout_seconds=float(os.getenv("TRADEDESK_API_TIMEOUT", "30")),
            ),
            billing=BillingConfig(
                currency=os.getenv("DEFAULT_CURRENCY", "USD"),
                tax_rate_percent=tax_rate,
                estimate_valid_days=int(os.getenv("ESTIMATE_VALID_DAYS", "7")),
            ),
        )

    @property
    def package_root(self) -> Path:
        """Root directory of the tradedesk package (bundled YAML lives here)."""
        return Path(__file__).parent

    @property
    def trades_config_path(self) -> Path:
        """Path to trades.yaml."""
        return self.package_root / "trades" / "trades.yaml"


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration

    Raises:
        KeyError: If required environment variables are missing
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
