"""Configuration management for the Unified Payment Gateway"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from unified_payments.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_KAMONEY_BASE_URL = "https://api2.kamoney.com.br/v2"
DEFAULT_NOWPAYMENTS_BASE_URL = "https://api.nowpayments.io/v1"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class GatewayConfig:
    """
    Provider credentials and transport settings

    The total wall-clock bound of one call is
    timeout * retry_attempts + sum(backoff_time_unit * 2 ** (n + 1)) for
    n in range(retry_attempts - 1).
    """

    kamoney_public_key: Optional[str] = None
    kamoney_secret_key: Optional[str] = field(default=None, repr=False)
    kamoney_base_url: str = DEFAULT_KAMONEY_BASE_URL
    nowpayments_api_key: Optional[str] = field(default=None, repr=False)
    nowpayments_base_url: str = DEFAULT_NOWPAYMENTS_BASE_URL
    environment: str = "development"
    timeout: float = 30
    retry_attempts: int = 3
    backoff_time_unit: float = 1.0
    logger: Optional[logging.Logger] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "GatewayConfig":
        """
        Build configuration from environment variables

        Environment variables:
            KAMONEY_PUBLIC_KEY, KAMONEY_SECRET_KEY, KAMONEY_BASE_URL
            NOWPAYMENTS_API_KEY, NOWPAYMENTS_BASE_URL
            PAYMENT_GATEWAY_ENVIRONMENT (development | production)
            PAYMENT_GATEWAY_TIMEOUT (seconds), PAYMENT_GATEWAY_RETRY_ATTEMPTS
        """
        if dotenv_path:
            load_dotenv(dotenv_path)

        values = dict(
            kamoney_public_key=os.getenv("KAMONEY_PUBLIC_KEY"),
            kamoney_secret_key=os.getenv("KAMONEY_SECRET_KEY"),
            kamoney_base_url=os.getenv("KAMONEY_BASE_URL", DEFAULT_KAMONEY_BASE_URL),
            nowpayments_api_key=os.getenv("NOWPAYMENTS_API_KEY"),
            nowpayments_base_url=os.getenv("NOWPAYMENTS_BASE_URL", DEFAULT_NOWPAYMENTS_BASE_URL),
            environment=os.getenv("PAYMENT_GATEWAY_ENVIRONMENT", "development").lower().strip(),
            timeout=_env_float("PAYMENT_GATEWAY_TIMEOUT", 30),
            retry_attempts=_env_int("PAYMENT_GATEWAY_RETRY_ATTEMPTS", 3),
        )
        values.update(overrides)
        return cls(**values)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> "GatewayConfig":
        """Raise ConfigurationError listing every problem at once"""
        errors = []

        if not self.kamoney_public_key:
            errors.append("KAMONEY public key is required")
        if not self.kamoney_secret_key:
            errors.append("KAMONEY secret key is required")
        if not self.nowpayments_api_key:
            errors.append("NOWPayments API key is required")
        if self.timeout <= 0:
            errors.append("timeout must be positive")
        if self.retry_attempts < 1:
            errors.append("retry_attempts must be at least 1")

        if errors:
            logger.error(f"❌ Payment gateway configuration invalid: {', '.join(errors)}")
            raise ConfigurationError(", ".join(errors))

        return self
