"""Unified client for the KAMONEY (Pix) and NOWPayments (crypto) APIs"""

from unified_payments.config import GatewayConfig
from unified_payments.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    PaymentGatewayError,
    ProviderError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from unified_payments.models import HttpMethod, Provider
from unified_payments.services import (
    AiohttpTransport,
    KamoneyService,
    NowPaymentsService,
    PaymentGateway,
    ProviderClient,
    RequestsTransport,
)
from unified_payments.utils.logging_setup import setup_logger
from unified_payments.version import __version__

__all__ = [
    "AiohttpTransport",
    "AuthenticationError",
    "ConfigurationError",
    "ErrorKind",
    "GatewayConfig",
    "HttpMethod",
    "KamoneyService",
    "MalformedResponseError",
    "NetworkError",
    "NotFoundError",
    "NowPaymentsService",
    "PaymentGateway",
    "PaymentGatewayError",
    "Provider",
    "ProviderClient",
    "ProviderError",
    "RateLimitError",
    "RequestsTransport",
    "ServerError",
    "ValidationError",
    "__version__",
    "setup_logger",
]
