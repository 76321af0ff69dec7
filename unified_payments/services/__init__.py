"""Provider clients and the request pipeline they share"""

from unified_payments.services.http_transport import AiohttpTransport, HttpTransport, RequestsTransport
from unified_payments.services.kamoney_service import KamoneyService
from unified_payments.services.nowpayments_service import NowPaymentsService
from unified_payments.services.payment_gateway import PaymentGateway, determine_kamoney_service
from unified_payments.services.provider_client import ProviderClient
from unified_payments.services.response_classifier import ResponseClassifier
from unified_payments.services.retry_policy import RetryPolicy

__all__ = [
    "AiohttpTransport",
    "HttpTransport",
    "KamoneyService",
    "NowPaymentsService",
    "PaymentGateway",
    "ProviderClient",
    "RequestsTransport",
    "ResponseClassifier",
    "RetryPolicy",
    "determine_kamoney_service",
]
