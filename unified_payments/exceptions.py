"""
Payment gateway error taxonomy

Every failure surfaced to callers is a PaymentGatewayError carrying its
classification, a human-readable message and, where one was received, the
HTTP status code.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed classification of request outcomes"""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    MALFORMED = "malformed"
    PROVIDER = "provider"


class PaymentGatewayError(Exception):
    """Base class for all classified gateway failures"""

    kind: ErrorKind = ErrorKind.PROVIDER

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code!r})"


class ValidationError(PaymentGatewayError):
    kind = ErrorKind.VALIDATION


class AuthenticationError(PaymentGatewayError):
    kind = ErrorKind.AUTHENTICATION


class NotFoundError(PaymentGatewayError):
    kind = ErrorKind.NOT_FOUND


class RateLimitError(PaymentGatewayError):
    kind = ErrorKind.RATE_LIMIT


class ServerError(PaymentGatewayError):
    kind = ErrorKind.SERVER_ERROR


class NetworkError(PaymentGatewayError):
    kind = ErrorKind.NETWORK


class MalformedResponseError(PaymentGatewayError):
    kind = ErrorKind.MALFORMED


class ProviderError(PaymentGatewayError):
    """Catch-all for failures no other class describes"""
    kind = ErrorKind.PROVIDER


class ConfigurationError(Exception):
    """Missing or invalid gateway configuration"""
    pass


# ============================================================================
# Transport signals - raised by transports, consumed by the retry policy
# ============================================================================

class TransientTransportError(Exception):
    """A request that never produced an HTTP response and may be retried"""

    def __init__(self, message: str, original_exception: Optional[BaseException] = None):
        self.original_exception = original_exception
        super().__init__(message)


class TransportTimeoutError(TransientTransportError):
    pass


class TransportConnectionError(TransientTransportError):
    pass
