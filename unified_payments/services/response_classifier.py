"""
Unified Response Classification Service
Maps HTTP responses and transport failures onto the gateway error taxonomy
"""

import json
import logging
from typing import Any, Dict, Optional

from unified_payments.exceptions import (
    AuthenticationError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    PaymentGatewayError,
    ProviderError,
    RateLimitError,
    ServerError,
    TransportConnectionError,
    TransportTimeoutError,
    ValidationError,
)
from unified_payments.models import RawResponse
from unified_payments.utils.data_sanitizer import sanitize_text

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Unknown error"


class ResponseClassifier:
    """Turns a RawResponse into a decoded payload or a typed error"""

    # Fixed-message statuses; 400 and 5xx are handled separately
    STATUS_ERRORS: Dict[int, tuple] = {
        401: (AuthenticationError, "Invalid credentials"),
        403: (AuthenticationError, "Access forbidden"),
        404: (NotFoundError, "Resource not found"),
        429: (RateLimitError, "Rate limit exceeded"),
    }

    @staticmethod
    def decode_body(body: str) -> Any:
        """Parse a JSON body; an empty body decodes to None"""
        if body is None or not body.strip():
            return None
        return json.loads(body)

    @classmethod
    def extract_error_message(cls, body: str) -> str:
        """Pull `error` or `message` out of an error body, tolerating non-JSON bodies"""
        try:
            decoded = cls.decode_body(body)
        except ValueError:
            return DEFAULT_ERROR_MESSAGE

        if isinstance(decoded, dict):
            message = decoded.get("error") or decoded.get("message")
            if message:
                return str(message)
        return DEFAULT_ERROR_MESSAGE

    def error_for_status(self, response: RawResponse) -> Optional[PaymentGatewayError]:
        """The error a status code maps to, or None for 2xx"""
        status = response.status

        if response.is_success:
            return None
        if status == 400:
            return ValidationError(self.extract_error_message(response.body), status_code=status)
        if status in self.STATUS_ERRORS:
            error_class, message = self.STATUS_ERRORS[status]
            return error_class(message, status_code=status)
        if 500 <= status <= 599:
            return ServerError(f"Server error: {status}", status_code=status)
        return ServerError(f"Unexpected response: {status}", status_code=status)

    def classify(self, response: RawResponse) -> Any:
        """Return the decoded success payload or raise the classified error"""
        error = self.error_for_status(response)
        if error is not None:
            raise error

        try:
            return self.decode_body(response.body)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON response: {e}", status_code=response.status) from e

    def classify_exception(self, exception: BaseException) -> PaymentGatewayError:
        """Map a failure that produced no usable response onto the taxonomy"""
        if isinstance(exception, PaymentGatewayError):
            return exception
        if isinstance(exception, TransportTimeoutError):
            return NetworkError(f"Request timeout: {exception}")
        if isinstance(exception, TransportConnectionError):
            return NetworkError(f"Network connection failed: {exception}")
        if isinstance(exception, ValueError):
            return MalformedResponseError(f"Invalid JSON response: {exception}")

        logger.warning(f"⚠️ UNCLASSIFIED_ERROR: {type(exception).__name__}: {sanitize_text(exception)}")
        return ProviderError(f"{type(exception).__name__}: {exception}")

