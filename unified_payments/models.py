"""
Unified Payments - Request/Response Data Model
==============================================

Plain value types shared by the transport, retry and classification layers:
- HTTP methods and the closed set of supported providers
- Immutable request description built fresh for every call
- Raw transport response handed to the classifier
- Per-call retry bookkeeping
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from unified_payments.exceptions import ValidationError


# ============================================================================
# ENUMS - Protocol Constants
# ============================================================================

class HttpMethod(Enum):
    """HTTP verbs used by provider APIs"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_query(self) -> bool:
        """GET/DELETE carry params in the query string, POST/PUT as JSON body"""
        return self in (HttpMethod.GET, HttpMethod.DELETE)

    @classmethod
    def coerce(cls, value) -> "HttpMethod":
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


class Provider(Enum):
    """Payment providers known to the gateway"""
    KAMONEY = "kamoney"
    NOWPAYMENTS = "nowpayments"

    @classmethod
    def parse(cls, value) -> "Provider":
        """Resolve a provider from its name or a legacy alias"""
        if isinstance(value, cls):
            return value

        name = str(value).strip().lower()
        provider = PROVIDER_ALIASES.get(name)
        if provider is None:
            raise ValidationError(f"Unsupported payment provider: {value}")
        return provider


PROVIDER_ALIASES = {
    "kamoney": Provider.KAMONEY,
    "kamoney_pix": Provider.KAMONEY,
    "nowpayments": Provider.NOWPAYMENTS,
    "crypto": Provider.NOWPAYMENTS,
}


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)
class RequestSpec:
    """One outgoing request; never mutated after construction"""
    method: HttpMethod
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    extra_headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "method", HttpMethod.coerce(self.method))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params or {})))
        object.__setattr__(self, "extra_headers", MappingProxyType(dict(self.extra_headers or {})))


@dataclass(frozen=True)
class RawResponse:
    """A received HTTP response, prior to classification"""
    status: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status <= 299


@dataclass
class RetryState:
    """Attempt counter for a single logical call"""
    max_attempts: int
    attempt: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.max_attempts - 1

    def next_delay(self, time_unit: float = 1.0) -> float:
        """Backoff before the next attempt: 2^(attempt+1) time units"""
        return time_unit * (2 ** (self.attempt + 1))

    def advance(self) -> None:
        self.attempt += 1


@dataclass(frozen=True)
class SignedParams:
    """Parameters with the nonce merged in, plus the auth headers to send"""
    params: Mapping[str, Any]
    headers: Mapping[str, str]
    nonce: int
    signature: str


def compact(params: Optional[Mapping[str, Any]]) -> dict:
    """Drop absent (None) values before encoding or sending"""
    return {key: value for key, value in (params or {}).items() if value is not None}
