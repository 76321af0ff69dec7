"""
Provider Client Base
Shared request pipeline for every payment-provider integration:

    params -> (optional HMAC signing) -> retry-wrapped transport -> classification

Provider catalogs subclass ProviderClient and only describe endpoints; they
never touch HTTP, retries or status codes directly.
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional

from unified_payments.exceptions import PaymentGatewayError
from unified_payments.models import RawResponse, RequestSpec
from unified_payments.services.http_transport import AiohttpTransport, HttpTransport
from unified_payments.services.response_classifier import ResponseClassifier
from unified_payments.services.retry_policy import RetryPolicy
from unified_payments.utils.data_sanitizer import sanitize_headers, sanitize_params
from unified_payments.utils.request_signing import RequestSigner
from unified_payments.version import __version__

USER_AGENT = f"UnifiedPayments/{__version__}"


class ProviderClient:
    """
    Base class for provider integrations with unified retry and error handling

    Provides:
    - Default JSON headers and a library User-Agent on every request
    - HMAC-signed requests (public/sign headers plus nonce param)
    - Bounded retry with exponential backoff for transport failures
    - Classification of every outcome into the gateway error taxonomy
    - One log line per request/response pair
    """

    service_name = "provider"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        retry_attempts: int = 3,
        logger: Optional[logging.Logger] = None,
        transport: Optional[HttpTransport] = None,
        retry_policy: Optional[RetryPolicy] = None,
        classifier: Optional[ResponseClassifier] = None,
        backoff_time_unit: float = 1.0,
    ):
        if not base_url:
            raise ValueError(f"{self.service_name}: base_url is required")

        self.base_url = base_url
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or AiohttpTransport()
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=retry_attempts,
            time_unit=backoff_time_unit,
            logger=self.logger,
        )
        self.classifier = classifier or ResponseClassifier()

    def default_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def build_url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def execute_unsigned(
        self,
        method,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Send a request with default headers only and return the classified payload"""
        spec = RequestSpec(method=method, path=path, params=params or {}, extra_headers=headers or {})
        return await self._execute(spec)

    async def execute_signed(
        self,
        method,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        *,
        secret_key: str,
        public_key: str,
    ) -> Any:
        """Sign params with a fresh nonce, attach public/sign headers, then send"""
        signed = RequestSigner(public_key=public_key, secret_key=secret_key).sign(params)
        merged_headers = {**(headers or {}), **signed.headers}

        spec = RequestSpec(method=method, path=path, params=signed.params, extra_headers=merged_headers)
        return await self._execute(spec)

    async def _send_once(self, spec: RequestSpec, url: str, headers: Mapping[str, str]) -> RawResponse:
        return await self.transport.send(spec.method, url, headers, spec.params, self.timeout)

    async def _execute(self, spec: RequestSpec) -> Any:
        url = self.build_url(spec.path)
        headers = {**self.default_headers(), **spec.extra_headers}
        started = time.monotonic()

        self.logger.debug(
            f"🚀 API_REQUEST_START: {self.service_name} {spec.method.value} {url}",
            extra={"headers": sanitize_headers(headers), "params": sanitize_params(spec.params)},
        )

        try:
            response = await self.retry_policy.run(
                lambda: self._send_once(spec, url, headers),
                description=f"{self.service_name} {spec.method.value} {spec.path}",
            )
        except Exception as e:
            error = self.classifier.classify_exception(e)
            self._log_outcome(spec, url, None, error, started)
            if error is e:
                raise
            raise error from e

        try:
            payload = self.classifier.classify(response)
        except PaymentGatewayError as error:
            self._log_outcome(spec, url, response.status, error, started)
            raise

        self._log_outcome(spec, url, response.status, None, started)
        return payload

    def _log_outcome(
        self,
        spec: RequestSpec,
        url: str,
        status: Optional[int],
        error: Optional[PaymentGatewayError],
        started: float,
    ) -> None:
        elapsed = time.monotonic() - started
        log_data = {
            "service": self.service_name,
            "http_method": spec.method.value,
            "url": url,
            "status": status,
            "duration_seconds": round(elapsed, 3),
        }

        if error is None:
            self.logger.info(
                f"✅ API_SUCCESS: {spec.method.value} {url} -> {status} in {elapsed:.3f}s",
                extra=log_data,
            )
            return

        log_data["error_kind"] = error.kind.value
        self.logger.error(
            f"❌ API_ERROR: {spec.method.value} {url} -> {status} [{error.kind.value}] {error.message}",
            extra=log_data,
        )

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
