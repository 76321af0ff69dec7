"""HMAC-SHA512 request signing with time-based nonces"""

import hashlib
import hmac
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

from unified_payments.models import SignedParams
from unified_payments.utils.canonical_encoding import canonical_query_string
from unified_payments.utils.data_sanitizer import mask_api_key_safe

logger = logging.getLogger(__name__)

NONCE_PARAM = "nonce"
PUBLIC_KEY_HEADER = "public"
SIGNATURE_HEADER = "sign"


def generate_nonce(clock: Callable[[], float] = time.time) -> int:
    """
    Freshness token in whole seconds

    Two signed calls in the same second share a nonce and the provider will
    reject the second one.
    """
    return int(clock())


def sign_params(params: Mapping[str, Any], secret_key: str, nonce: int) -> str:
    """Lowercase hex HMAC-SHA512 of the canonical params with the nonce merged in"""
    payload = {**params, NONCE_PARAM: nonce}
    message = canonical_query_string(payload)

    return hmac.new(
        secret_key.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


class RequestSigner:
    """Signs parameter sets for a provider that authenticates with public/sign headers"""

    def __init__(
        self,
        public_key: str,
        secret_key: str,
        clock: Callable[[], float] = time.time,
    ):
        if not public_key or not secret_key:
            raise ValueError("Both public_key and secret_key are required for signing")

        self.public_key = public_key
        self._secret_key = secret_key
        self._clock = clock

    def sign(self, params: Optional[Mapping[str, Any]] = None, nonce: Optional[int] = None) -> SignedParams:
        """Return params with the nonce merged in and the auth headers to send"""
        if nonce is None:
            nonce = generate_nonce(self._clock)

        params = dict(params or {})
        signature = sign_params(params, self._secret_key, nonce)

        headers: Dict[str, str] = {
            PUBLIC_KEY_HEADER: self.public_key,
            SIGNATURE_HEADER: signature,
        }

        logger.debug(
            f"🔏 REQUEST_SIGNED: public={mask_api_key_safe(self.public_key)} nonce={nonce} "
            f"params={sorted(params)}"
        )

        return SignedParams(
            params={**params, NONCE_PARAM: nonce},
            headers=headers,
            nonce=nonce,
            signature=signature,
        )

    def __repr__(self) -> str:
        return f"RequestSigner(public_key={mask_api_key_safe(self.public_key)})"
