"""Encoding, signing, sanitization and logging helpers"""

from unified_payments.utils.canonical_encoding import canonical_query_string, flatten_params
from unified_payments.utils.request_signing import RequestSigner, generate_nonce, sign_params

__all__ = [
    "canonical_query_string",
    "flatten_params",
    "RequestSigner",
    "generate_nonce",
    "sign_params",
]
