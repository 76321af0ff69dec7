"""
Data Sanitization for Gateway Logging
Masks credentials and signatures before headers or params reach a log line
"""

import re
from typing import Any, Dict, List, Mapping, Optional


class DataSanitizer:
    """Masks provider credentials in headers, params and free text"""

    # Header names whose values are credentials
    SENSITIVE_HEADERS = {
        "public",
        "sign",
        "x-api-key",
        "authorization",
    }

    # Param/field names to mask in dictionaries
    SENSITIVE_FIELDS = {
        "api_key",
        "apikey",
        "secret_key",
        "secret",
        "password",
        "token",
        "access_token",
        "authorization",
        "public_key",
        "sign",
        "pix_key",
        "wallet_address",
    }

    SENSITIVE_PATTERNS = {
        "api_key": re.compile(
            r'(?i)(api[_-]?key|secret[_-]?key|public[_-]?key)["\':=\s]*([a-zA-Z0-9_-]{12,})'
        ),
        "signature": re.compile(r"\b([a-f0-9]{128})\b"),
    }

    @classmethod
    def mask_value(cls, value: Any) -> str:
        if isinstance(value, str) and len(value) > 8:
            return f"[REDACTED:{value[:2]}***{value[-2:]}]"
        return "[REDACTED]"

    @classmethod
    def sanitize_headers(cls, headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
        """Copy of headers with credential values masked"""
        return {
            key: cls.mask_value(value) if key.lower() in cls.SENSITIVE_HEADERS else value
            for key, value in (headers or {}).items()
        }

    @classmethod
    def sanitize_dict(cls, data: Mapping[str, Any], deep: bool = True) -> Dict[str, Any]:
        """Mask sensitive fields, recursing into nested dicts and lists"""
        sanitized = {}

        for key, value in data.items():
            key_lower = str(key).lower()

            if any(field in key_lower for field in cls.SENSITIVE_FIELDS):
                sanitized[key] = cls.mask_value(value)
            elif deep and isinstance(value, Mapping):
                sanitized[key] = cls.sanitize_dict(value, deep=True)
            elif deep and isinstance(value, (list, tuple)):
                sanitized[key] = cls.sanitize_list(value, deep=True)
            else:
                sanitized[key] = value

        return sanitized

    @classmethod
    def sanitize_list(cls, data, deep: bool = True) -> List[Any]:
        sanitized = []

        for item in data:
            if deep and isinstance(item, Mapping):
                sanitized.append(cls.sanitize_dict(item, deep=True))
            elif deep and isinstance(item, (list, tuple)):
                sanitized.append(cls.sanitize_list(item, deep=True))
            else:
                sanitized.append(item)

        return sanitized

    @classmethod
    def sanitize_text(cls, text: str) -> str:
        """Mask key-like and signature-like substrings in free text"""
        sanitized = str(text)

        for pattern_name, pattern in cls.SENSITIVE_PATTERNS.items():

            def replace_match(match, pattern_name=pattern_name):
                if len(match.groups()) > 1:
                    return f"{match.group(1)}=[REDACTED-{pattern_name.upper()}]"
                return f"[REDACTED-{pattern_name.upper()}]"

            sanitized = pattern.sub(replace_match, sanitized)

        return sanitized

    @classmethod
    def mask_api_key(cls, api_key: Optional[str], show_chars: int = 2) -> str:
        """
        Safely mask API key for logging

        Args:
            api_key: API key to mask
            show_chars: Number of characters to show at start/end

        Returns:
            Masked API key safe for logging
        """
        if not api_key:
            return "[NO_API_KEY]"

        if len(api_key) <= show_chars * 2:
            return "[REDACTED]"

        return f"[API_KEY:{api_key[:show_chars]}***{api_key[-show_chars:]}]"


# Convenience functions
def sanitize_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    return DataSanitizer.sanitize_headers(headers)


def sanitize_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return DataSanitizer.sanitize_dict(params or {})


def mask_api_key_safe(api_key: Optional[str]) -> str:
    """Safely mask API key for any logging"""
    return DataSanitizer.mask_api_key(api_key)


def sanitize_text(text: Any) -> str:
    return DataSanitizer.sanitize_text(text)
