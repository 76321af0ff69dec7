"""
Canonical parameter encoding for request signing

Nested parameter structures are flattened, sorted by key and form-encoded so
that two logically equal parameter sets always produce the same bytes:

    {"a": {"b": 1}}           -> "ab=1"
    {"x": [1, 2]}             -> "x%5B0%5D=1&x%5B1%5D=2"
    {"x": [{"id": 7}]}        -> "x%5B0%5Did=7"
"""

from typing import Any, Dict, Mapping
from urllib.parse import quote_plus


def format_scalar(value: Any) -> str:
    """Render a scalar exactly as the remote verifier expects it"""
    if value is None:
        raise TypeError("None values must be removed before encoding")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_params(params: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings and sequences into a single-level dict

    Child keys are appended to their parent key with no separator; sequence
    elements are addressed as parent[index].
    """
    flattened: Dict[str, Any] = {}

    for key, value in params.items():
        full_key = f"{prefix}{key}"

        if isinstance(value, Mapping):
            flattened.update(flatten_params(value, full_key))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                item_key = f"{full_key}[{index}]"
                if isinstance(item, Mapping):
                    flattened.update(flatten_params(item, item_key))
                else:
                    flattened[item_key] = item
        else:
            flattened[full_key] = value

    return flattened


def canonical_query_string(params: Mapping[str, Any]) -> str:
    """Sorted, flattened, percent-encoded query string used as signing input"""
    flattened = flatten_params(params)
    pairs = sorted(flattened.items(), key=lambda item: item[0])

    return "&".join(
        f"{quote_plus(key, safe='')}={quote_plus(format_scalar(value), safe='')}"
        for key, value in pairs
    )
