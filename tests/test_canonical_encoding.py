"""
Canonical Encoding Tests
Validates flattening, ordering and escaping of signing input
"""

import logging
from decimal import Decimal

import pytest

from unified_payments.utils.canonical_encoding import canonical_query_string, flatten_params, format_scalar

logger = logging.getLogger(__name__)


class TestFlattenParams:
    """Nested mappings and sequences collapse into one level"""

    def test_nested_mapping_keys_concatenate(self):
        assert flatten_params({"a": {"b": 1}}) == {"ab": 1}

    def test_deeply_nested_mapping(self):
        assert flatten_params({"a": {"b": {"c": "x"}}}) == {"abc": "x"}

    def test_sequences_use_indexed_keys(self):
        assert flatten_params({"x": [1, 2]}) == {"x[0]": 1, "x[1]": 2}

    def test_sequence_of_mappings(self):
        flattened = flatten_params({"withdrawals": [{"address": "addr1", "amount": 5}]})
        assert flattened == {"withdrawals[0]address": "addr1", "withdrawals[0]amount": 5}

    def test_empty_params(self):
        assert flatten_params({}) == {}


class TestCanonicalQueryString:
    """Signing input is deterministic and sorted by key"""

    def test_order_independent(self):
        first = canonical_query_string({"service": "pix", "amount": 100.0, "nonce": 1700000000})
        second = canonical_query_string({"nonce": 1700000000, "amount": 100.0, "service": "pix"})

        assert first == second
        assert first == "amount=100.0&nonce=1700000000&service=pix"
        logger.info("✅ Canonical order independence validated")

    def test_nested_params(self):
        assert canonical_query_string({"a": {"b": 1}}) == "ab=1"

    def test_list_keys_are_percent_encoded(self):
        assert canonical_query_string({"x": [1, 2]}) == "x%5B0%5D=1&x%5B1%5D=2"

    def test_spaces_and_reserved_characters(self):
        encoded = canonical_query_string({"description": "Order #1 & more", "email": "a@b.com"})
        assert encoded == "description=Order+%231+%26+more&email=a%40b.com"

    def test_slashes_are_escaped(self):
        assert canonical_query_string({"callback": "https://x.io/ipn"}) == "callback=https%3A%2F%2Fx.io%2Fipn"

    def test_booleans_render_lowercase(self):
        assert canonical_query_string({"fiat": False, "fixed_rate": True}) == "fiat=false&fixed_rate=true"

    def test_decimal_renders_verbatim(self):
        assert canonical_query_string({"amount": Decimal("10.50")}) == "amount=10.50"

    def test_empty_params(self):
        assert canonical_query_string({}) == ""


class TestFormatScalar:

    def test_none_is_rejected(self):
        with pytest.raises(TypeError):
            format_scalar(None)

    def test_none_inside_params_is_rejected(self):
        with pytest.raises(TypeError):
            canonical_query_string({"amount": None})

    @pytest.mark.parametrize("value,expected", [
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (100.0, "100.0"),
        ("pix", "pix"),
    ])
    def test_scalar_rendering(self, value, expected):
        assert format_scalar(value) == expected
