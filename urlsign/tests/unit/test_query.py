"""
Unit tests for query canonicalization.
"""
from urlsign.core.signing.query import (
    RESERVED_PARAMS,
    extract_user_params,
    get_canonical_query,
    percent_encode,
)


class TestPercentEncode:
    """Test RFC 3986 percent-encoding."""

    def test_unreserved_untouched(self):
        value = "AZaz09-._~"
        assert percent_encode(value) == value

    def test_space_is_percent_20(self):
        """Space is %20, never '+'."""
        assert percent_encode("a b") == "a%20b"

    def test_reserved_characters_encoded(self):
        assert percent_encode("a+b/c?d&e=f") == "a%2Bb%2Fc%3Fd%26e%3Df"

    def test_uppercase_hex(self):
        assert percent_encode(":") == "%3A"

    def test_utf8(self):
        """Non-ASCII is encoded byte by byte from UTF-8."""
        assert percent_encode("é") == "%C3%A9"


class TestExtractUserParams:
    """Test removal of reserved parameters."""

    def test_reserved_removed(self):
        url = "https://example.com/p?w=200&keyid=old&expiry=x&signature=abc&h=300"
        assert extract_user_params(url) == [("w", "200"), ("h", "300")]

    def test_case_sensitive(self):
        """Only exact lowercase names are reserved."""
        url = "https://example.com/p?KeyId=1&Signature=2"
        assert extract_user_params(url) == [("KeyId", "1"), ("Signature", "2")]

    def test_values_decoded(self):
        url = "https://example.com/p?q=a%20b&r=c+d"
        assert extract_user_params(url) == [("q", "a b"), ("r", "c d")]

    def test_blank_values_kept(self):
        assert extract_user_params("https://example.com/p?flag=") == [("flag", "")]

    def test_no_query(self):
        assert extract_user_params("https://example.com/p") == []

    def test_reserved_names(self):
        assert RESERVED_PARAMS == ("keyid", "expiry", "signature")


class TestGetCanonicalQuery:
    """Test canonical query construction."""

    def test_sorted_by_key(self):
        assert get_canonical_query([("b", "2"), ("a", "1")]) == "a=1&b=2"

    def test_order_independent(self):
        """Input order does not affect the output."""
        first = get_canonical_query([("w", "200"), ("h", "300"), ("fm", "webp")])
        second = get_canonical_query([("fm", "webp"), ("w", "200"), ("h", "300")])
        assert first == second == "fm=webp&h=300&w=200"

    def test_repeated_keys_sorted_by_value(self):
        assert get_canonical_query([("a", "2"), ("a", "10"), ("a", "1")]) == "a=1&a=10&a=2"

    def test_sort_uses_encoded_form(self):
        """'%20' (0x25) sorts before letters, so encoded order is used."""
        assert get_canonical_query([("a", "b"), ("a", " ")]) == "a=%20&a=b"

    def test_byte_order_uppercase_first(self):
        assert get_canonical_query([("b", "1"), ("B", "1")]) == "B=1&b=1"

    def test_reserved_dropped(self):
        params = [("signature", "abc"), ("keyid", "k"), ("expiry", "e"), ("x", "1")]
        assert get_canonical_query(params) == "x=1"

    def test_empty(self):
        assert get_canonical_query([]) == ""

    def test_only_reserved(self):
        assert get_canonical_query([("signature", "abc")]) == ""

    def test_keys_and_values_encoded(self):
        assert get_canonical_query([("a b", "c/d")]) == "a%20b=c%2Fd"
