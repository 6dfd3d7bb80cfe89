"""
Hashing Unit Tests
Tests for autotrace/crypto/hashing.py

Tests:
- sha256 against standard test vectors
- hex encoding shape (64 lowercase chars)
- text is hashed as literal UTF-8 characters
- hash_canonical stability for dict key ordering differences
"""
import hashlib
import re

import pytest

from autotrace.crypto.hashing import (
    DIGEST_SIZE,
    sha256,
    digest,
    hash_bytes,
    hash_text,
    hash_canonical,
    to_hex,
    from_hex,
    hash_concat,
)


HEX_64 = re.compile(r"^[0-9a-f]{64}$")

# FIPS 180-2 test vectors
SHA256_ABC = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
SHA256_EMPTY = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_abc_vector(self):
        """SHA-256("abc") matches the published test vector."""
        assert to_hex(sha256(b"abc")) == SHA256_ABC

    def test_sha256_empty_bytes(self):
        """Empty input is legal and hashes to the known empty digest."""
        assert to_hex(sha256(b"")) == SHA256_EMPTY

    def test_sha256_matches_hashlib(self):
        data = b"hello"
        assert sha256(data) == hashlib.sha256(data).digest()
        assert len(sha256(data)) == DIGEST_SIZE

    def test_sha256_deterministic(self):
        """Repeated calls with identical input yield identical output."""
        data = b"test data for hashing"
        results = [sha256(data) for _ in range(10)]
        assert all(r == results[0] for r in results)

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")

    def test_aliases(self):
        data = b"alias check"
        assert digest(data) == sha256(data)
        assert hash_bytes(data) == sha256(data)


class TestHashText:
    """Text payloads are hashed as their UTF-8 bytes."""

    def test_hash_text_ascii(self):
        assert to_hex(hash_text("abc")) == SHA256_ABC

    def test_hex_looking_text_is_not_decoded(self):
        """'abcd' is hashed as four characters, not as two decoded bytes."""
        assert hash_text("abcd") == sha256(b"abcd")
        assert hash_text("abcd") != sha256(bytes.fromhex("abcd"))

    def test_numeric_text_is_literal(self):
        assert hash_text("42") == sha256(b"42")

    def test_unicode_text_uses_utf8(self):
        text = "café \U0001f697"
        assert hash_text(text) == sha256(text.encode("utf-8"))

    def test_lone_surrogate_rejected(self):
        with pytest.raises(UnicodeEncodeError):
            hash_text("\ud800")


class TestHexEncoding:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_digest_shape(self):
        """A digest renders as exactly 64 lowercase hex characters."""
        for payload in (b"", b"a", b"\x00" * 100, bytes(range(256))):
            rendered = to_hex(sha256(payload))
            assert len(rendered) == 64
            assert HEX_64.match(rendered)

    def test_to_hex_lowercase_no_prefix(self):
        assert to_hex(bytes.fromhex("DEADBEEF")) == "deadbeef"

    def test_to_hex_most_significant_byte_first(self):
        assert to_hex(b"\x01\x02\xff") == "0102ff"

    def test_to_hex_zero_digest(self):
        assert to_hex(bytes(32)) == "0" * 64

    def test_from_hex_valid(self):
        assert from_hex("deadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_accepts_uppercase(self):
        assert from_hex("DEADBEEF") == bytes.fromhex("deadbeef")

    def test_from_hex_empty(self):
        assert from_hex("") == b""

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("abc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("gg")

    def test_from_hex_rejects_prefix(self):
        with pytest.raises(ValueError):
            from_hex("0xdeadbeef")

    def test_from_hex_inverts_to_hex(self):
        value = sha256(b"test data")
        assert from_hex(to_hex(value)) == value


class TestHashConcat:
    """Tests for hash_concat() function."""

    def test_hash_concat_basic(self):
        left = sha256(b"left")
        right = sha256(b"right")
        assert hash_concat(left, right) == sha256(left + right)

    def test_hash_concat_order_matters(self):
        a = sha256(b"a")
        b = sha256(b"b")
        assert hash_concat(a, b) != hash_concat(b, a)


class TestHashCanonical:
    """Tests for hash_canonical() function."""

    def test_hash_canonical_dict(self):
        result = hash_canonical({"key": "value", "number": 42})
        assert isinstance(result, bytes)
        assert len(result) == 32

    def test_hash_canonical_equals_sha256_of_canonical_json(self):
        obj = {"b": 2, "a": 1}
        assert hash_canonical(obj) == sha256(b'{"a":1,"b":2}')

    def test_hash_canonical_stable_for_key_order(self):
        dict1 = {"zebra": 1, "apple": 2, "mango": 3}
        dict2 = {"apple": 2, "mango": 3, "zebra": 1}
        assert hash_canonical(dict1) == hash_canonical(dict2)

    def test_hash_canonical_list_preserves_order(self):
        assert hash_canonical({"items": [3, 1, 2]}) != hash_canonical({"items": [1, 2, 3]})

    def test_hash_canonical_boolean(self):
        assert hash_canonical({"flag": True}) != hash_canonical({"flag": False})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
