"""
Tests for rd:// locator parsing and serialization.
"""
from __future__ import annotations

import base64

import pytest

from randomfs.errors import MalformedLocator
from randomfs.url import (
    RandomURL,
    decode_url_path,
    encode_url_path,
    parse_random_url,
    serialize,
)


def _url(**overrides) -> RandomURL:
    fields = dict(
        scheme="rd",
        host="randomfs",
        version="v4",
        file_size=1024,
        file_name="example.txt",
        timestamp=1700000000,
        rep_hash="QmAbc",
    )
    fields.update(overrides)
    return RandomURL(**fields)


class TestParseRandomURL:
    """Test parse_random_url function."""

    def test_reference_locator(self):
        result = parse_random_url("rd://randomfs/v4/1024/example.txt/1700000000/QmAbc")

        assert result.scheme == "rd"
        assert result.host == "randomfs"
        assert result.version == "v4"
        assert result.file_size == 1024
        assert result.file_name == "example.txt"
        assert result.timestamp == 1700000000
        assert result.rep_hash == "QmAbc"

    def test_rep_hash_is_not_mistaken_for_file_name(self):
        result = parse_random_url("rd://randomfs/v4/5/a.bin/1/bafyhash")
        assert result.file_name == "a.bin"
        assert result.rep_hash == "bafyhash"

    def test_empty_raises(self):
        with pytest.raises(MalformedLocator, match="cannot be empty"):
            parse_random_url("")

    def test_wrong_scheme_raises(self):
        with pytest.raises(MalformedLocator, match="invalid scheme"):
            parse_random_url("http://randomfs/v4/1024/example.txt/1700000000/QmAbc")

    def test_missing_scheme_raises(self):
        with pytest.raises(MalformedLocator, match="invalid scheme"):
            parse_random_url("randomfs/v4/1024/example.txt/1700000000/QmAbc")

    def test_too_few_segments_raises(self):
        with pytest.raises(MalformedLocator, match="expected 5 path segments"):
            parse_random_url("rd://randomfs/v4/1024/example.txt")

    def test_too_many_segments_raises(self):
        with pytest.raises(MalformedLocator, match="expected 5 path segments"):
            parse_random_url("rd://randomfs/v4/1024/dir/example.txt/1700000000/QmAbc")

    def test_non_numeric_size_raises(self):
        with pytest.raises(MalformedLocator, match="invalid file size"):
            parse_random_url("rd://randomfs/v4/big/example.txt/1700000000/QmAbc")

    def test_negative_size_raises(self):
        with pytest.raises(MalformedLocator, match="invalid file size"):
            parse_random_url("rd://randomfs/v4/-1/example.txt/1700000000/QmAbc")

    def test_non_numeric_timestamp_raises(self):
        with pytest.raises(MalformedLocator, match="invalid timestamp"):
            parse_random_url("rd://randomfs/v4/1024/example.txt/yesterday/QmAbc")

    @pytest.mark.parametrize("size", ["1_024", "+17", " 17", "17 ", "\u0661"])
    def test_non_canonical_size_raises(self, size):
        with pytest.raises(MalformedLocator, match="invalid file size"):
            parse_random_url(f"rd://randomfs/v4/{size}/a.txt/1/QmAbc")

    @pytest.mark.parametrize("timestamp", ["+17", "1_700", "17\n"])
    def test_non_canonical_timestamp_raises(self, timestamp):
        with pytest.raises(MalformedLocator, match="invalid timestamp"):
            parse_random_url(f"rd://randomfs/v4/1/a.txt/{timestamp}/QmAbc")

    def test_negative_timestamp_accepted(self):
        assert parse_random_url("rd://randomfs/v4/1/a.txt/-5/QmAbc").timestamp == -5

    def test_empty_host_raises(self):
        with pytest.raises(MalformedLocator, match="host cannot be empty"):
            parse_random_url("rd:///v4/1024/example.txt/1700000000/QmAbc")

    def test_malformed_locator_is_value_error(self):
        with pytest.raises(ValueError):
            parse_random_url("rd://randomfs")


class TestSerialize:
    """Test locator serialization and the round-trip law."""

    def test_string_form(self):
        assert str(_url()) == "rd://randomfs/v4/1024/example.txt/1700000000/QmAbc"
        assert serialize(_url()) == str(_url())

    @pytest.mark.parametrize("name", [
        "example.txt",
        "with space.pdf",
        "odd/slash",
        "query?and#fragment",
        "100%.txt",
        "ünïcode.md",
        "",
    ])
    def test_round_trip(self, name):
        url = _url(file_name=name)
        assert parse_random_url(serialize(url)) == url

    def test_zero_size_round_trip(self):
        url = _url(file_size=0)
        assert parse_random_url(str(url)) == url


class TestEncodedPath:
    """Test base64 web path wrapping."""

    def test_encode_matches_urlsafe_base64(self):
        url = _url()
        expected = base64.urlsafe_b64encode(str(url).encode()).decode()
        assert encode_url_path(url) == expected

    def test_decode_round_trip(self):
        url = _url(file_name="a b+c.txt")
        assert decode_url_path(encode_url_path(url)) == url

    def test_encode_accepts_string(self):
        raw = "rd://randomfs/v4/1024/example.txt/1700000000/QmAbc"
        assert decode_url_path(encode_url_path(raw)) == parse_random_url(raw)

    def test_invalid_base64_raises(self):
        with pytest.raises(MalformedLocator, match="Invalid encoded URL"):
            decode_url_path("not base64!!")

    def test_decoded_non_locator_raises(self):
        encoded = base64.urlsafe_b64encode(b"http://example.com").decode()
        with pytest.raises(MalformedLocator, match="invalid scheme"):
            decode_url_path(encoded)
