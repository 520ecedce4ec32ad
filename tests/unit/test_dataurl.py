"""
Data URL unit tests

Tests encoding selection and decoding of embedded contents
"""

import gzip

import pytest

from provtrans.exceptions.errors import DataURLError
from provtrans.utils.dataurl import decode_data_url, make_data_url


class TestMakeDataURL:
    """Test encoding selection"""

    def test_plain_text_is_percent_encoded(self):
        url, gzipped = make_data_url(b"hello", None, True)
        assert url == "data:,hello"
        assert not gzipped

    def test_binary_round_trip(self):
        contents = bytes(range(256))
        url, gzipped = make_data_url(contents, None, False)
        assert not gzipped
        assert decode_data_url(url) == contents

    def test_base64_chosen_when_shorter(self):
        """Mostly non-printable bytes encode shorter in base64"""
        url, _ = make_data_url(b"\x00\xff" * 20, None, False)
        assert url.startswith("data:;base64,")

    def test_repetitive_contents_gzipped(self):
        contents = b"a" * 1000
        url, gzipped = make_data_url(contents, None, True)
        assert gzipped
        assert gzip.decompress(decode_data_url(url)) == contents

    def test_short_contents_not_gzipped(self):
        """gzip must beat the alternatives by more than the added field"""
        _, gzipped = make_data_url(b"hi", None, True)
        assert not gzipped

    def test_compression_disallowed(self):
        url, gzipped = make_data_url(b"a" * 1000, None, False)
        assert not gzipped
        assert decode_data_url(url) == b"a" * 1000

    def test_declared_compression_not_recompressed(self):
        contents = b"a" * 1000
        url, gzipped = make_data_url(contents, "gzip", True)
        assert not gzipped
        assert decode_data_url(url) == contents

    def test_empty_declared_compression_not_recompressed(self):
        """An empty compression is an explicit choice of no compression"""
        contents = b"a" * 1000
        url, gzipped = make_data_url(contents, "", True)
        assert not gzipped
        assert decode_data_url(url) == contents

    def test_deterministic(self):
        contents = b"line\n" * 500
        assert make_data_url(contents, None, True) == make_data_url(contents, None, True)

    def test_empty_contents(self):
        url, gzipped = make_data_url(b"", None, True)
        assert url == "data:,"
        assert not gzipped


class TestDecodeDataURL:
    """Test decoding"""

    def test_percent_escapes(self):
        assert decode_data_url("data:,a%20b") == b"a b"

    def test_media_type_ignored(self):
        assert decode_data_url("data:text/plain;base64,aGk=") == b"hi"

    def test_not_data_url(self):
        with pytest.raises(DataURLError):
            decode_data_url("https://example.com/x")

    def test_missing_separator(self):
        with pytest.raises(DataURLError):
            decode_data_url("data:abc")

    def test_bad_base64(self):
        with pytest.raises(DataURLError):
            decode_data_url("data:;base64,!!!")
