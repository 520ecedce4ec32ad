"""
Data URL encoding for embedded file contents

Contents are embedded as RFC 2397 data URLs. Several encodings are tried
and the shortest one wins; gzip is only considered when the caller allows
it and the declaration has not already chosen a compression.
"""

import base64
import binascii
import gzip
from typing import Optional, Tuple
from urllib.parse import quote_from_bytes, unquote_to_bytes

from ..exceptions.errors import DataURLError

# Characters left unescaped in the percent-encoded form, beyond the
# unreserved set urllib always keeps.
_SAFE = "/:;@&=+$,!*'()"

# Length of `"compression": "gzip",`, which a compressed resource also emits.
_COMPRESSION_OVERHEAD = 25


def make_data_url(
    contents: bytes, current_compression: Optional[str], allow_compression: bool
) -> Tuple[str, bool]:
    """
    Encode contents as the shortest suitable data URL

    Args:
        contents: Raw bytes to embed
        current_compression: Compression already declared for the resource;
            any value other than None, including "", counts as declared
        allow_compression: Whether gzip may be added

    Returns:
        (url, gzipped) where gzipped reports that compression was added
    """
    url = "data:," + quote_from_bytes(contents, safe=_SAFE)

    b64 = "data:;base64," + base64.b64encode(contents).decode("ascii")
    if len(b64) < len(url):
        url = b64

    if allow_compression and current_compression is None:
        compressed = gzip.compress(contents, compresslevel=9, mtime=0)
        gz = "data:;base64," + base64.b64encode(compressed).decode("ascii")
        if len(gz) + _COMPRESSION_OVERHEAD < len(url):
            return gz, True

    return url, False


def decode_data_url(url: str) -> bytes:
    """
    Decode a data URL back into raw bytes

    Compression is not undone; gzipped contents come back compressed.

    Raises:
        DataURLError: url is not a well-formed data URL
    """
    if not url.startswith("data:"):
        raise DataURLError(f"Not a data URL: {url[:32]}")
    header, sep, payload = url[len("data:"):].partition(",")
    if not sep:
        raise DataURLError("Data URL has no ',' separator")

    params = header.split(";")
    if params and params[-1] == "base64":
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise DataURLError(f"Invalid base64 payload: {e}") from e
    return unquote_to_bytes(payload)
