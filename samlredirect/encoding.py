"""Deflate, base64 and percent-encoding helpers for the Redirect binding."""

from __future__ import annotations

import base64
import logging
import zlib
from urllib.parse import quote, unquote, urlsplit

from .constants import URI_COMPONENT_SAFE

logger = logging.getLogger(__name__)


def deflate_string(message: str) -> bytes:
    """Raw DEFLATE (RFC 1951) of ``message``, no zlib header or checksum."""
    compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, -zlib.MAX_WBITS)
    return compressor.compress(message.encode("utf-8")) + compressor.flush()


def inflate_string(data: bytes) -> str:
    return zlib.decompress(data, -zlib.MAX_WBITS).decode("utf-8")


def base64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_decode(data: str) -> bytes:
    return base64.b64decode(data)


def percent_encode(value: str) -> str:
    """Percent-encode ``value`` with the unreserved set of ``encodeURIComponent``."""
    return quote(value, safe=URI_COMPONENT_SAFE)


def encode_redirect_payload(xml: str) -> str:
    """Deflate, base64 and percent-encode a SAML message for a query string."""
    compressed = deflate_string(xml)
    logger.debug(f"Deflated {len(xml)} characters of XML into {len(compressed)} bytes")
    return percent_encode(base64_encode(compressed))


def decode_redirect_payload(value: str) -> str:
    """Inverse of :func:`encode_redirect_payload`."""
    return inflate_string(base64_decode(unquote(value)))


def has_query(url: str) -> bool:
    """Return ``True`` when ``url`` already carries a non-empty query string.

    URLs that cannot be parsed are reported as having no query.
    """
    # TODO: reject unparseable base URLs with a ConfigurationError instead
    try:
        return bool(urlsplit(url).query)
    except ValueError:
        logger.warning(f"Could not parse base URL {url!r}, assuming it has no query")
        return False
