"""Unpadded base64url encoding as used by JWS compact serialization."""

import base64
import binascii
import re

from compact_jwt.core.errors import DecodeError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")
_PADDING = {0: "", 2: "==", 3: "="}


def is_b64url(text: str) -> bool:
    """Return whether ``text`` uses only the unpadded base64url alphabet."""
    return _ALPHABET.fullmatch(text) is not None


def b64url_encode(data: bytes) -> str:
    """Encode bytes as base64url text without ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text back to bytes.

    Padding is restored from the text length. A length of ``1 mod 4`` can
    never be produced by ``b64url_encode`` and is rejected, as is any
    character outside the base64url alphabet (including ``=``, ``+``,
    ``/`` and whitespace).
    """
    if not is_b64url(text):
        raise DecodeError("segment contains characters outside base64url")
    padding = _PADDING.get(len(text) % 4)
    if padding is None:
        raise DecodeError("segment length is not a valid base64url length")
    try:
        return base64.b64decode(text + padding, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise DecodeError("segment is not valid base64url") from exc
