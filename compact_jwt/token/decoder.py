"""Compact token parsing, policy enforcement and signature verification.

The payload segment is only decoded after the signature check has
passed. Every failure, whatever its cause, surfaces to the caller as
``None`` so that the reason cannot be probed from outside.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

from compact_jwt.core.errors import (
    DecodeError,
    PolicyError,
    ShapeError,
    SignatureMismatchError,
    TokenError,
)
from compact_jwt.core.settings import get_settings
from compact_jwt.crypto.base64url import b64url_decode
from compact_jwt.crypto.hmac_backend import HMACBackend
from compact_jwt.crypto.pem_backend import PEMBackend
from compact_jwt.crypto.registry import backend_for, resolve_algorithm
from compact_jwt.crypto.types import Algorithm
from compact_jwt.token.types import TokenSegments

logger = logging.getLogger(__name__)


def parse_json_segment(segment: str) -> Any:
    """Base64url-decode a segment and parse it as JSON."""
    raw = b64url_decode(segment)
    try:
        return json.loads(raw.decode("utf-8"))
    except (ValueError, RecursionError) as exc:
        # ValueError also covers the int digit limit on huge numbers.
        raise DecodeError("segment is not valid JSON") from exc


def split_token(token: str) -> TokenSegments:
    """Check the overall token shape and split it into segments."""
    if not isinstance(token, str) or not token:
        raise ShapeError("token is empty")
    if len(token) > get_settings().max_token_length:
        raise ShapeError("token exceeds the configured maximum length")
    return TokenSegments.split(token)


def read_header(segments: TokenSegments) -> dict[str, Any]:
    """Decode the header object and make sure it declares ``alg``."""
    header = parse_json_segment(segments.header)
    if not isinstance(header, dict):
        raise DecodeError("header is not a JSON object")
    if not isinstance(header.get("alg"), str):
        raise DecodeError("header has no string 'alg'")
    return header


def check_policy(alg: str, key: str | bytes, accepted: frozenset[str]) -> None:
    """Apply the unsigned-token and allow-list gates, in that order."""
    if alg == Algorithm.NONE and key:
        raise PolicyError("unsigned token presented while a key was supplied")
    if accepted and alg not in accepted:
        raise PolicyError(f"algorithm {alg!r} is not accepted")


def verify_signature(segments: TokenSegments, key: str | bytes, alg: str) -> None:
    """Raise unless the signature segment is valid for ``alg`` and ``key``."""
    spec = resolve_algorithm(alg)
    backend = backend_for(spec)
    if backend is None:
        return
    if isinstance(backend, HMACBackend):
        verified = backend.verify(
            segments.signing_input, segments.signature, key, spec
        )
    elif isinstance(backend, PEMBackend):
        signature = b64url_decode(segments.signature)
        if not signature:
            raise SignatureMismatchError("signature segment is empty")
        verified = backend.verify(segments.signing_input, signature, key, spec)
    else:
        raise SignatureMismatchError(f"no verifier for {alg}")
    if not verified:
        raise SignatureMismatchError(f"{alg} signature does not match")


def decode_token(
    token: str, key: str | bytes, algorithms: Iterable[str] | None = None
) -> Any:
    """Verify ``token`` and return its claims, raising ``TokenError`` on failure."""
    if isinstance(algorithms, str):
        algorithms = (algorithms,)
    accepted = frozenset(algorithms or ())
    segments = split_token(token)
    alg = read_header(segments)["alg"]
    check_policy(alg, key, accepted)
    verify_signature(segments, key, alg)
    return parse_json_segment(segments.payload)


def decode(
    token: str, key: str | bytes, algorithms: Iterable[str] | None = None
) -> Any | None:
    """Verify a compact JWT and return its claim set.

    ``algorithms`` is the accepted-algorithm set. When it is empty any
    supported algorithm declared by the token is allowed, but an unsigned
    (``none``) token is still refused whenever ``key`` is non-empty.

    Returns ``None`` on any failure: malformed shape, bad base64url or
    JSON, unknown or disallowed algorithm, unusable key, or a signature
    that does not verify.
    """
    try:
        return decode_token(token, key, algorithms)
    except TokenError as exc:
        logger.debug("JWT decode rejected: %s", type(exc).__name__)
        return None


def decode_header(token: str) -> dict[str, Any] | None:
    """Return the token header without verifying anything.

    Useful for choosing a key before calling ``decode``. The payload is
    never returned from here.
    """
    try:
        return read_header(split_token(token))
    except TokenError as exc:
        logger.debug("JWT header inspection failed: %s", type(exc).__name__)
        return None
