"""Compact token construction and signing."""

import json
import logging
from typing import Any

from compact_jwt.core.errors import EncodeError, TokenError
from compact_jwt.core.settings import get_settings
from compact_jwt.crypto.base64url import b64url_encode
from compact_jwt.crypto.registry import backend_for, resolve_algorithm
from compact_jwt.token.types import TOKEN_TYPE

logger = logging.getLogger(__name__)


def serialize_json(value: Any) -> bytes:
    """Serialize a JSON value with no insignificant whitespace."""
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodeError("value is not JSON serializable") from exc


def sign_segments(signing_input: bytes, key: str | bytes, algorithm: str) -> str:
    """Return the base64url signature segment for ``signing_input``."""
    spec = resolve_algorithm(algorithm)
    backend = backend_for(spec)
    if backend is None:
        return ""
    signature = backend.sign(signing_input, key, spec)
    if not signature:
        raise EncodeError(f"{spec.name} produced an empty signature")
    return b64url_encode(signature)


def encode_token(payload: Any, key: str | bytes, algorithm: str | None) -> str:
    """Build a signed compact token, raising ``TokenError`` on any failure."""
    alg = algorithm or get_settings().default_algorithm
    # Reject unknown names before doing any serialization work.
    resolve_algorithm(alg)
    header = {"typ": TOKEN_TYPE, "alg": alg}
    signing_input = ".".join(
        (
            b64url_encode(serialize_json(header)),
            b64url_encode(serialize_json(payload)),
        )
    )
    signature = sign_segments(signing_input.encode("ascii"), key, alg)
    return f"{signing_input}.{signature}"


def encode(payload: Any, key: str | bytes, algorithm: str | None = None) -> str:
    """Encode ``payload`` as a compact JWT.

    ``algorithm`` defaults to the configured default (``HS256``) when
    empty. Returns ``""`` if the algorithm is unknown, the payload cannot
    be serialized or signing fails. ``none`` produces a token with an
    empty signature segment and ignores ``key``.
    """
    try:
        return encode_token(payload, key, algorithm)
    except TokenError as exc:
        logger.debug("JWT encode failed: %s (alg=%r)", type(exc).__name__, algorithm)
        return ""
