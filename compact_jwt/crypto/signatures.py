"""Standalone signing primitives over arbitrary messages.

These mirror what the token pipeline does internally and follow the same
failure convention: errors never escape, signing returns ``""`` and
verification returns ``False``.
"""

import logging

from compact_jwt.core.errors import AlgorithmError, EncodeError, TokenError
from compact_jwt.crypto.base64url import b64url_decode, b64url_encode
from compact_jwt.crypto.hmac_backend import HMACBackend
from compact_jwt.crypto.pem_backend import PEMBackend
from compact_jwt.crypto.registry import backend_for, resolve_algorithm
from compact_jwt.crypto.types import AlgorithmSpec

logger = logging.getLogger(__name__)


def _as_bytes(message: str | bytes) -> bytes:
    if isinstance(message, bytes):
        return message
    try:
        return message.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodeError("message is not encodable as UTF-8") from exc


def _resolve(
    algorithm: str, expected: type[HMACBackend | PEMBackend]
) -> tuple[AlgorithmSpec, HMACBackend | PEMBackend]:
    spec = resolve_algorithm(algorithm)
    backend = backend_for(spec)
    if not isinstance(backend, expected):
        raise AlgorithmError(f"{algorithm} is not handled by {expected.__name__}")
    return spec, backend


def sign_hmac(message: str | bytes, key: str | bytes, algorithm: str) -> str:
    """Return the base64url HMAC of ``message`` for an HS* algorithm."""
    try:
        spec, backend = _resolve(algorithm, HMACBackend)
        return b64url_encode(backend.sign(_as_bytes(message), key, spec))
    except TokenError as exc:
        logger.debug("HMAC signing failed: %s (alg=%r)", type(exc).__name__, algorithm)
        return ""


def sign_pem(message: str | bytes, key: str | bytes, algorithm: str) -> str:
    """Return the base64url RS*/ES* signature of ``message`` using a PEM private key."""
    try:
        spec, backend = _resolve(algorithm, PEMBackend)
        return b64url_encode(backend.sign(_as_bytes(message), key, spec))
    except TokenError as exc:
        logger.debug("PEM signing failed: %s (alg=%r)", type(exc).__name__, algorithm)
        return ""


def verify_pem(
    message: str | bytes, signature: str, key: str | bytes, algorithm: str
) -> bool:
    """Check a base64url RS*/ES* signature against a PEM public key."""
    try:
        spec, backend = _resolve(algorithm, PEMBackend)
        raw = b64url_decode(signature)
        return bool(raw) and backend.verify(_as_bytes(message), raw, key, spec)
    except TokenError as exc:
        logger.debug("PEM verification failed: %s (alg=%r)", type(exc).__name__, algorithm)
        return False
