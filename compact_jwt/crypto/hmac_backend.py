"""Symmetric HS256/HS384/HS512 signing and verification."""

from cryptography.hazmat.primitives import constant_time, hmac

from compact_jwt.core.errors import AlgorithmError, KeyMaterialError
from compact_jwt.crypto.base64url import b64url_encode
from compact_jwt.crypto.types import AlgorithmSpec, SignatureFamily


def _key_bytes(key: str | bytes) -> bytes:
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode("utf-8")
    raise KeyMaterialError("HMAC secret must be str or bytes")


class HMACBackend:
    """Signs with a shared secret; verifies by re-signing and comparing."""

    def sign(self, message: bytes, key: str | bytes, spec: AlgorithmSpec) -> bytes:
        """Compute ``HMAC(digest, key, message)``."""
        if spec.family is not SignatureFamily.HMAC:
            raise AlgorithmError(f"{spec.name} is not an HMAC algorithm")
        try:
            mac = hmac.HMAC(_key_bytes(key), spec.hash_algorithm())
            mac.update(message)
            return mac.finalize()
        except (TypeError, ValueError) as exc:
            raise KeyMaterialError("HMAC secret was rejected") from exc

    def verify(
        self,
        message: bytes,
        signature: str,
        key: str | bytes,
        spec: AlgorithmSpec,
    ) -> bool:
        """Check a base64url signature segment against a fresh MAC.

        Both sides are compared as base64url text produced by the same
        encoder, in constant time. An empty recomputed MAC never matches.
        """
        expected = b64url_encode(self.sign(message, key, spec))
        if not expected or not signature.isascii():
            return False
        return constant_time.bytes_eq(
            expected.encode("ascii"), signature.encode("ascii")
        )
