"""Asymmetric RS* and ES* signing with PEM-encoded keys.

Private keys are parsed for signing, public keys for verification. No
passphrase is ever supplied, so encrypted private keys are rejected.
Parsed key objects are locals of a single call and are not cached.

ECDSA signatures use the JWS fixed-width ``r || s`` form rather than the
DER structure ``cryptography`` produces natively.
"""

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from compact_jwt.core.errors import AlgorithmError, KeyMaterialError
from compact_jwt.crypto.types import AlgorithmSpec, SignatureFamily

PrivateKey = rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey
PublicKey = rsa.RSAPublicKey | ec.EllipticCurvePublicKey


def _pem_bytes(key: str | bytes) -> bytes:
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode("utf-8")
    raise KeyMaterialError("PEM key must be str or bytes")


def _load_private_key(key: str | bytes) -> PrivateKey:
    try:
        loaded = serialization.load_pem_private_key(_pem_bytes(key), password=None)
    except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise KeyMaterialError("could not parse PEM private key") from exc
    if not isinstance(loaded, rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey):
        raise KeyMaterialError("PEM private key is neither RSA nor EC")
    return loaded


def _load_public_key(key: str | bytes) -> PublicKey:
    try:
        loaded = serialization.load_pem_public_key(_pem_bytes(key))
    except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise KeyMaterialError("could not parse PEM public key") from exc
    if not isinstance(loaded, rsa.RSAPublicKey | ec.EllipticCurvePublicKey):
        raise KeyMaterialError("PEM public key is neither RSA nor EC")
    return loaded


def _coordinate_size(curve: ec.EllipticCurve) -> int:
    return (curve.key_size + 7) // 8


def _der_to_raw(der: bytes, curve: ec.EllipticCurve) -> bytes:
    r, s = decode_dss_signature(der)
    size = _coordinate_size(curve)
    return r.to_bytes(size, "big") + s.to_bytes(size, "big")


def _raw_to_der(raw: bytes, curve: ec.EllipticCurve) -> bytes | None:
    size = _coordinate_size(curve)
    if len(raw) != 2 * size:
        return None
    r = int.from_bytes(raw[:size], "big")
    s = int.from_bytes(raw[size:], "big")
    return encode_dss_signature(r, s)


class PEMBackend:
    """Digest-sign and digest-verify with RSA PKCS#1 v1.5 or ECDSA."""

    def sign(self, message: bytes, key: str | bytes, spec: AlgorithmSpec) -> bytes:
        """Sign ``message`` with a PEM private key and return raw signature bytes."""
        private_key = _load_private_key(key)
        try:
            if spec.family is SignatureFamily.RSA:
                if not isinstance(private_key, rsa.RSAPrivateKey):
                    raise KeyMaterialError(f"{spec.name} requires an RSA private key")
                return private_key.sign(
                    message, padding.PKCS1v15(), spec.hash_algorithm()
                )
            if spec.family is SignatureFamily.EC:
                if not isinstance(private_key, ec.EllipticCurvePrivateKey):
                    raise KeyMaterialError(f"{spec.name} requires an EC private key")
                der = private_key.sign(message, ec.ECDSA(spec.hash_algorithm()))
                return _der_to_raw(der, private_key.curve)
        except ValueError as exc:
            raise KeyMaterialError(f"key cannot sign with {spec.name}") from exc
        raise AlgorithmError(f"{spec.name} is not a PEM algorithm")

    def verify(
        self,
        message: bytes,
        signature: bytes,
        key: str | bytes,
        spec: AlgorithmSpec,
    ) -> bool:
        """Return whether ``signature`` is valid for ``message`` under a PEM public key."""
        if not signature:
            return False
        public_key = _load_public_key(key)
        try:
            if spec.family is SignatureFamily.RSA:
                if not isinstance(public_key, rsa.RSAPublicKey):
                    raise KeyMaterialError(f"{spec.name} requires an RSA public key")
                public_key.verify(
                    signature, message, padding.PKCS1v15(), spec.hash_algorithm()
                )
                return True
            if spec.family is SignatureFamily.EC:
                if not isinstance(public_key, ec.EllipticCurvePublicKey):
                    raise KeyMaterialError(f"{spec.name} requires an EC public key")
                der = _raw_to_der(signature, public_key.curve)
                if der is None:
                    return False
                public_key.verify(der, message, ec.ECDSA(spec.hash_algorithm()))
                return True
        except InvalidSignature:
            return False
        raise AlgorithmError(f"{spec.name} is not a PEM algorithm")
