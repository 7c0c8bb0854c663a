"""Key generation helpers for HS*, RS* and ES* signing."""

import secrets

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from compact_jwt.core.errors import AlgorithmError
from compact_jwt.crypto.registry import resolve_algorithm
from compact_jwt.crypto.types import Algorithm, PEMKeyPair, SignatureFamily

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

_CURVES: dict[Algorithm, type[ec.EllipticCurve]] = {
    Algorithm.ES256: ec.SECP256R1,
    Algorithm.ES384: ec.SECP384R1,
    Algorithm.ES512: ec.SECP521R1,
}


def _to_pem_pair(
    algorithm: Algorithm,
    private_key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey,
) -> PEMKeyPair:
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return PEMKeyPair(
        algorithm=algorithm, private_key_pem=private_pem, public_key_pem=public_pem
    )


def generate_rsa_keypair(
    algorithm: str = Algorithm.RS256, key_size: int = RSA_KEY_SIZE
) -> PEMKeyPair:
    """Generate an RSA keypair usable with RS256, RS384 or RS512."""
    spec = resolve_algorithm(algorithm)
    if spec.family is not SignatureFamily.RSA:
        raise AlgorithmError(f"{algorithm} is not an RSA algorithm")
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )
    return _to_pem_pair(spec.name, private_key)


def generate_ec_keypair(algorithm: str = Algorithm.ES256) -> PEMKeyPair:
    """Generate an EC keypair on the curve that matches an ES* algorithm."""
    spec = resolve_algorithm(algorithm)
    if spec.family is not SignatureFamily.EC:
        raise AlgorithmError(f"{algorithm} is not an EC algorithm")
    private_key = ec.generate_private_key(_CURVES[spec.name]())
    return _to_pem_pair(spec.name, private_key)


def generate_hmac_secret(algorithm: str = Algorithm.HS256) -> bytes:
    """Generate a random secret as long as the HMAC digest."""
    spec = resolve_algorithm(algorithm)
    if spec.family is not SignatureFamily.HMAC or spec.digest_bits is None:
        raise AlgorithmError(f"{algorithm} is not an HMAC algorithm")
    return secrets.token_bytes(spec.digest_bits // 8)
