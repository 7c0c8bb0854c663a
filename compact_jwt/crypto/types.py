"""Type definitions for signing algorithms and key material."""

from enum import StrEnum

from cryptography.hazmat.primitives import hashes
from pydantic import BaseModel, ConfigDict

from compact_jwt.core.errors import AlgorithmError


class Algorithm(StrEnum):
    """JWS algorithm names understood by this library."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    NONE = "none"


class SignatureFamily(StrEnum):
    """Signing strategy selected by an algorithm name."""

    HMAC = "hmac"
    RSA = "rsa"
    EC = "ec"
    NONE = "none"


_HASHES: dict[int, type[hashes.HashAlgorithm]] = {
    256: hashes.SHA256,
    384: hashes.SHA384,
    512: hashes.SHA512,
}


class AlgorithmSpec(BaseModel):
    """Signature family and SHA-2 digest width for one algorithm."""

    model_config = ConfigDict(frozen=True)

    name: Algorithm
    family: SignatureFamily
    digest_bits: int | None = None

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Return a fresh ``cryptography`` hash instance for this width."""
        if self.digest_bits is None:
            raise AlgorithmError(f"{self.name} has no digest")
        return _HASHES[self.digest_bits]()


class PEMKeyPair(BaseModel):
    """A PEM-encoded private/public keypair for RS* or ES* signing."""

    algorithm: Algorithm
    private_key_pem: str
    public_key_pem: str
