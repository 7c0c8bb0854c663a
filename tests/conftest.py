"""Shared test fixtures for compact-jwt."""

from collections.abc import Iterator

import pytest

from compact_jwt.core.settings import get_settings
from compact_jwt.crypto.keys import generate_ec_keypair, generate_rsa_keypair
from compact_jwt.crypto.types import PEMKeyPair

CLAIMS = {"sub": "1234567890", "name": "John Doe", "admin": True}
HMAC_SECRET = "secret"


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Give every test settings built from a clean environment."""
    monkeypatch.delenv("COMPACT_JWT_DEFAULT_ALGORITHM", raising=False)
    monkeypatch.delenv("COMPACT_JWT_MAX_TOKEN_LENGTH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def claims() -> dict[str, object]:
    """The sample claim set used across the suite."""
    return dict(CLAIMS)


@pytest.fixture(scope="session")
def rsa_keypair() -> PEMKeyPair:
    """One RSA-2048 keypair shared by every RS* test."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def ec_keypairs() -> dict[str, PEMKeyPair]:
    """EC keypairs on the curve matching each ES* algorithm."""
    return {alg: generate_ec_keypair(alg) for alg in ("ES256", "ES384", "ES512")}


@pytest.fixture(scope="session")
def signing_keys(
    rsa_keypair: PEMKeyPair, ec_keypairs: dict[str, PEMKeyPair]
) -> dict[str, tuple[str, str]]:
    """(signing key, verification key) for every signed algorithm."""
    keys: dict[str, tuple[str, str]] = {
        alg: (HMAC_SECRET, HMAC_SECRET) for alg in ("HS256", "HS384", "HS512")
    }
    for alg in ("RS256", "RS384", "RS512"):
        keys[alg] = (rsa_keypair.private_key_pem, rsa_keypair.public_key_pem)
    for alg, pair in ec_keypairs.items():
        keys[alg] = (pair.private_key_pem, pair.public_key_pem)
    return keys
