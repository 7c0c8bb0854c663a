"""Tests for RS* and ES* signing with PEM keys."""

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from compact_jwt.core.errors import AlgorithmError, KeyMaterialError
from compact_jwt.crypto.pem_backend import PEMBackend
from compact_jwt.crypto.registry import resolve_algorithm
from compact_jwt.crypto.types import PEMKeyPair

MESSAGE = b"header.payload"


@pytest.fixture
def backend() -> PEMBackend:
    return PEMBackend()


class TestRSA:
    """Tests for RSA PKCS#1 v1.5 signatures."""

    @pytest.mark.parametrize("alg", ["RS256", "RS384", "RS512"])
    def test_sign_then_verify(
        self, backend: PEMBackend, rsa_keypair: PEMKeyPair, alg: str
    ) -> None:
        spec = resolve_algorithm(alg)
        signature = backend.sign(MESSAGE, rsa_keypair.private_key_pem, spec)
        assert len(signature) == 256
        assert backend.verify(MESSAGE, signature, rsa_keypair.public_key_pem, spec)

    def test_signature_is_pkcs1v15(
        self, backend: PEMBackend, rsa_keypair: PEMKeyPair
    ) -> None:
        signature = backend.sign(
            MESSAGE, rsa_keypair.private_key_pem, resolve_algorithm("RS256")
        )
        public_key = serialization.load_pem_public_key(rsa_keypair.public_key_pem.encode())
        assert isinstance(public_key, rsa.RSAPublicKey)
        public_key.verify(signature, MESSAGE, padding.PKCS1v15(), hashes.SHA256())

    def test_digest_width_matters(
        self, backend: PEMBackend, rsa_keypair: PEMKeyPair
    ) -> None:
        signature = backend.sign(
            MESSAGE, rsa_keypair.private_key_pem, resolve_algorithm("RS256")
        )
        assert not backend.verify(
            MESSAGE, signature, rsa_keypair.public_key_pem, resolve_algorithm("RS384")
        )

    def test_ec_key_rejected_for_rsa_algorithm(
        self, backend: PEMBackend, ec_keypairs: dict[str, PEMKeyPair]
    ) -> None:
        with pytest.raises(KeyMaterialError):
            backend.sign(
                MESSAGE, ec_keypairs["ES256"].private_key_pem, resolve_algorithm("RS256")
            )


class TestEC:
    """Tests for ECDSA signatures in JWS r||s form."""

    @pytest.mark.parametrize(
        ("alg", "size"), [("ES256", 64), ("ES384", 96), ("ES512", 132)]
    )
    def test_sign_produces_fixed_width_signature(
        self,
        backend: PEMBackend,
        ec_keypairs: dict[str, PEMKeyPair],
        alg: str,
        size: int,
    ) -> None:
        pair = ec_keypairs[alg]
        spec = resolve_algorithm(alg)
        signature = backend.sign(MESSAGE, pair.private_key_pem, spec)
        assert len(signature) == size
        assert backend.verify(MESSAGE, signature, pair.public_key_pem, spec)

    def test_raw_signature_matches_der_components(
        self, backend: PEMBackend, ec_keypairs: dict[str, PEMKeyPair]
    ) -> None:
        pair = ec_keypairs["ES256"]
        raw = backend.sign(MESSAGE, pair.private_key_pem, resolve_algorithm("ES256"))
        der = encode_dss_signature(
            int.from_bytes(raw[:32], "big"), int.from_bytes(raw[32:], "big")
        )
        public_key = serialization.load_pem_public_key(pair.public_key_pem.encode())
        assert isinstance(public_key, ec.EllipticCurvePublicKey)
        public_key.verify(der, MESSAGE, ec.ECDSA(hashes.SHA256()))

    def test_wrong_length_signature_rejected(
        self, backend: PEMBackend, ec_keypairs: dict[str, PEMKeyPair]
    ) -> None:
        pair = ec_keypairs["ES256"]
        assert not backend.verify(
            MESSAGE, b"invalid", pair.public_key_pem, resolve_algorithm("ES256")
        )

    def test_tampered_message_rejected(
        self, backend: PEMBackend, ec_keypairs: dict[str, PEMKeyPair]
    ) -> None:
        pair = ec_keypairs["ES384"]
        spec = resolve_algorithm("ES384")
        signature = backend.sign(MESSAGE, pair.private_key_pem, spec)
        assert not backend.verify(b"header.tampered", signature, pair.public_key_pem, spec)


class TestKeyParsing:
    """Tests for PEM parsing failures."""

    def test_garbage_private_key(self, backend: PEMBackend) -> None:
        with pytest.raises(KeyMaterialError):
            backend.sign(MESSAGE, "not a pem", resolve_algorithm("RS256"))

    def test_garbage_public_key(self, backend: PEMBackend) -> None:
        with pytest.raises(KeyMaterialError):
            backend.verify(MESSAGE, b"sig", "not a pem", resolve_algorithm("RS256"))

    def test_public_key_cannot_sign(
        self, backend: PEMBackend, rsa_keypair: PEMKeyPair
    ) -> None:
        with pytest.raises(KeyMaterialError):
            backend.sign(MESSAGE, rsa_keypair.public_key_pem, resolve_algorithm("RS256"))

    def test_encrypted_private_key_rejected(self, backend: PEMBackend) -> None:
        key = ec.generate_private_key(ec.SECP256R1())
        encrypted = key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.BestAvailableEncryption(b"passphrase"),
        )
        with pytest.raises(KeyMaterialError):
            backend.sign(MESSAGE, encrypted, resolve_algorithm("ES256"))

    def test_empty_signature_is_false(
        self, backend: PEMBackend, rsa_keypair: PEMKeyPair
    ) -> None:
        assert not backend.verify(
            MESSAGE, b"", rsa_keypair.public_key_pem, resolve_algorithm("RS256")
        )

    def test_hmac_algorithm_rejected(
        self, backend: PEMBackend, rsa_keypair: PEMKeyPair
    ) -> None:
        with pytest.raises(AlgorithmError):
            backend.sign(MESSAGE, rsa_keypair.private_key_pem, resolve_algorithm("HS256"))
