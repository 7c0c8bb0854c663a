"""Compact JSON Web Token signing and verification."""

from compact_jwt.crypto.keys import (
    generate_ec_keypair,
    generate_hmac_secret,
    generate_rsa_keypair,
)
from compact_jwt.crypto.registry import SUPPORTED_ALGORITHMS
from compact_jwt.crypto.signatures import sign_hmac, sign_pem, verify_pem
from compact_jwt.crypto.types import Algorithm, PEMKeyPair
from compact_jwt.token.decoder import decode, decode_header
from compact_jwt.token.encoder import encode

__version__ = "0.1.0"

__all__ = [
    "SUPPORTED_ALGORITHMS",
    "Algorithm",
    "PEMKeyPair",
    "decode",
    "decode_header",
    "encode",
    "generate_ec_keypair",
    "generate_hmac_secret",
    "generate_rsa_keypair",
    "sign_hmac",
    "sign_pem",
    "verify_pem",
]
