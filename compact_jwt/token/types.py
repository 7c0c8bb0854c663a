"""Type definitions for compact token parsing."""

from pydantic import BaseModel, ConfigDict

from compact_jwt.core.errors import DecodeError, ShapeError
from compact_jwt.crypto.base64url import is_b64url

TOKEN_TYPE = "JWT"


class TokenSegments(BaseModel):
    """The three raw base64url segments of a compact token."""

    model_config = ConfigDict(frozen=True)

    header: str
    payload: str
    signature: str

    @property
    def signing_input(self) -> bytes:
        """Bytes covered by the signature: ``header.payload``."""
        return f"{self.header}.{self.payload}".encode("ascii")

    @classmethod
    def split(cls, token: str) -> "TokenSegments":
        """Split on the first two dots; the signature keeps any remainder.

        Every segment must be base64url text, so a signature segment that
        itself contains a dot is rejected here.
        """
        header, sep1, rest = token.partition(".")
        payload, sep2, signature = rest.partition(".")
        if not sep1 or not sep2:
            raise ShapeError("token does not have three segments")
        if not all(is_b64url(part) for part in (header, payload, signature)):
            raise DecodeError("token segment contains characters outside base64url")
        return cls(header=header, payload=payload, signature=signature)
