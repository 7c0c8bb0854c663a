"""Internal failure taxonomy for token encoding and verification.

These exceptions never cross the public ``encode``/``decode`` boundary.
They exist so that internal helpers can bail out early and so that the
boundary can log which category of failure occurred.
"""


class TokenError(Exception):
    """Base class for every token pipeline failure."""


class ShapeError(TokenError):
    """The token is not three dot-separated segments."""


class DecodeError(TokenError):
    """A segment is not valid base64url or not valid JSON."""


class EncodeError(TokenError):
    """The header or payload could not be serialized or signed."""


class AlgorithmError(TokenError):
    """The algorithm name is outside the supported set."""


class KeyMaterialError(TokenError):
    """Key material could not be parsed or does not fit the algorithm."""


class SignatureMismatchError(TokenError):
    """The presented signature does not match the signing input."""


class PolicyError(TokenError):
    """The token was rejected by the caller's algorithm policy."""
