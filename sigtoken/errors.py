"""
sigtoken errors.

Every error raised by parsing or signing derives from TokenError, which is
itself a ValueError so callers that already guard token handling with
``except ValueError`` keep working. Verification never raises.
"""


class TokenError(ValueError):
    """Base exception for sigtoken errors."""

    pass


class TokenStructureError(TokenError):
    """Raised when wire text does not split into exactly three segments."""

    def __init__(self, message: str = "Token must have exactly 3 dot-separated segments"):
        super().__init__(message)


class TokenDecodeError(TokenError):
    """Raised when a segment is not valid unpadded base64url."""

    pass


class TokenFormatError(TokenError):
    """Raised when a decoded segment is not JSON of the expected shape."""

    pass


class AlreadySignedError(TokenError):
    """Raised when signing a token that already carries a signature."""

    def __init__(self, message: str = "Token is already signed and cannot be signed again"):
        super().__init__(message)


class SigningError(TokenError):
    """Raised when the cryptographic backend fails to produce a signature."""

    pass
