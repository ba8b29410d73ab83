"""Signature algorithm tags carried in the token header."""

from enum import Enum


class Algorithm(str, Enum):
    """Algorithms a token header can name in its ``alg`` field."""

    NONE = "none"  # Unsigned
    ES256 = "ES256"  # ECDSA P-256 with SHA-256
