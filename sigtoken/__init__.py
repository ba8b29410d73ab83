"""
sigtoken - Minimal signed bearer tokens with pluggable algorithms.

This package provides a claims container with scope handling, a compact
three-segment wire format, and ES256 (ECDSA P-256 / SHA-256) signing.
"""

__version__ = "0.4.0"

from .algorithm import Algorithm
from .header import Header
from .interfaces import Signer, Verifier
from .es256 import ES256Signer, ES256Verifier
from .token import Token, ClaimValue, canonical_input, parse
from .errors import (
    TokenError,
    TokenStructureError,
    TokenDecodeError,
    TokenFormatError,
    AlreadySignedError,
    SigningError,
)

# Key management
from .keys import generate_keypair, load_private_key, load_public_key, KeyPair
from .registry import signer_for, verifier_for, verify_token, register_algorithm


__all__ = [
    "__version__",
    # Core
    "Algorithm",
    "Header",
    "Token",
    "ClaimValue",
    "canonical_input",
    "parse",
    # Algorithms
    "Signer",
    "Verifier",
    "ES256Signer",
    "ES256Verifier",
    "signer_for",
    "verifier_for",
    "verify_token",
    "register_algorithm",
    # Errors
    "TokenError",
    "TokenStructureError",
    "TokenDecodeError",
    "TokenFormatError",
    "AlreadySignedError",
    "SigningError",
    # Key management
    "generate_keypair",
    "load_private_key",
    "load_public_key",
    "KeyPair",
]
