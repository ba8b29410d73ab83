"""
sigtoken ES256 - ECDSA over P-256 with SHA-256.

Signatures use the raw fixed-width JWS layout: ``r`` and ``s`` as 32-byte
big-endian integers, concatenated into 64 bytes. There is no DER wrapping on
the wire; ``cryptography`` speaks DER, so both directions convert at the edge.
"""

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .algorithm import Algorithm
from .errors import SigningError
from .interfaces import Signer, Verifier
from .keys import KeyMaterial, load_private_key, load_public_key

logger = logging.getLogger(__name__)

COORDINATE_SIZE = 32
SIGNATURE_SIZE = 2 * COORDINATE_SIZE


class ES256Signer(Signer):
    """
    Signs canonical token input with a P-256 private key.

    ECDSA is randomized: two signatures over the same input differ, but both
    are exactly 64 bytes and both verify.

    Example:
        >>> keys = generate_keypair()
        >>> signer = ES256Signer(keys.private_key_jwk)
        >>> token.sign(signer)
    """

    def __init__(self, private_key: KeyMaterial):
        """
        Initialize the signer.

        Args:
            private_key: P-256 private key as JWK JSON, PEM, jwcrypto JWK or
                ``cryptography`` key object.

        Raises:
            ValueError: If the key is missing, public-only, or on another curve.
        """
        if not private_key:
            raise ValueError("ES256Signer requires 'private_key'")
        self._key = load_private_key(private_key)

    def algorithm(self) -> Algorithm:
        return Algorithm.ES256

    def sign(self, canonical_input: str) -> bytes:
        """
        Sign ``canonical_input`` and return the 64-byte ``r || s`` signature.

        Raises:
            SigningError: If the backend fails (e.g. no entropy available).
        """
        try:
            der = self._key.sign(canonical_input.encode("utf-8"), ec.ECDSA(hashes.SHA256()))
            r, s = decode_dss_signature(der)
        except Exception as e:
            raise SigningError(f"ES256 signing failed: {e}") from e

        return r.to_bytes(COORDINATE_SIZE, "big") + s.to_bytes(COORDINATE_SIZE, "big")

    def public_key(self) -> ec.EllipticCurvePublicKey:
        """The public half of the signing key."""
        return self._key.public_key()


class ES256Verifier(Verifier):
    """Verifies 64-byte ES256 signatures with a P-256 public key."""

    def __init__(self, public_key: KeyMaterial):
        """
        Initialize the verifier.

        Args:
            public_key: P-256 public key (private keys are reduced to their
                public half).

        Raises:
            ValueError: If the key is missing or on another curve.
        """
        if not public_key:
            raise ValueError("ES256Verifier requires 'public_key'")
        self._key = load_public_key(public_key)

    def algorithm(self) -> Algorithm:
        return Algorithm.ES256

    def verify(self, canonical_input: str, signature: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE:
            logger.debug(f"Rejecting ES256 signature of length {len(signature)}")
            return False

        r = int.from_bytes(signature[:COORDINATE_SIZE], "big")
        s = int.from_bytes(signature[COORDINATE_SIZE:], "big")

        try:
            der = encode_dss_signature(r, s)
            self._key.verify(der, canonical_input.encode("utf-8"), ec.ECDSA(hashes.SHA256()))
            return True
        except InvalidSignature:
            return False
        except Exception as e:
            logger.debug(f"ES256 verification error: {e}")
            return False
