"""
Unit tests for algorithm dispatch.
"""

import pytest

from sigtoken import (
    Algorithm,
    ES256Signer,
    ES256Verifier,
    Header,
    Token,
    register_algorithm,
    signer_for,
    verifier_for,
    verify_token,
)


class TestFactories:
    """Tests for signer_for() and verifier_for()."""

    def test_es256_pair(self, keypair):
        """ES256 resolves to the ES256 implementations."""
        assert isinstance(signer_for(Algorithm.ES256, keypair.private_key_jwk), ES256Signer)
        assert isinstance(verifier_for(Algorithm.ES256, keypair.public_key_jwk), ES256Verifier)

    def test_none_has_no_implementation(self, keypair):
        """The none algorithm cannot be resolved."""
        with pytest.raises(ValueError, match="none"):
            verifier_for(Algorithm.NONE, keypair.public_key_jwk)

    def test_none_cannot_be_registered(self):
        """register_algorithm() refuses the none algorithm."""
        with pytest.raises(ValueError):
            register_algorithm(Algorithm.NONE, ES256Signer, ES256Verifier)


class TestVerifyToken:
    """Tests for verify_token()."""

    def test_valid_token(self, token, keypair):
        """A signed token verifies through its header's algorithm."""
        token.sign(signer_for(Algorithm.ES256, keypair.private_key_jwk))
        received = Token.parse(token.serialize())
        assert verify_token(received, keypair.public_key_jwk) is True

    def test_unsigned_token(self, token, keypair):
        """Unsigned tokens never verify."""
        assert verify_token(token, keypair.public_key_jwk) is False

    def test_alg_none_with_signature_rejected(self, keypair):
        """A token claiming alg none does not verify, whatever its signature."""
        token = Token(header=Header(Algorithm.NONE, "JWT"), signature=b"")
        assert verify_token(token, keypair.public_key_jwk) is False

    def test_downgraded_header_rejected(self, token, signer, keypair):
        """Rewriting alg to none on a signed token does not bypass verification."""
        token.sign(signer)
        downgraded = Token(
            header=Header(Algorithm.NONE, "JWT"),
            claims=token.claims,
            scopes=list(token.scopes),
            signature=token.signature,
        )
        assert verify_token(downgraded, keypair.public_key_jwk) is False

    def test_wrong_key(self, token, signer, other_keypair):
        """A different key does not verify."""
        token.sign(signer)
        assert verify_token(token, other_keypair.public_key_jwk) is False

    def test_unusable_key(self, token, signer):
        """An unparseable key yields False instead of raising."""
        token.sign(signer)
        assert verify_token(token, "not-a-key") is False
