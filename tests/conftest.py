"""
Shared pytest fixtures for sigtoken tests.
"""

import pytest

from sigtoken import ES256Signer, ES256Verifier, KeyPair, Token, generate_keypair


@pytest.fixture
def keypair() -> KeyPair:
    """Generate a fresh P-256 keypair for testing."""
    return generate_keypair()


@pytest.fixture
def other_keypair() -> KeyPair:
    """An unrelated keypair, for wrong-key tests."""
    return generate_keypair()


@pytest.fixture
def signer(keypair: KeyPair) -> ES256Signer:
    """Create an ES256Signer with the test key."""
    return ES256Signer(keypair.private_key_jwk)


@pytest.fixture
def verifier(keypair: KeyPair) -> ES256Verifier:
    """Create an ES256Verifier with the test key."""
    return ES256Verifier(keypair.public_key_jwk)


@pytest.fixture
def sample_claims() -> dict:
    """Claims covering every JSON value kind."""
    return {
        "iss": "auth.example.com",
        "sub": "user-42",
        "exp": 86400,
        "ratio": 0.5,
        "admin": False,
        "nickname": None,
        "groups": ["staff", "ops"],
        "profile": {"name": "Bob", "langs": ["en", "de"]},
    }


@pytest.fixture
def token(sample_claims: dict) -> Token:
    """An unsigned token with sample claims and two scopes."""
    t = Token()
    for name, value in sample_claims.items():
        t.add_claim(name, value)
    t.add_scope("user:create")
    t.add_scope("user:delete")
    return t
