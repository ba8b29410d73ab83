# sigtoken/config.py
"""
Centralized configuration for sigtoken.

All configurable values are read from environment variables with sensible defaults.

Usage:
    from sigtoken.config import DEFAULT_TOKEN_TYPE

    header = Header(Algorithm.NONE, DEFAULT_TOKEN_TYPE)

Environment Variables:
    SIGTOKEN_TOKEN_TYPE: Value of the ``typ`` header for new tokens (default: JWT)
    SIGTOKEN_PRIVATE_KEY: Private key (JWK JSON or PEM) used by ``sigtoken issue``
    SIGTOKEN_PUBLIC_KEY: Public key (JWK JSON or PEM) used by ``sigtoken verify``
"""

import os
from typing import Final

# =============================================================================
# Token Defaults
# =============================================================================

# Type tag written into the header of every newly created token
DEFAULT_TOKEN_TYPE: Final[str] = os.getenv("SIGTOKEN_TOKEN_TYPE", "JWT")

# =============================================================================
# CLI Key Sources
# =============================================================================

PRIVATE_KEY_ENV: Final[str] = "SIGTOKEN_PRIVATE_KEY"
PUBLIC_KEY_ENV: Final[str] = "SIGTOKEN_PUBLIC_KEY"


def get_private_key() -> str:
    """Private key material from the environment, or an empty string."""
    return os.environ.get(PRIVATE_KEY_ENV, "")


def get_public_key() -> str:
    """Public key material from the environment, or an empty string."""
    return os.environ.get(PUBLIC_KEY_ENV, "")


# =============================================================================
# Configuration Summary (for debugging)
# =============================================================================

def print_config() -> None:
    """Print current configuration (useful for debugging)."""
    print("sigtoken Configuration:")
    print(f"  DEFAULT_TOKEN_TYPE: {DEFAULT_TOKEN_TYPE}")
    print(f"  {PRIVATE_KEY_ENV}: {'set' if get_private_key() else 'unset'}")
    print(f"  {PUBLIC_KEY_ENV}:  {'set' if get_public_key() else 'unset'}")


if __name__ == "__main__":
    print_config()
