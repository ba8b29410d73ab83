"""
Signer and Verifier capability contracts.

A new algorithm is added by implementing both contracts and registering them
in ``sigtoken.registry``; the Token type itself never changes.
"""

from abc import ABC, abstractmethod

from .algorithm import Algorithm


class Signer(ABC):
    """Produces raw signature bytes over a token's canonical input."""

    @abstractmethod
    def algorithm(self) -> Algorithm:
        """The algorithm tag written into the header of tokens this signer signs."""
        pass

    @abstractmethod
    def sign(self, canonical_input: str) -> bytes:
        """
        Sign the canonical input.

        Output length is fixed per algorithm but the value may differ between
        calls for randomized schemes.

        Raises:
            SigningError: If the backend cannot produce a signature.
        """
        pass


class Verifier(ABC):
    """Checks raw signature bytes against a token's canonical input."""

    @abstractmethod
    def algorithm(self) -> Algorithm:
        """The algorithm tag this verifier accepts."""
        pass

    @abstractmethod
    def verify(self, canonical_input: str, signature: bytes) -> bool:
        """Return True only for a valid signature. Never raises."""
        pass
