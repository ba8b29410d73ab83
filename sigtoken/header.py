"""Token header: algorithm tag plus token type."""

from dataclasses import dataclass, field
from typing import Any, Dict

from . import config
from .algorithm import Algorithm
from .errors import TokenFormatError


@dataclass(frozen=True)
class Header:
    """
    Immutable token header.

    Serialized as ``{"alg": ..., "typ": ...}``. Signing replaces the header
    wholesale; it is never edited in place.
    """

    algorithm: Algorithm = Algorithm.NONE
    type: str = field(default_factory=lambda: config.DEFAULT_TOKEN_TYPE)

    def to_dict(self) -> Dict[str, Any]:
        return {"alg": self.algorithm.value, "typ": self.type}

    @classmethod
    def from_dict(cls, data: Any) -> "Header":
        """
        Build a Header from decoded header JSON.

        Raises:
            TokenFormatError: If the object lacks a known ``alg`` or a string ``typ``.
        """
        if not isinstance(data, dict):
            raise TokenFormatError("Header must be a JSON object")

        alg = data.get("alg")
        typ = data.get("typ")

        try:
            algorithm = Algorithm(alg)
        except ValueError:
            raise TokenFormatError(f"Unsupported header algorithm: {alg!r}")

        if not isinstance(typ, str):
            raise TokenFormatError("Header 'typ' must be a string")

        return cls(algorithm=algorithm, type=typ)
