"""
sigtoken Token - Claims container, signing and compact serialization.

A Token aggregates a Header, a body of named claims, an ordered list of
scopes and an optional signature. Wire form::

    b64url(header_json) "." b64url(body_json) "." b64url(signature)

The first two segments are the canonical input that signers sign and
verifiers check. Scopes live in their own field and are written to the body
under the reserved ``scope`` key.
"""

import copy
import logging
import math
from typing import Any, Dict, List, Optional, Tuple, Union

from .encoding import b64url_decode, b64url_encode, json_decode, json_encode
from .errors import AlreadySignedError, TokenFormatError, TokenStructureError
from .header import Header
from .interfaces import Signer, Verifier

logger = logging.getLogger(__name__)

SCOPE_CLAIM = "scope"

ClaimValue = Union[str, int, float, bool, None, List["ClaimValue"], Dict[str, "ClaimValue"]]


def _check_claim_value(value: Any, path: str) -> None:
    if value is None or isinstance(value, (str, bool, int)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeError(f"Claim {path!r} is not a finite number")
        return
    if isinstance(value, list):
        for i, item in enumerate(value):
            _check_claim_value(item, f"{path}[{i}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Claim {path!r} has non-string key {key!r}")
            _check_claim_value(item, f"{path}.{key}")
        return
    raise TypeError(f"Claim {path!r} is not JSON-compatible: {type(value).__name__}")


def canonical_input(header: Header, body: Dict[str, Any]) -> str:
    """
    Build the string that is signed and verified.

    Args:
        header: Token header.
        body: Full body mapping, including ``scope`` when present.

    Returns:
        ``b64url(json(header)) + "." + b64url(json(body))``
    """
    return f"{b64url_encode(json_encode(header.to_dict()))}.{b64url_encode(json_encode(body))}"


class Token:
    """
    A (potentially signed) bearer token.

    Example:
        >>> token = Token()
        >>> token.add_claim("iss", "auth.example.com")
        >>> token.add_scope("user:create")
        >>> token.sign(ES256Signer(keys.private_key_jwk))
        >>> wire = token.serialize()
        >>>
        >>> received = Token.parse(wire)
        >>> received.verify(ES256Verifier(keys.public_key_jwk))
        True
    """

    def __init__(
        self,
        header: Optional[Header] = None,
        claims: Optional[Dict[str, ClaimValue]] = None,
        scopes: Optional[List[str]] = None,
        signature: Optional[bytes] = None,
    ):
        """
        Create a token. With no arguments the token is empty and unsigned.

        Args:
            header: Header to start from (default: ``Header()``).
            claims: Initial generic claims; a ``scope`` entry is ignored.
            scopes: Initial scope list, stored as given. ``None`` means the
                body carries no ``scope`` key.
            signature: Raw signature bytes. Any non-None value, including
                ``b""``, marks the token as signed.
        """
        self._header = header if header is not None else Header()
        self._claims: Dict[str, ClaimValue] = {}
        self._scopes: Optional[List[str]] = list(scopes) if scopes is not None else None
        self._signature = bytes(signature) if signature is not None else None

        for name, value in (claims or {}).items():
            if name == SCOPE_CLAIM:
                continue
            _check_claim_value(value, name)
            self._claims[name] = copy.deepcopy(value)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def header(self) -> Header:
        return self._header

    @property
    def signature(self) -> Optional[bytes]:
        return self._signature

    @property
    def is_signed(self) -> bool:
        """True when a signature is present. Says nothing about its validity."""
        return self._signature is not None

    @property
    def claims(self) -> Dict[str, ClaimValue]:
        """Deep copy of the generic claims (never includes ``scope``)."""
        return copy.deepcopy(self._claims)

    @property
    def scopes(self) -> Tuple[str, ...]:
        """Current scopes in storage order."""
        return tuple(self._scopes or ())

    @property
    def body(self) -> Dict[str, Any]:
        """The full body as it is serialized, ``scope`` included when present."""
        body: Dict[str, Any] = copy.deepcopy(self._claims)
        if self._scopes is not None:
            body[SCOPE_CLAIM] = list(self._scopes)
        return body

    # =========================================================================
    # Claims
    # =========================================================================

    def add_claim(self, name: str, value: ClaimValue) -> None:
        """
        Set a claim, overwriting any previous value.

        The reserved ``scope`` name is silently ignored. Editing claims of a
        signed token is allowed but the existing signature no longer covers
        the body.

        Raises:
            TypeError: If ``value`` is not JSON-compatible.
        """
        if name == SCOPE_CLAIM:
            logger.debug("Ignoring add_claim for reserved 'scope' claim")
            return

        _check_claim_value(value, name)
        if self.is_signed:
            logger.warning(f"Claim {name!r} changed on a signed token; signature is now stale")
        self._claims[name] = copy.deepcopy(value)

    def remove_claim(self, name: str) -> None:
        """Remove a claim if present. The reserved ``scope`` name is ignored."""
        if name == SCOPE_CLAIM:
            logger.debug("Ignoring remove_claim for reserved 'scope' claim")
            return

        if name in self._claims:
            if self.is_signed:
                logger.warning(f"Claim {name!r} removed from a signed token; signature is now stale")
            del self._claims[name]

    def get_claim(self, name: str) -> Optional[ClaimValue]:
        """Return a claim value, or None when absent or reserved."""
        if name == SCOPE_CLAIM:
            return None
        return copy.deepcopy(self._claims.get(name))

    def get_string_claim(self, name: str) -> Optional[str]:
        """Return a claim only if it is a string."""
        value = self.get_claim(name)
        return value if isinstance(value, str) else None

    # =========================================================================
    # Scopes
    # =========================================================================

    def add_scope(self, scope: str) -> None:
        """Append a scope (whitespace-trimmed). No-op once signed; duplicates allowed."""
        if self.is_signed:
            logger.debug(f"Ignoring add_scope({scope!r}) on signed token")
            return

        if self._scopes is None:
            self._scopes = []
        self._scopes.append(scope.strip())

    def remove_scope(self, scope: str) -> None:
        """
        Remove the first matching scope (whitespace-trimmed). No-op once signed.

        The last scope is swapped into the removed slot, so the remaining
        order is not preserved.
        """
        if self.is_signed:
            logger.debug(f"Ignoring remove_scope({scope!r}) on signed token")
            return

        if not self._scopes:
            return

        scope = scope.strip()
        for i, value in enumerate(self._scopes):
            if value == scope:
                self._scopes[i] = self._scopes[-1]
                self._scopes.pop()
                break

    def has_scope(self, scope: str) -> bool:
        """Exact membership test; the query is not trimmed."""
        return scope in (self._scopes or ())

    # =========================================================================
    # Signing and verification
    # =========================================================================

    def sign(self, signer: Signer) -> None:
        """
        Sign the token. This is the only way a token becomes signed.

        The header is rebuilt with the signer's algorithm before the canonical
        input is computed. If the signer fails the token is left untouched.

        Raises:
            AlreadySignedError: If the token already carries a signature.
            SigningError: Propagated from the signer.
        """
        if self.is_signed:
            raise AlreadySignedError()

        header = Header(algorithm=signer.algorithm(), type=self._header.type)
        signature = signer.sign(canonical_input(header, self.body))

        self._header = header
        self._signature = signature
        logger.debug(f"Signed token with {header.algorithm.value} ({len(signature)} byte signature)")

    def verify(self, verifier: Verifier) -> bool:
        """
        Check the signature against the current header and body.

        Returns:
            False for unsigned tokens or on any failure; otherwise the
            verifier's verdict.
        """
        if not self.is_signed:
            return False

        try:
            data = canonical_input(self._header, self.body)
        except (TypeError, ValueError) as e:
            logger.debug(f"Could not build canonical input: {e}")
            return False

        return verifier.verify(data, self._signature)

    # =========================================================================
    # Wire format
    # =========================================================================

    def serialize(self) -> str:
        """Compact form. Always three segments; the last is empty when unsigned."""
        return f"{canonical_input(self._header, self.body)}.{b64url_encode(self._signature or b'')}"

    @classmethod
    def parse(cls, text: str) -> "Token":
        """
        Reconstruct a token from its compact form. The signature is not verified.

        Raises:
            TokenStructureError: If the text does not have exactly 3 segments.
            TokenDecodeError: If a segment is not unpadded base64url.
            TokenFormatError: If the header or body is not JSON of the expected shape.
        """
        parts = text.split(".")
        if len(parts) != 3:
            raise TokenStructureError(
                f"Token must have exactly 3 dot-separated segments, got {len(parts)}"
            )

        raw_header, raw_body, signature = (b64url_decode(part) for part in parts)

        header = Header.from_dict(json_decode(raw_header, "header"))

        body = json_decode(raw_body, "body")
        if not isinstance(body, dict):
            raise TokenFormatError("Body must be a JSON object")

        scopes = None
        if SCOPE_CLAIM in body:
            scopes = body.pop(SCOPE_CLAIM)
            if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
                raise TokenFormatError("Body 'scope' must be an array of strings")

        try:
            return cls(header=header, claims=body, scopes=scopes, signature=signature)
        except TypeError as e:
            raise TokenFormatError(f"Invalid body claim: {e}") from e
        except RecursionError as e:
            raise TokenFormatError("Body is nested too deeply") from e

    def __repr__(self) -> str:
        return (
            f"Token(alg={self._header.algorithm.value!r}, claims={sorted(self._claims)}, "
            f"scopes={list(self.scopes)}, signed={self.is_signed})"
        )


def parse(text: str) -> Token:
    """Module-level alias for :meth:`Token.parse`."""
    return Token.parse(text)
