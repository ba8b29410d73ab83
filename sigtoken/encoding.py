"""
Encoding helpers for the compact token form.

Segments use the URL-safe base64 alphabet without ``=`` padding. JSON is
emitted compactly with sorted keys so that the canonical input of a parsed
token re-serializes to the same bytes it was signed over.
"""

import base64
import binascii
import json
import math
import re
from typing import Any

from .errors import TokenDecodeError, TokenFormatError

_B64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """
    Decode unpadded base64url text.

    Args:
        segment: A single token segment.

    Returns:
        The decoded bytes (empty for an empty segment).

    Raises:
        TokenDecodeError: If the segment contains padding, characters outside
            the URL-safe alphabet, or has an impossible length.
    """
    if not _B64URL_RE.match(segment) or len(segment) % 4 == 1:
        raise TokenDecodeError(f"Invalid base64url segment: {segment[:32]!r}")

    padded = segment + "=" * (-len(segment) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise TokenDecodeError(f"Invalid base64url segment: {e}") from e


def json_encode(value: Any) -> bytes:
    """Serialize a JSON-compatible value to compact UTF-8 bytes."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def _parse_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number {literal} is out of range")
    return value


def json_decode(raw: bytes, what: str) -> Any:
    """
    Parse UTF-8 JSON bytes from a decoded segment.

    Numbers that overflow to infinity are rejected like the ``NaN`` and
    ``Infinity`` literals.

    Raises:
        TokenFormatError: If the bytes are not valid UTF-8 JSON, hold a
            non-finite number, or nest too deeply to decode.
    """
    try:
        return json.loads(
            raw.decode("utf-8"), parse_constant=_reject_constant, parse_float=_parse_float
        )
    except RecursionError as e:
        raise TokenFormatError(f"Invalid {what} JSON: nested too deeply") from e
    except ValueError as e:
        raise TokenFormatError(f"Invalid {what} JSON: {e}") from e
