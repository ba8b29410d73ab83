"""
Algorithm dispatch.

Maps header algorithm tags to Signer/Verifier factories so a receiver can pick
the right verifier from a parsed token's header. ``Algorithm.NONE`` is never
registered: an unsigned-algorithm token cannot verify.
"""

import logging
import threading
from typing import Callable, Dict, Tuple

from .algorithm import Algorithm
from .es256 import ES256Signer, ES256Verifier
from .interfaces import Signer, Verifier
from .keys import KeyMaterial
from .token import Token

logger = logging.getLogger(__name__)

SignerFactory = Callable[[KeyMaterial], Signer]
VerifierFactory = Callable[[KeyMaterial], Verifier]

_lock = threading.RLock()
_algorithms: Dict[Algorithm, Tuple[SignerFactory, VerifierFactory]] = {
    Algorithm.ES256: (ES256Signer, ES256Verifier),
}


def register_algorithm(
    algorithm: Algorithm, signer_factory: SignerFactory, verifier_factory: VerifierFactory
) -> None:
    """
    Register (or replace) the implementation pair for an algorithm tag.

    Raises:
        ValueError: If ``algorithm`` is ``Algorithm.NONE``.
    """
    if algorithm is Algorithm.NONE:
        raise ValueError("Algorithm 'none' cannot have a signer or verifier")
    with _lock:
        _algorithms[algorithm] = (signer_factory, verifier_factory)
    logger.debug(f"Registered algorithm {algorithm.value}")


def _lookup(algorithm: Algorithm) -> Tuple[SignerFactory, VerifierFactory]:
    with _lock:
        pair = _algorithms.get(algorithm)
    if pair is None:
        raise ValueError(f"No implementation registered for algorithm {algorithm.value!r}")
    return pair


def signer_for(algorithm: Algorithm, private_key: KeyMaterial) -> Signer:
    """
    Build a Signer for ``algorithm``.

    Raises:
        ValueError: If the algorithm is unregistered or the key is invalid.
    """
    return _lookup(algorithm)[0](private_key)


def verifier_for(algorithm: Algorithm, public_key: KeyMaterial) -> Verifier:
    """
    Build a Verifier for ``algorithm``.

    Raises:
        ValueError: If the algorithm is unregistered or the key is invalid.
    """
    return _lookup(algorithm)[1](public_key)


def verify_token(token: Token, public_key: KeyMaterial) -> bool:
    """
    Verify ``token`` with the verifier its header's algorithm names.

    Returns:
        False for unsigned tokens, ``alg: none``, unregistered algorithms or
        unusable keys; otherwise the verifier's verdict.
    """
    if not token.is_signed:
        return False

    try:
        verifier = verifier_for(token.header.algorithm, public_key)
    except (TypeError, ValueError) as e:
        logger.debug(f"No verifier for token: {e}")
        return False

    return token.verify(verifier)
