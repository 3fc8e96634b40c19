"""
HMAC signature verification for compact JWS tokens (HS256/HS384/HS512).

The expected signature is recomputed over the *original* header and payload
segments and compared to the token's signature segment in constant time.
Asymmetric algorithms and unsecured ("none") tokens are always rejected.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Callable, Union

from . import base64url
from .decoder import DecodedToken
from .errors import ErrorKind
from .models import VerificationResult

__all__ = ["SUPPORTED_ALGORITHMS", "hash_for_algorithm", "compute_signature", "verify"]

logger = logging.getLogger(__name__)

_HASHES: dict[str, Callable] = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}

SUPPORTED_ALGORITHMS = tuple(_HASHES)


def hash_for_algorithm(alg: object) -> Callable | None:
    """Return the hash constructor for an HMAC ``alg`` name, or None."""
    if not isinstance(alg, str):
        return None
    return _HASHES.get(alg)


def _secret_bytes(secret: Union[str, bytes]) -> bytes:
    # surrogateescape restores non-UTF-8 bytes from argv or the environment
    return secret if isinstance(secret, bytes) else secret.encode("utf-8", "surrogateescape")


def compute_signature(signing_input: bytes, secret: Union[str, bytes], alg: str) -> str:
    """Return the base64url HMAC of *signing_input* for a supported *alg*.

    Raises:
        ValueError: If *alg* is not an HMAC algorithm.
    """
    digestmod = hash_for_algorithm(alg)
    if digestmod is None:
        raise ValueError(f"Unsupported algorithm: {alg!r}")
    mac = hmac.new(_secret_bytes(secret), signing_input, digestmod).digest()
    return base64url.encode(mac)


def verify(token: DecodedToken, secret: Union[str, bytes]) -> VerificationResult:
    """Check *token*'s signature against *secret*.

    Returns VALID, or INVALID with ``UNSUPPORTED_ALGORITHM`` /
    ``SIGNATURE_MISMATCH``.  No state is kept between calls.
    """
    alg = token.header.get("alg")
    if hash_for_algorithm(alg) is None:
        logger.debug("Rejecting token with unsupported algorithm %r", alg)
        return VerificationResult.invalid(ErrorKind.UNSUPPORTED_ALGORITHM)

    expected = compute_signature(token.token.signing_input, secret, alg)
    # bytes operands: compare_digest rejects non-ASCII str
    actual = token.signature.encode("utf-8", "surrogatepass")
    if hmac.compare_digest(expected.encode("ascii"), actual):
        return VerificationResult.valid()
    logger.debug("Signature mismatch for %s token", alg)
    return VerificationResult.invalid(ErrorKind.SIGNATURE_MISMATCH)
