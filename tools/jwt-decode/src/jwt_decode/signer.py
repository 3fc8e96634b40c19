"""
Token signing (the inverse of ``verifier``), backed by PyJWT.

Used to produce example tokens and to cross-check the verifier.  Only the
HMAC algorithms the verifier accepts can be used here.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Mapping, Optional, Union

import jwt

from .orchestrator import current_time
from .verifier import SUPPORTED_ALGORITHMS

__all__ = ["EXAMPLE_SECRET", "EXAMPLE_CLAIMS", "sign_token", "generate_example"]

logger = logging.getLogger(__name__)

EXAMPLE_SECRET = "your-256-bit-secret"

EXAMPLE_CLAIMS = {
    "sub": "1234567890",
    "name": "John Doe",
    "admin": True,
}


def sign_token(
    claims: Mapping[str, Any],
    secret: Union[str, bytes],
    algorithm: str = "HS256",
    lifetime_seconds: Optional[int] = None,
    now: Optional[int] = None,
    headers: Optional[dict] = None,
) -> str:
    """Return a compact-serialized JWT for *claims*.

    ``iat`` is set to *now* (wall clock by default) unless already present;
    ``exp`` is set to ``iat + lifetime_seconds`` when a lifetime is given.

    Raises:
        ValueError: If *algorithm* is not HS256, HS384 or HS512.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(
            f"Unsupported algorithm: {algorithm!r} (expected one of {', '.join(SUPPORTED_ALGORITHMS)})"
        )

    payload = dict(claims)
    issued_at = current_time() if now is None else now
    payload.setdefault("iat", issued_at)
    if lifetime_seconds is not None:
        payload["exp"] = issued_at + lifetime_seconds

    token = jwt.encode(payload, secret, algorithm=algorithm, headers=headers)
    logger.debug("Signed %s token with %d claim(s)", algorithm, len(payload))
    return token


def generate_example(
    secret: str = EXAMPLE_SECRET,
    algorithm: str = "HS256",
    lifetime_seconds: int = 3600,
    now: Optional[int] = None,
) -> str:
    """Sign the demo claims (valid for one hour by default)."""
    # the demo secret is shorter than the HMAC digest; PyJWT warns about that
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return sign_token(EXAMPLE_CLAIMS, secret, algorithm, lifetime_seconds, now)
