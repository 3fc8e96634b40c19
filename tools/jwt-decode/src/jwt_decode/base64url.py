"""
Base64url codec (RFC 4648 section 5, unpadded as used by JWS).

Operates on raw bytes only.  Text interpretation (UTF-8) happens at the
JSON boundary in ``decoder``.
"""

from __future__ import annotations

import base64
import binascii
import re

from .errors import Base64DecodeError

__all__ = ["encode", "decode"]

_ALPHABET_RE = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode *data* with the URL-safe alphabet and strip ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _add_base64_padding(data: str) -> str:
    """Add padding characters for base64 decoding."""
    padding = len(data) % 4
    if padding:
        data += "=" * (4 - padding)
    return data


def decode(segment: str) -> bytes:
    """Decode an unpadded base64url *segment* into bytes.

    Raises:
        Base64DecodeError: If the segment contains characters outside the
            base64url alphabet or has an impossible length.
    """
    if not _ALPHABET_RE.fullmatch(segment):
        raise Base64DecodeError("Segment contains characters outside the base64url alphabet.")
    if len(segment) % 4 == 1:
        raise Base64DecodeError(f"Segment length {len(segment)} is not valid base64url.")

    b64 = _add_base64_padding(segment).replace("-", "+").replace("_", "/")
    try:
        return base64.b64decode(b64, validate=True)
    except binascii.Error as exc:
        raise Base64DecodeError(str(exc)) from exc
