"""
Core JWT decoding logic.

Splits a compact-serialized token into its three segments and decodes the
header and payload into JSON objects.  The signature segment is kept as
base64url text for ``verifier``.  Decoding is all-or-nothing: either a
complete ``DecodedToken`` is returned or a ``DecodeError`` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from . import base64url
from .claims import Claims
from .errors import (
    Base64DecodeError,
    DecodeError,
    InvalidHeaderJSONError,
    InvalidPayloadJSONError,
    MalformedTokenError,
)
from .models import Token

__all__ = ["DecodedToken", "DecodeError", "parse", "decode_token", "split_token"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedToken:
    """Holds the raw segments plus the decoded header and payload."""

    token: Token
    header: dict
    payload: dict

    @property
    def signature(self) -> str:
        """Signature segment, still base64url encoded."""
        return self.token.signature_segment

    @property
    def claims(self) -> Claims:
        return Claims(self.payload)

    @property
    def algorithm(self) -> Optional[str]:
        alg = self.header.get("alg")
        return alg if isinstance(alg, str) else None


def _reject_constant(value: str) -> Any:
    raise ValueError(f"non-finite number {value} is not valid JSON")


def _decode_segment(segment: str, label: str, error_cls: type[DecodeError]) -> dict:
    """Decode a single base64url-encoded JWT segment into a dict."""
    try:
        raw = base64url.decode(segment)
    except Base64DecodeError as exc:
        raise Base64DecodeError(f"Could not decode {label}: {exc.detail}") from exc

    try:
        text = raw.decode("utf-8")
        value = json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise error_cls(f"Could not parse {label}: {exc}") from exc

    if not isinstance(value, dict):
        raise error_cls(f"Expected a JSON object in {label}, got {type(value).__name__}.")
    return value


def split_token(token: str) -> Token:
    """Split *token* into its three raw segments without decoding them.

    Raises:
        MalformedTokenError: If the token does not have exactly three parts.
    """
    token = token.strip()
    parts = token.split(".") if token else []
    if len(parts) != 3:
        raise MalformedTokenError(f"Got {len(parts)} part(s).")
    return Token(header_segment=parts[0], payload_segment=parts[1], signature_segment=parts[2])


def parse(token: str) -> DecodedToken:
    """
    Decode a JWT token string into its header, payload and raw signature.

    Signature verification is **not** performed here.

    Raises:
        DecodeError: If the token is malformed or cannot be decoded.
    """
    raw = split_token(token)
    header = _decode_segment(raw.header_segment, "header", InvalidHeaderJSONError)
    payload = _decode_segment(raw.payload_segment, "payload", InvalidPayloadJSONError)
    logger.debug("Decoded token: alg=%r, %d payload claim(s)", header.get("alg"), len(payload))
    return DecodedToken(token=raw, header=header, payload=payload)


# Name kept from the decode-only version of the tool.
decode_token = parse
