"""
Error kinds and exceptions raised while decoding a JWT.

Structural and JSON failures are raised as ``DecodeError`` subclasses and
abort decoding as a whole.  Signature problems are *not* exceptions; they are
reported through ``VerificationResult`` (see ``models``).
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorKind",
    "DecodeError",
    "MalformedTokenError",
    "Base64DecodeError",
    "InvalidHeaderJSONError",
    "InvalidPayloadJSONError",
]


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to the user."""

    MALFORMED_TOKEN = "malformed_token"
    BASE64_DECODE_ERROR = "base64_decode_error"
    INVALID_HEADER_JSON = "invalid_header_json"
    INVALID_PAYLOAD_JSON = "invalid_payload_json"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    SIGNATURE_MISMATCH = "signature_mismatch"
    MISSING_SECRET = "missing_secret"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.MALFORMED_TOKEN: "Invalid JWT format. Expected 3 parts separated by dots.",
    ErrorKind.BASE64_DECODE_ERROR: "Invalid base64url encoding.",
    ErrorKind.INVALID_HEADER_JSON: "Header is not a valid JSON object.",
    ErrorKind.INVALID_PAYLOAD_JSON: "Payload is not a valid JSON object.",
    ErrorKind.UNSUPPORTED_ALGORITHM: "Unsupported signing algorithm.",
    ErrorKind.SIGNATURE_MISMATCH: "Invalid signature.",
    ErrorKind.MISSING_SECRET: "No secret supplied; signature not verified.",
}


class DecodeError(Exception):
    """Raised when a JWT token cannot be decoded."""

    kind: ErrorKind = ErrorKind.MALFORMED_TOKEN

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = self.kind.message
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class MalformedTokenError(DecodeError):
    """The token does not have exactly three dot-separated segments."""

    kind = ErrorKind.MALFORMED_TOKEN


class Base64DecodeError(DecodeError):
    """A segment is not valid unpadded base64url."""

    kind = ErrorKind.BASE64_DECODE_ERROR


class InvalidHeaderJSONError(DecodeError):
    kind = ErrorKind.INVALID_HEADER_JSON


class InvalidPayloadJSONError(DecodeError):
    kind = ErrorKind.INVALID_PAYLOAD_JSON
