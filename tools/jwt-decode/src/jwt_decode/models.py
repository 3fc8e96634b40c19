"""
Shared data models used across the jwt-decode tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .errors import DecodeError, ErrorKind

if TYPE_CHECKING:
    from .decoder import DecodedToken

__all__ = [
    "Token",
    "VerificationStatus",
    "VerificationResult",
    "ExpiryState",
    "VerificationReport",
]


# ------------------------------------------------------------------
# Raw token
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    """The three base64url segments of a compact-serialized JWT, verbatim."""
    header_segment: str
    payload_segment: str
    signature_segment: str

    @property
    def signing_input(self) -> bytes:
        """Bytes the MAC is computed over: ``header.payload`` as received."""
        return f"{self.header_segment}.{self.payload_segment}".encode("ascii")

    def __str__(self) -> str:
        return f"{self.header_segment}.{self.payload_segment}.{self.signature_segment}"


# ------------------------------------------------------------------
# Verification outcome
# ------------------------------------------------------------------

class VerificationStatus(str, Enum):
    UNVERIFIED = "unverified"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a signature check.

    ``reason`` is only set for INVALID results, and for UNVERIFIED results
    caused by a missing secret (``ErrorKind.MISSING_SECRET``).
    """
    status: VerificationStatus
    reason: Optional[ErrorKind] = None

    @classmethod
    def unverified(cls, reason: Optional[ErrorKind] = None) -> "VerificationResult":
        return cls(VerificationStatus.UNVERIFIED, reason)

    @classmethod
    def valid(cls) -> "VerificationResult":
        return cls(VerificationStatus.VALID)

    @classmethod
    def invalid(cls, reason: ErrorKind) -> "VerificationResult":
        return cls(VerificationStatus.INVALID, reason)

    @property
    def is_valid(self) -> bool:
        return self.status is VerificationStatus.VALID

    @property
    def message(self) -> str:
        if self.status is VerificationStatus.VALID:
            return "Signature verified."
        if self.reason is not None:
            return self.reason.message
        return "Signature not verified."


# ------------------------------------------------------------------
# Time-based validity
# ------------------------------------------------------------------

@dataclass(frozen=True)
class ExpiryState:
    """Time-based validity of a token at ``now`` (Unix seconds)."""
    now: int
    expires_at: Optional[int] = None
    not_before: Optional[int] = None
    issued_at: Optional[int] = None
    expired: bool = False
    not_yet_valid: bool = False


# ------------------------------------------------------------------
# Orchestrator output
# ------------------------------------------------------------------

@dataclass(frozen=True)
class VerificationReport:
    """Everything known about one input string.

    Exactly one of ``decoded`` / ``error`` is set.  ``verification`` and
    ``expiry`` are independent facts and are never folded together.
    """
    decoded: Optional["DecodedToken"]
    verification: VerificationResult
    expiry: Optional[ExpiryState] = None
    error: Optional[DecodeError] = None
    sequence: int = 0

    @property
    def ok(self) -> bool:
        """True when decoding succeeded and the signature was not rejected."""
        return self.error is None and self.verification.status is not VerificationStatus.INVALID
