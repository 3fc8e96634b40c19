"""
Typed view over a decoded JWT payload.

Payload content is untrusted, so every extractor tolerates type mismatches:
a registered claim with the wrong JSON type is treated as absent rather than
raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional

from .models import ExpiryState

__all__ = ["Claims", "CLAIM_LABELS"]

logger = logging.getLogger(__name__)

# Registered claims shown in the summary, in display order.
CLAIM_LABELS = {
    "iat": "Issued At",
    "exp": "Expires At",
    "nbf": "Not Before",
    "iss": "Issuer",
    "sub": "Subject",
    "aud": "Audience",
}

_TIMESTAMP_CLAIMS = ("iat", "exp", "nbf")


class Claims(Mapping):
    """Read-only mapping over the payload with well-known claim accessors."""

    def __init__(self, payload: Mapping[str, Any]) -> None:
        self._payload = MappingProxyType(dict(payload))

    def __getitem__(self, key: str) -> Any:
        return self._payload[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._payload)

    def __len__(self) -> int:
        return len(self._payload)

    def __repr__(self) -> str:
        return f"Claims({dict(self._payload)!r})"

    # ------------------------------------------------------------------
    # Extractors
    # ------------------------------------------------------------------

    def get_timestamp_claim(self, name: str) -> Optional[int]:
        """Return a NumericDate claim as whole Unix seconds, or None."""
        value = self._payload.get(name)
        # bool is an int subclass but never a timestamp
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            if value is not None:
                logger.debug("Ignoring non-numeric %r claim", name)
            return None
        if isinstance(value, float):
            if not math.isfinite(value):
                return None
            return math.floor(value)
        return value

    def get_string_claim(self, name: str) -> Optional[str]:
        value = self._payload.get(name)
        return value if isinstance(value, str) else None

    def get_string_list_claim(self, name: str) -> Optional[tuple[str, ...]]:
        """Return a string-or-array claim (e.g. ``aud``) as a tuple of strings."""
        value = self._payload.get(name)
        if isinstance(value, str):
            return (value,)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return tuple(value)
        return None

    @property
    def issued_at(self) -> Optional[int]:
        return self.get_timestamp_claim("iat")

    @property
    def expires_at(self) -> Optional[int]:
        return self.get_timestamp_claim("exp")

    @property
    def not_before(self) -> Optional[int]:
        return self.get_timestamp_claim("nbf")

    @property
    def issuer(self) -> Optional[str]:
        return self.get_string_claim("iss")

    @property
    def subject(self) -> Optional[str]:
        return self.get_string_claim("sub")

    @property
    def audience(self) -> Optional[tuple[str, ...]]:
        return self.get_string_list_claim("aud")

    # ------------------------------------------------------------------
    # Time-based validity
    # ------------------------------------------------------------------

    def is_expired(self, now: int, leeway: int = 0) -> bool:
        """True when ``exp`` is present and ``now >= exp + leeway``."""
        exp = self.expires_at
        return exp is not None and now >= exp + leeway

    def is_not_yet_valid(self, now: int, leeway: int = 0) -> bool:
        """True when ``nbf`` is present and ``now < nbf - leeway``."""
        nbf = self.not_before
        return nbf is not None and now < nbf - leeway

    def expiry_state(self, now: int, leeway: int = 0) -> ExpiryState:
        return ExpiryState(
            now=now,
            expires_at=self.expires_at,
            not_before=self.not_before,
            issued_at=self.issued_at,
            expired=self.is_expired(now, leeway),
            not_yet_valid=self.is_not_yet_valid(now, leeway),
        )

    def summary(self) -> list[tuple[str, str, Any]]:
        """Return ``(claim, label, value)`` for each recognised claim present.

        Timestamps are returned as ints, ``aud`` as a tuple.  Claims of the
        wrong type are left out.
        """
        rows: list[tuple[str, str, Any]] = []
        for name, label in CLAIM_LABELS.items():
            if name in _TIMESTAMP_CLAIMS:
                value: Any = self.get_timestamp_claim(name)
            elif name == "aud":
                value = self.audience
            else:
                value = self.get_string_claim(name)
            if value is not None:
                rows.append((name, label, value))
        return rows
