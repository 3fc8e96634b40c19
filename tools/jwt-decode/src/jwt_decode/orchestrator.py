"""
Decode -> claims -> signature -> expiry, combined into one report.

``verify_token`` is the synchronous entry point.  ``VerificationSession``
wraps it for callers that re-verify on every input change: each submission
is tagged with a sequence number and only the newest completed report is
published (last input wins).
"""

from __future__ import annotations

import logging
import math
import threading
import time
from concurrent.futures import Executor, Future
from typing import Optional, Union

from .decoder import DecodeError, parse
from .errors import ErrorKind
from .models import VerificationReport, VerificationResult
from .verifier import verify

__all__ = ["verify_token", "current_time", "VerificationSession"]

logger = logging.getLogger(__name__)


def current_time() -> int:
    """Wall-clock time as whole Unix seconds."""
    return math.floor(time.time())


def verify_token(
    token_string: str,
    secret: Optional[Union[str, bytes]] = None,
    now: Optional[int] = None,
    leeway: int = 0,
    *,
    sequence: int = 0,
) -> VerificationReport:
    """Decode *token_string* and, when a secret is given, verify its signature.

    Decoding never needs a secret.  Signature validity and expiry are
    computed independently and reported separately.
    """
    try:
        decoded = parse(token_string)
    except DecodeError as exc:
        logger.debug("Decode failed: %s", exc.kind.value)
        return VerificationReport(
            decoded=None,
            verification=VerificationResult.unverified(),
            error=exc,
            sequence=sequence,
        )

    if not secret:
        verification = VerificationResult.unverified(ErrorKind.MISSING_SECRET)
    else:
        verification = verify(decoded, secret)

    if now is None:
        now = current_time()
    expiry = decoded.claims.expiry_state(now, leeway)

    return VerificationReport(
        decoded=decoded,
        verification=verification,
        expiry=expiry,
        sequence=sequence,
    )


class VerificationSession:
    """Sequence-tagged verification where newer inputs always win.

    Submissions may complete out of order when an executor is used; a report
    for a superseded input never replaces the report of a newer one.
    """

    def __init__(self, executor: Optional[Executor] = None, leeway: int = 0) -> None:
        self._executor = executor
        self._leeway = leeway
        self._lock = threading.Lock()
        self._submitted = 0
        self._published = 0
        self._latest: Optional[VerificationReport] = None

    @property
    def latest(self) -> Optional[VerificationReport]:
        """The report for the newest input that has completed so far."""
        with self._lock:
            return self._latest

    def is_current(self, report: VerificationReport) -> bool:
        """True when *report* belongs to the most recently submitted input."""
        with self._lock:
            return report.sequence == self._submitted

    def submit(
        self,
        token_string: str,
        secret: Optional[Union[str, bytes]] = None,
        now: Optional[int] = None,
    ) -> "Future[VerificationReport]":
        """Queue verification of a new input and return its future."""
        with self._lock:
            self._submitted += 1
            sequence = self._submitted

        if self._executor is None:
            future: Future = Future()
            try:
                future.set_result(
                    verify_token(token_string, secret, now, self._leeway, sequence=sequence)
                )
            except Exception as exc:
                future.set_exception(exc)
        else:
            future = self._executor.submit(
                verify_token, token_string, secret, now, self._leeway, sequence=sequence
            )
        future.add_done_callback(self._publish)
        return future

    def _publish(self, future: Future) -> None:
        if future.cancelled() or future.exception() is not None:
            return
        report = future.result()
        with self._lock:
            if report.sequence <= self._published:
                logger.debug("Discarding stale report #%d (have #%d)", report.sequence, self._published)
                return
            self._published = report.sequence
            self._latest = report
