"""
Text and JSON renderers for a ``VerificationReport``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from .models import ExpiryState, VerificationReport

__all__ = ["format_timestamp", "render_text", "render_json"]


def format_timestamp(ts: int) -> str:
    """Render Unix seconds as an ISO-8601 UTC string (raw number if out of range)."""
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    except (OverflowError, OSError, ValueError):
        return str(ts)


def _expiry_lines(expiry: ExpiryState) -> list[str]:
    lines = []
    if expiry.expires_at is not None:
        state = "EXPIRED" if expiry.expired else "not expired"
        lines.append(f"Expiry: {state} (exp {format_timestamp(expiry.expires_at)})")
    else:
        lines.append("Expiry: no exp claim")
    if expiry.not_yet_valid and expiry.not_before is not None:
        lines.append(f"Not yet valid until {format_timestamp(expiry.not_before)}")
    return lines


def _claim_value(name: str, value: Any) -> str:
    if name in ("iat", "exp", "nbf"):
        return format_timestamp(value)
    if isinstance(value, tuple):
        return ", ".join(value)
    return str(value)


def render_text(report: VerificationReport, indent: int = 4) -> str:
    """Human-readable report, one section per token part."""
    if report.decoded is None:
        return f"Error: {report.error}"

    decoded = report.decoded
    token = decoded.token
    lines = [
        "Token parts:",
        f"  header:    {token.header_segment}",
        f"  payload:   {token.payload_segment}",
        f"  signature: {token.signature_segment}",
        "",
        "Header:",
        json.dumps(decoded.header, indent=indent, ensure_ascii=False),
        "",
        "Payload:",
        json.dumps(decoded.payload, indent=indent, ensure_ascii=False),
    ]

    rows = decoded.claims.summary()
    if rows:
        width = max(len(label) for _, label, _ in rows) + 1
        lines += ["", "Claims:"]
        for name, label, value in rows:
            lines.append(f"  {label + ':':<{width}} {_claim_value(name, value)}")

    lines += ["", f"Signature (base64url encoded):\n{decoded.signature}", ""]
    lines.append(f"Verification: {report.verification.status.value} - {report.verification.message}")
    if report.expiry is not None:
        lines += _expiry_lines(report.expiry)
    return "\n".join(lines)


def _expiry_dict(expiry: Optional[ExpiryState]) -> Optional[dict]:
    if expiry is None:
        return None
    return {
        "now": expiry.now,
        "expired": expiry.expired,
        "not_yet_valid": expiry.not_yet_valid,
        "expires_at": expiry.expires_at,
        "not_before": expiry.not_before,
        "issued_at": expiry.issued_at,
    }


def render_json(report: VerificationReport, indent: int = 4) -> str:
    """Machine-readable report."""
    verification = report.verification
    data: dict = {
        "token": None,
        "header": None,
        "payload": None,
        "signature": None,
        "verification": {
            "status": verification.status.value,
            "reason": verification.reason.value if verification.reason else None,
            "message": verification.message,
        },
        "expiry": _expiry_dict(report.expiry),
        "error": None,
    }
    if report.decoded is not None:
        data["token"] = str(report.decoded.token)
        data["header"] = report.decoded.header
        data["payload"] = report.decoded.payload
        data["signature"] = report.decoded.signature
    if report.error is not None:
        data["error"] = {"kind": report.error.kind.value, "message": str(report.error)}
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)
