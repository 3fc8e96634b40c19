import base64
import hashlib
import hmac
import json
import logging

import pytest

_HASHES = {"HS256": hashlib.sha256, "HS384": hashlib.sha384, "HS512": hashlib.sha512}


def b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def make_token(header, payload, secret="unit-secret", alg: str = "HS256") -> str:
    """Build a signed token from raw JSON text (str) or objects (dict)."""
    header_raw = header if isinstance(header, str) else json.dumps(header)
    payload_raw = payload if isinstance(payload, str) else json.dumps(payload)
    signing_input = f"{b64url(header_raw.encode('utf-8'))}.{b64url(payload_raw.encode('utf-8'))}"
    key = secret if isinstance(secret, bytes) else secret.encode("utf-8")
    mac = hmac.new(key, signing_input.encode("ascii"), _HASHES[alg]).digest()
    return f"{signing_input}.{b64url(mac)}"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("JWT_DECODE_SECRET", raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
