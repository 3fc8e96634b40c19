import hmac

import jwt
import pytest

from conftest import make_token
from jwt_decode import base64url, verifier
from jwt_decode.decoder import parse
from jwt_decode.errors import ErrorKind
from jwt_decode.models import VerificationStatus
from jwt_decode.verifier import SUPPORTED_ALGORITHMS, compute_signature, verify

SECRET = "unit-secret-" + "0123456789abcdef" * 4


@pytest.mark.parametrize("alg", SUPPORTED_ALGORITHMS)
def test_valid_signature(alg: str) -> None:
    token = make_token({"alg": alg, "typ": "JWT"}, {"sub": "alice"}, SECRET, alg)
    result = verify(parse(token), SECRET)
    assert result.status is VerificationStatus.VALID
    assert result.reason is None
    assert result.is_valid


@pytest.mark.parametrize("alg", SUPPORTED_ALGORITHMS)
def test_wrong_secret_is_mismatch(alg: str) -> None:
    token = make_token({"alg": alg}, {"sub": "alice"}, SECRET, alg)
    result = verify(parse(token), SECRET + "x")
    assert result.status is VerificationStatus.INVALID
    assert result.reason is ErrorKind.SIGNATURE_MISMATCH


@pytest.mark.parametrize("alg", SUPPORTED_ALGORITHMS)
def test_tokens_signed_by_pyjwt_verify(alg: str) -> None:
    token = jwt.encode({"sub": "alice", "admin": True}, SECRET, algorithm=alg)
    assert verify(parse(token), SECRET).is_valid
    assert verify(parse(token), "other").reason is ErrorKind.SIGNATURE_MISMATCH


def test_bit_flip_in_payload_is_mismatch() -> None:
    token = make_token({"alg": "HS256"}, {"sub": "alice"}, SECRET)
    header_seg, payload_seg, sig_seg = token.split(".")
    raw = bytearray(base64url.decode(payload_seg))
    raw[raw.index(b"alice")] ^= 0x01
    tampered = f"{header_seg}.{base64url.encode(bytes(raw))}.{sig_seg}"

    result = verify(parse(tampered), SECRET)
    assert result.reason is ErrorKind.SIGNATURE_MISMATCH


def test_signing_input_is_not_reencoded() -> None:
    # Unusual whitespace and key order would not survive a re-serialization.
    token = make_token('{ "typ" : "JWT",\n "alg":"HS256" }', '{"b":1,  "a":"\\u00e9"}', SECRET)
    assert verify(parse(token), SECRET).is_valid


@pytest.mark.parametrize(
    "header",
    [
        {"alg": "none"},
        {"alg": "None"},
        {"alg": "NONE"},
        {"alg": "RS256"},
        {"alg": "ES256"},
        {"alg": "PS512"},
        {"alg": "EdDSA"},
        {"alg": "hs256"},
        {"alg": 256},
        {"alg": None},
        {"typ": "JWT"},
    ],
)
def test_unsupported_algorithms_rejected(header: dict) -> None:
    token = make_token(header, {"sub": "alice"}, SECRET)
    result = verify(parse(token), SECRET)
    assert result.status is VerificationStatus.INVALID
    assert result.reason is ErrorKind.UNSUPPORTED_ALGORITHM


def test_unsecured_token_with_empty_signature_never_valid() -> None:
    header_seg, payload_seg, _ = make_token({"alg": "none"}, {"sub": "x"}, SECRET).split(".")
    token = f"{header_seg}.{payload_seg}."
    result = verify(parse(token), "anything")
    assert result.reason is ErrorKind.UNSUPPORTED_ALGORITHM


def test_unsupported_algorithm_checked_before_hmac(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise AssertionError("HMAC must not be computed")

    token = make_token({"alg": "none"}, {}, SECRET)
    monkeypatch.setattr(verifier.hmac, "new", boom)
    assert verify(parse(token), SECRET).reason is ErrorKind.UNSUPPORTED_ALGORITHM


def test_empty_signature_with_hmac_alg_is_mismatch() -> None:
    header_seg, payload_seg, _ = make_token({"alg": "HS256"}, {"sub": "a"}, SECRET).split(".")
    result = verify(parse(f"{header_seg}.{payload_seg}."), SECRET)
    assert result.reason is ErrorKind.SIGNATURE_MISMATCH


def test_non_ascii_signature_is_mismatch() -> None:
    header_seg, payload_seg, _ = make_token({"alg": "HS256"}, {}, SECRET).split(".")
    result = verify(parse(f"{header_seg}.{payload_seg}.sïg"), SECRET)
    assert result.reason is ErrorKind.SIGNATURE_MISMATCH


def test_comparison_is_constant_time(monkeypatch) -> None:
    calls = []
    real = hmac.compare_digest

    def spy(a, b):
        calls.append((a, b))
        return real(a, b)

    monkeypatch.setattr(verifier.hmac, "compare_digest", spy)
    token = make_token({"alg": "HS256"}, {"sub": "a"}, SECRET)
    verify(parse(token), "wrong")
    assert len(calls) == 1


def test_bytes_secret_matches_str_secret() -> None:
    token = make_token({"alg": "HS512"}, {"sub": "a"}, "clé", "HS512")
    assert verify(parse(token), "clé".encode("utf-8")).is_valid


def test_compute_signature_rejects_unknown_alg() -> None:
    with pytest.raises(ValueError):
        compute_signature(b"a.b", SECRET, "RS256")


def test_verify_keeps_no_state() -> None:
    token = parse(make_token({"alg": "HS256"}, {"sub": "a"}, SECRET))
    assert verify(token, SECRET).is_valid
    assert not verify(token, "x").is_valid
    assert verify(token, SECRET).is_valid


def test_non_utf8_secret_from_os_is_recovered() -> None:
    # POSIX hands undecodable argv/env bytes to Python as lone surrogates
    token = make_token({"alg": "HS256"}, {"sub": "a"}, b"k\xff" * 16)
    assert verify(parse(token), "k\udcff" * 16).is_valid
    assert verify(parse(token), "k\udcfe" * 16).reason is ErrorKind.SIGNATURE_MISMATCH
