import pytest

from jwt_decode.claims import Claims


def test_exp_boundary_is_inclusive() -> None:
    claims = Claims({"exp": 1000})
    assert claims.is_expired(999) is False
    assert claims.is_expired(1000) is True
    assert claims.is_expired(1001) is True


def test_nbf_boundary() -> None:
    claims = Claims({"nbf": 1000})
    assert claims.is_not_yet_valid(999) is True
    assert claims.is_not_yet_valid(1000) is False


def test_leeway_extends_both_bounds() -> None:
    claims = Claims({"exp": 1000, "nbf": 500})
    assert claims.is_expired(1005, leeway=10) is False
    assert claims.is_expired(1010, leeway=10) is True
    assert claims.is_not_yet_valid(495, leeway=10) is False


def test_absent_claims_are_never_expired_or_early() -> None:
    claims = Claims({})
    assert claims.is_expired(10**12) is False
    assert claims.is_not_yet_valid(0) is False


@pytest.mark.parametrize("value", ["1000", None, True, [1000], {"t": 1}, float("nan"), float("inf")])
def test_malformed_timestamps_are_ignored(value) -> None:
    claims = Claims({"exp": value})
    assert claims.expires_at is None
    assert claims.is_expired(10**12) is False


def test_float_timestamp_is_floored() -> None:
    assert Claims({"iat": 1700000000.9}).issued_at == 1700000000


def test_string_claims() -> None:
    claims = Claims({"iss": "auth.example.com", "sub": 42})
    assert claims.issuer == "auth.example.com"
    assert claims.subject is None


@pytest.mark.parametrize(
    "aud, expected",
    [
        ("api", ("api",)),
        (["api", "web"], ("api", "web")),
        (["api", 3], None),
        (7, None),
    ],
)
def test_audience(aud, expected) -> None:
    assert Claims({"aud": aud}).audience == expected


def test_expiry_state() -> None:
    state = Claims({"exp": 1000, "nbf": 900, "iat": 900}).expiry_state(950)
    assert state.now == 950
    assert (state.expires_at, state.not_before, state.issued_at) == (1000, 900, 900)
    assert state.expired is False
    assert state.not_yet_valid is False


def test_summary_order_and_filtering() -> None:
    claims = Claims({"aud": "api", "sub": "u1", "exp": 2000, "iat": "bogus", "custom": 1})
    assert claims.summary() == [
        ("exp", "Expires At", 2000),
        ("sub", "Subject", "u1"),
        ("aud", "Audience", ("api",)),
    ]


def test_claims_is_read_only_mapping() -> None:
    source = {"sub": "a"}
    claims = Claims(source)
    source["sub"] = "b"
    assert claims["sub"] == "a"
    assert dict(claims) == {"sub": "a"}
    with pytest.raises(TypeError):
        claims["sub"] = "c"  # type: ignore[index]
