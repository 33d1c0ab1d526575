"""Claims, assinatura do JWT e cabeçalho Authorization."""

from datetime import timedelta

import jwt
import pytest
from connect_auth import security
from connect_auth.canonical import create_query_string_hash
from connect_auth.errors import AuthError, ClockError, EncodingError
from connect_auth.security import (
    AUTH_SCHEME,
    Claims,
    Header,
    Parameters,
    RequestSigner,
    build_claims,
    create_auth_header,
    sign_claims,
)

SECRET = b"0123456789abcdef0123456789abcdef-shared"
URL = "https://somecorp.example/rest/api/3/project/search?query=myproject"
NOW = 1_700_000_000.75


def fixed_clock():
    return NOW


def make_params(valid_for=timedelta(seconds=0), **overrides):
    fields = {
        "method": "get",
        "url": URL,
        "valid_for": valid_for,
        "app_key": "com.example.app",
        "shared_secret": SECRET,
    }
    fields.update(overrides)
    return Parameters(**fields)


def decode(header: Header) -> dict:
    scheme, token = header.value.split(" ")
    assert scheme == AUTH_SCHEME
    return jwt.decode(
        token,
        SECRET,
        algorithms=["HS256"],
        options={"verify_exp": False, "verify_iat": False},
    )


def test_claims_for_zero_validity():
    claims = build_claims(make_params(), clock=fixed_clock)
    assert claims == Claims(
        iss="com.example.app",
        qsh=create_query_string_hash("get", URL),
        iat=1_700_000_000,
        exp=1_700_000_000,
    )


@pytest.mark.parametrize("valid_for", [30, timedelta(minutes=3), timedelta(seconds=1.9)])
def test_expiry_is_issue_time_plus_validity(valid_for):
    claims = build_claims(make_params(valid_for=valid_for), clock=fixed_clock)
    expected = int(valid_for.total_seconds()) if isinstance(valid_for, timedelta) else valid_for
    assert claims.exp - claims.iat == expected


def test_clock_is_read_once():
    calls = []

    def clock():
        calls.append(1)
        return NOW + len(calls)

    create_auth_header(make_params(valid_for=10), clock=clock)
    assert len(calls) == 1


def test_issuer_is_copied_verbatim():
    claims = build_claims(make_params(app_key=" Mixed.Case key "), clock=fixed_clock)
    assert claims.iss == " Mixed.Case key "


def test_negative_validity_is_rejected():
    with pytest.raises(ValueError):
        make_params(valid_for=-1)


def test_parameters_repr_hides_secret():
    assert "0123456789abcdef" not in repr(make_params())


def test_clock_before_epoch_raises_clock_error(monkeypatch):
    def fail_encode(*args, **kwargs):
        raise AssertionError("token must not be encoded")

    monkeypatch.setattr(security.jwt, "encode", fail_encode)
    with pytest.raises(ClockError) as excinfo:
        create_auth_header(make_params(), clock=lambda: -1.0)
    assert isinstance(excinfo.value, AuthError)


def test_header_round_trip_recovers_claims():
    header = create_auth_header(make_params(valid_for=60), clock=fixed_clock)
    assert header.name == "Authorization"
    assert decode(header) == {
        "iss": "com.example.app",
        "qsh": create_query_string_hash("GET", URL),
        "iat": 1_700_000_000,
        "exp": 1_700_000_060,
    }


def test_token_uses_hs256_header():
    header = create_auth_header(make_params(), clock=fixed_clock)
    token = header.value.split(" ", 1)[1]
    assert token.count(".") == 2
    assert jwt.get_unverified_header(token) == {"alg": "HS256", "typ": "JWT"}


def test_token_verifies_with_real_clock():
    header = create_auth_header(make_params(valid_for=300))
    token = header.value.split(" ", 1)[1]
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 300


def test_wrong_secret_fails_verification():
    header = create_auth_header(make_params(valid_for=300))
    token = header.value.split(" ", 1)[1]
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, b"another-secret-another-secret-000", algorithms=["HS256"])


def test_string_secret_is_utf8_bytes():
    claims = build_claims(make_params(), clock=fixed_clock)
    assert sign_claims(claims, SECRET.decode("utf-8")) == sign_claims(claims, SECRET)


def test_encoder_failure_raises_encoding_error(monkeypatch):
    cause = jwt.InvalidKeyError("chave inválida")

    def broken_encode(*args, **kwargs):
        raise cause

    monkeypatch.setattr(security.jwt, "encode", broken_encode)
    with pytest.raises(EncodingError) as excinfo:
        create_auth_header(make_params(), clock=fixed_clock)
    assert excinfo.value.cause is cause
    assert excinfo.value.__cause__ is cause
    assert "chave inválida" in str(excinfo.value)


def test_header_as_dict():
    assert Header(value="JWT abc").as_dict() == {"Authorization": "JWT abc"}


def test_request_signer_signs_headers():
    signer = RequestSigner("com.example.app", SECRET, valid_for=45, clock=fixed_clock)
    headers = signer.sign_headers("get", URL, {"Accept": "application/json"})
    assert headers["Accept"] == "application/json"
    claims = decode(Header(value=headers["Authorization"]))
    assert claims["exp"] - claims["iat"] == 45
    assert claims["qsh"] == create_query_string_hash("GET", URL)


def test_request_signer_overrides_validity():
    signer = RequestSigner("com.example.app", SECRET, clock=fixed_clock)
    claims = decode(signer.create_auth_header("get", URL, valid_for=0))
    assert claims["iat"] == claims["exp"]


@pytest.mark.parametrize("app_key, secret", [("", SECRET), ("key", b""), ("key", None)])
def test_request_signer_rejects_invalid_credentials(app_key, secret):
    with pytest.raises(ValueError):
        RequestSigner(app_key, secret)


def test_request_signer_repr_hides_secret():
    assert "0123456789abcdef" not in repr(RequestSigner("key", SECRET))


def test_request_signer_rejects_negative_validity():
    with pytest.raises(ValueError):
        RequestSigner("key", SECRET, valid_for=timedelta(seconds=-5))
