from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from fintrack.application.services.token_issuer import JwtTokenIssuer
from fintrack.shared.errors import InvalidAccessTokenError

SECRET = "unit-test-secret-0123456789abcdef"


def _clock(now: datetime):
    return lambda: now


def test_issue_signs_subject_and_fifteen_minute_expiry() -> None:
    now = datetime(2024, 1, 1, tzinfo=UTC)
    issuer = JwtTokenIssuer(secret=SECRET, clock=_clock(now))

    claims = jwt.decode(
        issuer.issue(42),
        SECRET,
        algorithms=["HS256"],
        options={"verify_exp": False},
    )

    assert claims["sub"] == "42"
    assert claims["iat"] == int(now.timestamp())
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_tokens_issued_in_the_same_second_differ() -> None:
    issuer = JwtTokenIssuer(secret=SECRET, clock=_clock(datetime.now(UTC)))

    assert issuer.issue(1) != issuer.issue(1)


def test_verify_returns_user_id() -> None:
    issuer = JwtTokenIssuer(secret=SECRET)

    assert issuer.verify(issuer.issue(5)) == 5


def test_verify_rejects_expired_token() -> None:
    past = datetime.now(UTC) - timedelta(hours=1)
    token = JwtTokenIssuer(secret=SECRET, clock=_clock(past)).issue(5)

    with pytest.raises(InvalidAccessTokenError):
        JwtTokenIssuer(secret=SECRET).verify(token)


def test_verify_rejects_foreign_signature() -> None:
    token = JwtTokenIssuer(secret="someone-else-entirely-0123456789abcdef").issue(5)

    with pytest.raises(InvalidAccessTokenError):
        JwtTokenIssuer(secret=SECRET).verify(token)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_verify_rejects_garbage(token: str) -> None:
    with pytest.raises(InvalidAccessTokenError):
        JwtTokenIssuer(secret=SECRET).verify(token)


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        JwtTokenIssuer(secret="")


def test_expiry_follows_the_injected_clock() -> None:
    now = {"value": datetime(2024, 1, 1, tzinfo=UTC)}
    issuer = JwtTokenIssuer(secret=SECRET, clock=lambda: now["value"])
    token = issuer.issue(9)

    now["value"] += timedelta(minutes=15) - timedelta(seconds=1)
    assert issuer.verify(token) == 9

    now["value"] += timedelta(seconds=1)
    with pytest.raises(InvalidAccessTokenError):
        issuer.verify(token)
