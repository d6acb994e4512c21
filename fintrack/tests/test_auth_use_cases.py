from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from fintrack.application.services.refresh_sessions import RefreshSessionManager
from fintrack.application.services.token_issuer import JwtTokenIssuer
from fintrack.application.use_cases.users.login_user import LoginUserUseCase
from fintrack.application.use_cases.users.register_user import RegisterUserUseCase
from fintrack.domain.users.entities import RefreshSession, User
from fintrack.domain.users.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    SessionExpiredError,
    SessionNotFoundError,
)
from fintrack.domain.users.repositories import (
    PasswordHasher,
    RefreshSessionRepository,
    UserRepository,
)

SECRET = "unit-test-secret-0123456789abcdef"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return self._users.get(email)

    def add(self, user: User) -> User:
        new_user = User(
            id=self._seq,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.email] = new_user
        return new_user


class InMemoryRefreshSessionRepository(RefreshSessionRepository):
    def __init__(self) -> None:
        self.sessions: dict[str, RefreshSession] = {}
        self._seq = 0

    def replace_for_user(self, user_id: int, expires_in: int) -> RefreshSession:
        for key, value in list(self.sessions.items()):
            if value.user_id == user_id:
                self.sessions.pop(key)
        self._seq += 1
        session = RefreshSession(id=f"session-{self._seq}", user_id=user_id, expires_in=expires_in)
        self.sessions[session.id] = session
        return session

    def find_by_id(self, session_id: str) -> RefreshSession | None:
        return self.sessions.get(session_id)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions() -> InMemoryRefreshSessionRepository:
    return InMemoryRefreshSessionRepository()


@pytest.fixture()
def issuer(clock: FrozenClock) -> JwtTokenIssuer:
    return JwtTokenIssuer(secret=SECRET, clock=clock)


@pytest.fixture()
def manager(
    sessions: InMemoryRefreshSessionRepository, issuer: JwtTokenIssuer, clock: FrozenClock
) -> RefreshSessionManager:
    return RefreshSessionManager(sessions=sessions, token_issuer=issuer, clock=clock)


@pytest.fixture()
def register(users: InMemoryUserRepository) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())


@pytest.fixture()
def login(
    users: InMemoryUserRepository, issuer: JwtTokenIssuer, manager: RefreshSessionManager
) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users,
        password_hasher=DeterministicHasher(),
        token_issuer=issuer,
        refresh_sessions=manager,
    )


def test_register_user_success(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    user = register.execute("Ann", "Ann@Example.com", "secret123")

    assert user.id == 1
    assert user.email == "ann@example.com"
    assert user.password_hash == "hashed:secret123"
    assert users.find_by_email("ann@example.com") is not None


def test_register_user_duplicate_raises(register: RegisterUserUseCase) -> None:
    register.execute("Ann", "ann@example.com", "secret123")

    with pytest.raises(DuplicateEmailError) as exc_info:
        register.execute("Ann Again", "ANN@example.com", "other-pass")

    assert exc_info.value.message == "Email already in use."


def test_login_user_success(
    register: RegisterUserUseCase,
    login: LoginUserUseCase,
    sessions: InMemoryRefreshSessionRepository,
) -> None:
    user = register.execute("Ann", "ann@example.com", "secret123")

    result = login.execute("ann@example.com", "secret123")

    assert result.user == user
    assert jwt.decode(result.token, SECRET, algorithms=["HS256"])["sub"] == str(user.id)
    assert result.session_id in sessions.sessions


def test_login_user_invalid_credentials_are_indistinguishable(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    register.execute("Ann", "ann@example.com", "secret123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("ann@example.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        login.execute("bob@example.com", "secret123")

    assert wrong_password.value.to_dict() == unknown_email.value.to_dict()
    assert wrong_password.value.message == "Invalid email or password."


def test_login_twice_keeps_a_single_session(
    register: RegisterUserUseCase,
    login: LoginUserUseCase,
    manager: RefreshSessionManager,
    sessions: InMemoryRefreshSessionRepository,
) -> None:
    register.execute("Ann", "ann@example.com", "secret123")

    first = login.execute("ann@example.com", "secret123")
    second = login.execute("ann@example.com", "secret123")

    assert first.session_id != second.session_id
    assert list(sessions.sessions) == [second.session_id]
    with pytest.raises(SessionNotFoundError):
        manager.refresh(first.session_id)


def test_start_session_expires_after_thirty_days(
    manager: RefreshSessionManager,
    sessions: InMemoryRefreshSessionRepository,
    clock: FrozenClock,
) -> None:
    session_id = manager.start_session(7)

    expected = int((clock.now + timedelta(days=30)).timestamp())
    assert sessions.sessions[session_id].expires_in == expected


def test_refresh_issues_token_for_session_user(
    manager: RefreshSessionManager, issuer: JwtTokenIssuer
) -> None:
    session_id = manager.start_session(7)

    token = manager.refresh(session_id)

    assert issuer.verify(token) == 7


def test_refresh_does_not_extend_session(
    manager: RefreshSessionManager,
    sessions: InMemoryRefreshSessionRepository,
    clock: FrozenClock,
) -> None:
    session_id = manager.start_session(7)
    expires_in = sessions.sessions[session_id].expires_in

    clock.now += timedelta(days=10)
    manager.refresh(session_id)

    assert sessions.sessions[session_id].expires_in == expires_in


def test_refresh_unknown_session_raises(manager: RefreshSessionManager) -> None:
    with pytest.raises(SessionNotFoundError) as exc_info:
        manager.refresh("does-not-exist")

    assert exc_info.value.message == "Refresh token expired"


def test_refresh_expired_session_raises(
    manager: RefreshSessionManager, clock: FrozenClock
) -> None:
    session_id = manager.start_session(7)

    clock.now += timedelta(days=30)
    manager.refresh(session_id)  # exactly at expiry is still valid

    clock.now += timedelta(seconds=1)
    with pytest.raises(SessionExpiredError) as exc_info:
        manager.refresh(session_id)

    assert exc_info.value.message == "Refresh token expired"
