# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError

from fintrack.domain.users.entities import RefreshSession as DomainRefreshSession
from fintrack.domain.users.entities import User as DomainUser
from fintrack.domain.users.exceptions import DuplicateEmailError
from fintrack.domain.users.repositories import RefreshSessionRepository, UserRepository
from fintrack.infrastructure.db.models import RefreshToken, User
from fintrack.infrastructure.db.session import session_scope
from fintrack.shared.logging import logger


def _aware(value: datetime | None) -> datetime:
    if value is None:
        return datetime.now(UTC)
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope() as session:
                row = User(
                    name=user.name,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            # Lost a registration race on the unique email index.
            raise DuplicateEmailError() from exc


class SqlAlchemyRefreshSessionRepository(RefreshSessionRepository):
    """Refresh sessions keyed by an opaque uuid4 id.

    ``replace_for_user`` deletes and inserts inside one transaction. The
    unique index on ``user_id`` rejects the second of two concurrent logins,
    which is retried once so the last writer wins.
    """

    _ATTEMPTS = 2

    def replace_for_user(self, user_id: int, expires_in: int) -> DomainRefreshSession:
        for _ in range(self._ATTEMPTS - 1):
            try:
                return self._replace(user_id, expires_in)
            except IntegrityError:
                logger.warning(f"auth.session: concurrent login, retrying (user_id={user_id})")
        return self._replace(user_id, expires_in)

    def _replace(self, user_id: int, expires_in: int) -> DomainRefreshSession:
        with session_scope() as session:
            removed = (
                session.query(RefreshToken)
                .filter(RefreshToken.user_id == user_id)
                .delete(synchronize_session=False)
            )
            row = RefreshToken(id=str(uuid.uuid4()), user_id=user_id, expires_in=expires_in)
            session.add(row)
            session.flush()
            logger.debug(f"auth.session: replaced (user_id={user_id}, removed={removed})")
            return DomainRefreshSession(id=row.id, user_id=row.user_id, expires_in=row.expires_in)

    def find_by_id(self, session_id: str) -> DomainRefreshSession | None:
        with session_scope() as session:
            row = session.get(RefreshToken, session_id)
            if not row:
                return None
            return DomainRefreshSession(
                id=row.id, user_id=row.user_id, expires_in=int(row.expires_in)
            )
