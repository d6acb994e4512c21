# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from fintrack.domain.users.entities import User
from fintrack.domain.users.exceptions import DuplicateEmailError
from fintrack.domain.users.repositories import PasswordHasher, UserRepository
from fintrack.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> User:
        email = email.strip().lower()
        if self._users.find_by_email(email):
            raise DuplicateEmailError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name,
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        logger.info(f"auth.register: ok (user_id={persisted.id})")
        return persisted
