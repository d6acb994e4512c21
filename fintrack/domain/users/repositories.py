# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import RefreshSession, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def add(self, user: User) -> User: ...


class RefreshSessionRepository(Protocol):
    def replace_for_user(self, user_id: int, expires_in: int) -> RefreshSession: ...
    def find_by_id(self, session_id: str) -> RefreshSession | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, user_id: int) -> str: ...
    def verify(self, token: str) -> int: ...
