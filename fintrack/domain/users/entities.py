# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class RefreshSession:
    """Server side record behind the ``refreshToken`` cookie."""

    id: str
    user_id: int
    expires_in: int

    def is_expired(self, now_ts: int) -> bool:
        return now_ts > self.expires_in
