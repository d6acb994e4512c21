# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.refresh_sessions import RefreshSessionManager
from .services.token_issuer import JwtTokenIssuer
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "JwtTokenIssuer",
    "LoginResult",
    "LoginUserUseCase",
    "RefreshSessionManager",
    "RegisterUserUseCase",
]
