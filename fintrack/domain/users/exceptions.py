# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from fintrack.shared.errors.base import DomainError


class DuplicateEmailError(DomainError):
    code = "duplicate_email"
    status = HTTPStatus.CONFLICT
    message = "Email already in use."


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid email or password."


class RefreshTokenMissingError(DomainError):
    code = "refresh_token_missing"
    status = HTTPStatus.UNAUTHORIZED
    message = "Refresh token missing"


class SessionNotFoundError(DomainError):
    code = "refresh_token_invalid"
    status = HTTPStatus.UNAUTHORIZED
    message = "Refresh token expired"


class SessionExpiredError(DomainError):
    code = "refresh_token_expired"
    status = HTTPStatus.UNAUTHORIZED
    message = "Refresh token expired"
