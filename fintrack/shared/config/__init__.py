# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import DEV_JWT_SECRET, AppConfig, AuthConfig, load_config

__all__ = ["AppConfig", "AuthConfig", "DEV_JWT_SECRET", "load_config"]
