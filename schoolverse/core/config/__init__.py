# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for SchoolVerse.

Example:
    >>> from schoolverse.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.storage.backend)
    'local'
"""

from schoolverse.core.config.settings import (
    AdminSettings,
    APISettings,
    CORSSettings,
    DatabaseSettings,
    Settings,
    StorageSettings,
    UploadSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "StorageSettings",
    "UploadSettings",
    "AdminSettings",
    "CORSSettings",
    "APISettings",
]
