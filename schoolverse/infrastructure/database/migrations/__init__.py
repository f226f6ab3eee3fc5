# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Programmatic schema migrations for the content database."""

from schoolverse.infrastructure.database.migrations.runner import (
    CONTENT_MIGRATIONS,
    get_migration_status,
    run_migrations,
)

__all__ = ["CONTENT_MIGRATIONS", "get_migration_status", "run_migrations"]
