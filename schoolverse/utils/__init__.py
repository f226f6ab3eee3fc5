# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for SchoolVerse.

This package contains cross-cutting utilities:
- logging: stdlib logging rendered through structlog
- datetime: Timezone-aware datetime operations
"""

from schoolverse.utils.datetime import epoch_millis, ensure_utc, format_iso, utc_now
from schoolverse.utils.logging import current_context, log_context, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "log_context",
    "current_context",
    # Datetime
    "utc_now",
    "epoch_millis",
    "ensure_utc",
    "format_iso",
]
