# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database seed package.

Default singleton sections and footer sections for a fresh content database.
"""

from schoolverse.infrastructure.database.seeds.content import (
    DEFAULT_FOOTER_SECTIONS,
    SINGLETON_DEFAULTS,
    seed_content_database,
    seed_footer_sections,
    seed_singletons,
)

__all__ = [
    "DEFAULT_FOOTER_SECTIONS",
    "SINGLETON_DEFAULTS",
    "seed_content_database",
    "seed_footer_sections",
    "seed_singletons",
]
