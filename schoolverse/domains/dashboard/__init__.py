# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard domain package: content statistics for the admin dashboard."""

from schoolverse.domains.dashboard.statistics import (
    TRACKED_TABLES,
    DashboardStatistics,
    StatisticsAggregator,
)

__all__ = ["TRACKED_TABLES", "DashboardStatistics", "StatisticsAggregator"]
