# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin dashboard statistics endpoint."""

from typing import Any

from fastapi import APIRouter, Depends

from schoolverse.api.dependencies import get_statistics_aggregator, require_admin
from schoolverse.domains.dashboard import StatisticsAggregator
from schoolverse.models import StatisticsResponse

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get(
    "",
    response_model=StatisticsResponse,
    summary="Dashboard statistics",
    description="Row counts of every content table. Failed counts are reported as 0.",
)
async def get_statistics(
    aggregator: StatisticsAggregator = Depends(get_statistics_aggregator),
) -> dict[str, Any]:
    stats = await aggregator.collect()
    return stats.to_dict()
