"""Collection statistics backed by the catalog aggregator."""

from __future__ import annotations

import logging
from time import monotonic

from sqlalchemy.ext.asyncio import AsyncSession

from discvault.catalog.statistics import StatisticsOptions, StatisticsSummary, summarize
from discvault.core.config import settings
from discvault.services import disc_service

logger = logging.getLogger("discvault.services.statistics")


async def get_statistics(session: AsyncSession, *, options: StatisticsOptions | None = None) -> StatisticsSummary:
    """Summarize the whole catalog using the configured policies."""
    started = monotonic()
    records = await disc_service.fetch_all(session)
    summary = summarize(records, options=options or settings.statistics_options)
    logger.info(
        "Statistics computed",
        extra={
            "records": len(records),
            "total_blurays": summary.total_blurays,
            "elapsed_ms": round((monotonic() - started) * 1000, 2),
        },
    )
    return summary
