from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_current_user, get_db
from discvault.models.user import User
from discvault.schema.statistics import SimplifiedStatisticsRead, StatisticsEnvelope, StatisticsRead
from discvault.services import statistics_service

router = APIRouter()


@router.get("", response_model=StatisticsEnvelope)
async def get_statistics(
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> StatisticsEnvelope:
    summary = await statistics_service.get_statistics(session)
    return StatisticsEnvelope(statistics=StatisticsRead.from_summary(summary))


@router.get("/simplified", response_model=SimplifiedStatisticsRead)
async def get_simplified_statistics(
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> SimplifiedStatisticsRead:
    summary = await statistics_service.get_statistics(session)
    return SimplifiedStatisticsRead(
        total_blurays=summary.total_blurays,
        total_movies=summary.total_movies,
        total_series=summary.total_series,
        total_seasons=summary.total_seasons,
    )
