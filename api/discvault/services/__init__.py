from . import (
    csv_service,
    disc_service,
    notification_service,
    statistics_service,
    tag_service,
    user_service,
)

__all__ = [
    "csv_service",
    "disc_service",
    "notification_service",
    "statistics_service",
    "tag_service",
    "user_service",
]
"""Service-layer helpers for API operations."""
