"""Import all models here for Alembic autogenerate."""

from discvault.db.base_class import Base
from discvault.models import disc, notification, tagging, user  # noqa: F401

__all__ = ["Base"]
