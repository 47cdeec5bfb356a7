"""Disc catalog services: CRUD, listing, and structured search.

Invariants:
- A TMDB id identifies at most one disc.
- Search evaluates predicates against ``CatalogRecord`` snapshots so the
  same matchers serve every database engine.
"""

from __future__ import annotations

import logging
import uuid
from time import monotonic
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.catalog.query_parser import SearchPredicate, matches_all, matches_any_text, parse_query
from discvault.catalog.records import CatalogRecord, MediaKind, seasons_from_payload
from discvault.models.disc import Disc
from discvault.schema.disc import DiscCreate, DiscUpdate

MAX_SEARCH_QUERY_LENGTH = 256

logger = logging.getLogger("discvault.services.discs")


def normalize_tags(tags: Sequence[str] | None) -> list[str]:
    """Strip blanks and duplicates while keeping first-seen order."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for tag in tags or []:
        name = tag.strip()
        if name and name not in seen:
            seen.add(name)
            cleaned.append(name)
    return cleaned


def to_record(disc: Disc) -> CatalogRecord:
    """Snapshot a stored disc for matching and aggregation."""
    return CatalogRecord(
        id=str(disc.id),
        title=disc.title,
        media_kind=disc.media_kind,
        release_year=disc.release_year or 0,
        director=disc.director,
        runtime_minutes=disc.runtime_minutes or 0,
        seasons=seasons_from_payload(disc.seasons) if disc.media_kind == MediaKind.SERIES else (),
        genres=tuple(disc.genres or ()),
        genres_fr=tuple(disc.genres_fr or ()),
        tags=tuple(disc.tags or ()),
        description=disc.description,
        description_fr=disc.description_fr,
        purchase_price=disc.purchase_price or 0.0,
        purchase_date=disc.purchase_date,
        rating=disc.rating or 0.0,
    )


async def _tmdb_id_taken(session: AsyncSession, tmdb_id: str, *, exclude: uuid.UUID | None = None) -> bool:
    stmt = select(Disc.id).where(Disc.tmdb_id == tmdb_id)
    if exclude is not None:
        stmt = stmt.where(Disc.id != exclude)
    result = await session.execute(stmt)
    return result.first() is not None


def _dump_seasons(seasons: Sequence[Any] | None) -> list[dict]:
    return [season.model_dump() if hasattr(season, "model_dump") else dict(season) for season in seasons or []]


async def create_disc(session: AsyncSession, payload: DiscCreate, *, added_by: uuid.UUID | None = None) -> Disc:
    """Catalog a new disc."""
    title = payload.title.strip()
    if not title:
        raise ValueError("Title is required")
    tmdb_id = (payload.tmdb_id or "").strip() or None
    if tmdb_id and await _tmdb_id_taken(session, tmdb_id):
        raise ValueError("A disc with this TMDB id already exists")

    data = payload.model_dump(exclude={"title", "tmdb_id", "seasons", "tags"})
    disc = Disc(
        **data,
        title=title,
        tmdb_id=tmdb_id,
        seasons=_dump_seasons(payload.seasons) if payload.media_kind == MediaKind.SERIES else [],
        tags=normalize_tags(payload.tags),
        added_by=added_by,
    )
    session.add(disc)
    await session.commit()
    await session.refresh(disc)
    logger.info(
        "Disc created",
        extra={"disc_id": str(disc.id), "media_kind": disc.media_kind.value, "tmdb_id": tmdb_id},
    )
    return disc


async def get_disc(session: AsyncSession, disc_id: uuid.UUID) -> Disc:
    disc = await session.get(Disc, disc_id)
    if not disc:
        raise ValueError("Disc not found")
    return disc


async def update_disc(session: AsyncSession, disc_id: uuid.UUID, payload: DiscUpdate) -> Disc:
    """Apply a partial update; unset fields are left alone."""
    disc = await get_disc(session, disc_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("media_kind", MediaKind.MOVIE) is None:
        changes.pop("media_kind")

    if "title" in changes:
        title = (changes["title"] or "").strip()
        if not title:
            raise ValueError("Title is required")
        changes["title"] = title
    if "tmdb_id" in changes:
        tmdb_id = (changes["tmdb_id"] or "").strip() or None
        if tmdb_id and await _tmdb_id_taken(session, tmdb_id, exclude=disc.id):
            raise ValueError("A disc with this TMDB id already exists")
        changes["tmdb_id"] = tmdb_id
    if "seasons" in changes:
        changes["seasons"] = _dump_seasons(payload.seasons)
    if "tags" in changes:
        changes["tags"] = normalize_tags(changes["tags"])
    for key in ("genres", "genres_fr"):
        if key in changes and changes[key] is None:
            changes[key] = []
    for key in ("purchase_price", "rating"):
        if key in changes and changes[key] is None:
            changes[key] = 0.0

    for key, value in changes.items():
        setattr(disc, key, value)
    if disc.media_kind != MediaKind.SERIES:
        disc.seasons = []
    await session.commit()
    await session.refresh(disc)
    logger.info("Disc updated", extra={"disc_id": str(disc.id), "fields": sorted(changes)})
    return disc


async def update_tags(session: AsyncSession, disc_id: uuid.UUID, tags: Sequence[str]) -> Disc:
    disc = await get_disc(session, disc_id)
    disc.tags = normalize_tags(tags)
    await session.commit()
    await session.refresh(disc)
    return disc


async def delete_disc(session: AsyncSession, disc_id: uuid.UUID) -> str:
    """Delete a disc and return its title for notification text."""
    disc = await get_disc(session, disc_id)
    title = disc.title
    await session.delete(disc)
    await session.commit()
    logger.info("Disc deleted", extra={"disc_id": str(disc_id)})
    return title


async def list_discs(
    session: AsyncSession,
    *,
    media_kind: MediaKind | None = None,
    genre: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> list[Disc]:
    """List discs newest first, optionally filtered by kind and genre."""
    stmt = select(Disc).order_by(Disc.created_at.desc(), Disc.title.asc())
    if media_kind is not None:
        stmt = stmt.where(Disc.media_kind == media_kind)
    if not genre:
        result = await session.execute(stmt.offset(skip).limit(limit))
        return list(result.scalars().all())

    # Genre lists live in JSON columns; filter in Python so every engine behaves alike.
    result = await session.execute(stmt)
    needle = genre.casefold()
    matching = [
        disc
        for disc in result.scalars().all()
        if any(needle == value.casefold() for value in [*(disc.genres or []), *(disc.genres_fr or [])])
    ]
    return matching[skip : skip + limit]


async def _load_all(session: AsyncSession) -> list[Disc]:
    result = await session.execute(select(Disc).order_by(Disc.created_at.desc(), Disc.title.asc()))
    return list(result.scalars().all())


async def fetch_all(session: AsyncSession) -> list[CatalogRecord]:
    """Snapshot the whole catalog for aggregation."""
    return [to_record(disc) for disc in await _load_all(session)]


async def find(
    session: AsyncSession,
    predicates: Sequence[SearchPredicate],
    *,
    skip: int = 0,
    limit: int = 20,
) -> list[Disc]:
    """Return discs satisfying every predicate, newest first."""
    discs = await _load_all(session)
    matching = [disc for disc in discs if matches_all(to_record(disc), predicates)]
    return matching[skip : skip + limit]


async def search_discs(session: AsyncSession, query: str, *, skip: int = 0, limit: int = 20) -> list[Disc]:
    """Search the catalog with ``field:value`` syntax or free text.

    Implementation notes:
    - Structured tokens are AND-combined through ``find``.
    - A query without structured tokens falls back to a substring match over
      the text fields, OR-combined.
    """
    search_start = monotonic()
    normalized_query = query.strip()
    if not normalized_query:
        return []
    query_truncated = len(normalized_query) > MAX_SEARCH_QUERY_LENGTH
    normalized_query = normalized_query[:MAX_SEARCH_QUERY_LENGTH]

    predicates = parse_query(normalized_query)
    if predicates:
        mode = "structured"
        items = await find(session, predicates, skip=skip, limit=limit)
    else:
        mode = "fallback"
        discs = await _load_all(session)
        items = [disc for disc in discs if matches_any_text(to_record(disc), normalized_query)][skip : skip + limit]

    logger.info(
        "Disc search completed",
        extra={
            "query_length": len(normalized_query),
            "query_truncated": query_truncated,
            "query_mode": mode,
            "predicates": len(predicates),
            "skip": skip,
            "limit": limit,
            "returned": len(items),
            "search_ms": round((monotonic() - search_start) * 1000, 2),
        },
    )
    return items
