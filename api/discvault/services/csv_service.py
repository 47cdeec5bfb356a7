"""CSV export and import of the disc catalog.

Invariants:
- Exports start with a UTF-8 BOM so spreadsheet tools detect the encoding.
- An import row whose title, media kind, and release year match an existing
  disc is skipped, never duplicated.
"""

from __future__ import annotations

import csv
import io
import logging
import uuid
from datetime import date
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.catalog.records import MediaKind
from discvault.models.disc import Disc
from discvault.schema.disc import DiscCreate, DiscImportReport, SeasonPayload
from discvault.services import disc_service

BOM = "\ufeff"
CSV_HEADER = [
    "Title",
    "Type",
    "GenreEn",
    "GenreFr",
    "DescriptionEn",
    "DescriptionFr",
    "Director",
    "ReleaseYear",
    "Runtime",
    "Rating",
    "PurchasePrice",
    "PurchaseDate",
    "CoverImageURL",
    "BackdropURL",
    "TMDBID",
    "Tags",
    "Seasons",
    "TotalEpisodes",
]
LIST_SEPARATOR = ";"

logger = logging.getLogger("discvault.services.csv")


class CSVImportError(ValueError):
    """Raised when an uploaded file cannot be read as a catalog CSV."""


def _join(values: Iterable[str] | None) -> str:
    return LIST_SEPARATOR.join(value for value in values or [] if value)


def _split(cell: str) -> list[str]:
    return [part for part in cell.split(LIST_SEPARATOR) if part]


def _number(value: int | float | None, fmt: str = "{}") -> str:
    return fmt.format(value) if value else ""


def format_seasons(seasons: Iterable[dict] | None) -> str:
    """Serialize seasons as ``number:episodes[:year]`` joined by ``;``."""
    parts = []
    for season in seasons or []:
        part = f"{int(season.get('number') or 0)}:{int(season.get('episode_count') or 0)}"
        if season.get("year"):
            part += f":{int(season['year'])}"
        parts.append(part)
    return LIST_SEPARATOR.join(parts)


def parse_seasons(cell: str) -> list[SeasonPayload]:
    seasons = []
    for part in _split(cell):
        pieces = part.split(":")
        if len(pieces) < 2:
            continue
        seasons.append(
            SeasonPayload(
                number=_to_int(pieces[0]),
                episode_count=_to_int(pieces[1]),
                year=(_to_int(pieces[2]) or None) if len(pieces) >= 3 else None,
            )
        )
    return seasons


def _to_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def _to_float(value: str) -> float:
    try:
        return float(value.strip())
    except ValueError:
        return 0.0


def _to_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def disc_row(disc: Disc) -> list[str]:
    return [
        disc.title,
        disc.media_kind.value,
        _join(disc.genres),
        _join(disc.genres_fr),
        disc.description or "",
        disc.description_fr or "",
        disc.director or "",
        _number(disc.release_year),
        _number(disc.runtime_minutes),
        _number(disc.rating, "{:.1f}"),
        _number(disc.purchase_price, "{:.2f}"),
        disc.purchase_date.isoformat() if disc.purchase_date else "",
        disc.cover_image_url or "",
        disc.backdrop_url or "",
        disc.tmdb_id or "",
        _join(disc.tags),
        format_seasons(disc.seasons) if disc.media_kind == MediaKind.SERIES else "",
        _number(disc.total_episodes),
    ]


async def export_csv(session: AsyncSession) -> str:
    """Render the whole catalog as CSV text, BOM included."""
    result = await session.execute(select(Disc).order_by(Disc.created_at.desc(), Disc.title.asc()))
    discs = result.scalars().all()
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for disc in discs:
        writer.writerow(disc_row(disc))
    logger.info("Catalog exported", extra={"rows": len(discs)})
    return BOM + buffer.getvalue()


def decode_upload(content: bytes) -> list[list[str]]:
    """Decode uploaded bytes into CSV rows, header included."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CSVImportError("invalid UTF-8 encoding in file") from exc
    if text.startswith(BOM):
        text = text[len(BOM):]
    rows = list(csv.reader(io.StringIO(text, newline="")))
    if len(rows) < 2:
        raise CSVImportError("CSV file is empty or invalid")
    return rows


def _duplicate_key(title: str, media_kind: MediaKind, release_year: int) -> tuple[str, str, int]:
    return (title, media_kind.value, release_year)


async def import_csv(session: AsyncSession, content: bytes, *, added_by: uuid.UUID | None = None) -> DiscImportReport:
    """Import discs from CSV bytes produced by ``export_csv`` or by hand."""
    rows = decode_upload(content)
    result = await session.execute(select(Disc.title, Disc.media_kind, Disc.release_year))
    existing = {_duplicate_key(title, kind, year or 0) for title, kind, year in result.all()}

    report = DiscImportReport()
    for line_number, fields in enumerate(rows[1:], start=2):
        if len(fields) < len(CSV_HEADER):
            report.errors.append(f"Line {line_number}: insufficient fields")
            report.failed += 1
            continue

        media_kind = MediaKind.SERIES if fields[1].strip() == MediaKind.SERIES.value else MediaKind.MOVIE
        release_year = _to_int(fields[7])
        title = fields[0].strip()
        # A row without a year matches any stored year.
        if release_year:
            duplicate = _duplicate_key(title, media_kind, release_year) in existing
        else:
            duplicate = any(key[:2] == (title, media_kind.value) for key in existing)
        if duplicate:
            report.skipped += 1
            continue

        try:
            payload = DiscCreate(
                title=title,
                media_kind=media_kind,
                genres=_split(fields[2]),
                genres_fr=_split(fields[3]),
                description=fields[4] or None,
                description_fr=fields[5] or None,
                director=fields[6] or None,
                release_year=release_year or None,
                runtime_minutes=_to_int(fields[8]) or None,
                rating=_to_float(fields[9]),
                purchase_price=_to_float(fields[10]),
                purchase_date=_to_date(fields[11]) if fields[11] else None,
                cover_image_url=fields[12] or None,
                backdrop_url=fields[13] or None,
                tmdb_id=fields[14] or None,
                tags=_split(fields[15]),
                seasons=parse_seasons(fields[16]),
            )
            await disc_service.create_disc(session, payload, added_by=added_by)
        except ValueError as exc:
            await session.rollback()
            report.errors.append(f"Line {line_number}: {exc}")
            report.failed += 1
            continue
        existing.add(_duplicate_key(title, media_kind, release_year))
        report.success += 1

    logger.info(
        "Catalog imported",
        extra={"success": report.success, "failed": report.failed, "skipped": report.skipped},
    )
    return report
