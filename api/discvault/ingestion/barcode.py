"""Barcode lookups against UPC Item DB (JSON) and DVDFr (XML)."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass, field

from discvault.core.config import settings
from discvault.ingestion.http import ExternalAPIError, fetch_json, fetch_text

DIRECTOR_STAR_TYPE = "Réalisateur"

logger = logging.getLogger("discvault.ingestion.barcode")


@dataclass(slots=True)
class BarcodeItem:
    """Standardized result of a DVDFr barcode lookup."""
    title: str
    year: str | None = None
    media: str | None = None
    edition: str | None = None
    cover: str | None = None
    publisher: str | None = None
    directors: list[str] = field(default_factory=list)
    dvdfr_id: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def _text(element: ET.Element | None, path: str) -> str | None:
    if element is None:
        return None
    found = element.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip() or None


def parse_dvdfr(document: str) -> list[BarcodeItem]:
    """Parse a DVDFr search response.

    DVDFr answers ``<errors><error><code/><message/></error></errors>`` on
    failure and ``<dvds><dvd>...</dvd></dvds>`` otherwise.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise ExternalAPIError("failed to parse DVDFr response") from exc

    if root.tag == "errors":
        error = root.find("error")
        if error is not None:
            raise ExternalAPIError(
                f"DVDFr API error: {_text(error, 'message') or ''} (code: {_text(error, 'code') or ''})"
            )
        return []

    items: list[BarcodeItem] = []
    for dvd in root.findall("dvd"):
        titles = dvd.find("titres")
        title = _text(titles, "vo") or _text(titles, "fr") or ""
        directors = [
            (star.text or "").strip()
            for star in dvd.findall("stars/star")
            if star.get("type") == DIRECTOR_STAR_TYPE and (star.text or "").strip()
        ]
        items.append(
            BarcodeItem(
                title=title,
                year=_text(dvd, "annee"),
                media=_text(dvd, "media"),
                edition=_text(dvd, "edition"),
                cover=_text(dvd, "cover"),
                publisher=_text(dvd, "editeur"),
                directors=directors,
                dvdfr_id=_text(dvd, "id"),
            )
        )
    return items


async def lookup_upc(barcode: str) -> dict:
    """Proxy the UPC Item DB lookup payload unchanged."""
    return await fetch_json(settings.barcode_lookup_url, params={"upc": barcode})


async def lookup_dvdfr(barcode: str) -> list[BarcodeItem]:
    document = await fetch_text(
        settings.dvdfr_lookup_url,
        params={"gencode": barcode},
        headers={"User-Agent": settings.metadata_user_agent},
    )
    items = parse_dvdfr(document)
    logger.info("DVDFr lookup completed", extra={"barcode": barcode, "results": len(items)})
    return items
