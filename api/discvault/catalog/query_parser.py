"""Structured search query parsing and in-memory predicate matching.

Queries use a compact ``field:value`` language, e.g. ``title:alien year:1979``.

Invariants:
- Tokens without a colon or with an empty value are dropped, never reused as
  free text.
- Unknown field names survive parsing; the matchers ignore them.
- Predicates combine with AND; genre and description OR their two languages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterable

from discvault.catalog.records import CatalogRecord


class SearchField(str, enum.Enum):
    """Field names understood by the catalog matchers."""
    TITLE = "title"
    DIRECTOR = "director"
    TAG = "tag"
    GENRE = "genre"
    YEAR = "year"
    TYPE = "type"
    DESCRIPTION = "description"


_FIELDS_BY_NAME = {member.value: member for member in SearchField}


@dataclass(frozen=True, slots=True)
class SearchPredicate:
    """A single field-scoped match condition."""
    field: str
    value: str

    @property
    def kind(self) -> SearchField | None:
        return _FIELDS_BY_NAME.get(self.field)


def parse_query(query: str) -> tuple[SearchPredicate, ...]:
    """Split a query into ``field:value`` predicates in input order."""
    predicates: list[SearchPredicate] = []
    for token in (query or "").split():
        if ":" not in token:
            continue
        field_name, value = token.split(":", 1)
        if not value:
            continue
        predicates.append(SearchPredicate(field=field_name.lower(), value=value))
    return tuple(predicates)


def _contains(haystack: str | None, needle: str) -> bool:
    if not haystack:
        return False
    return needle.casefold() in haystack.casefold()


def _any_contains(values: Iterable[str], needle: str) -> bool:
    return any(_contains(value, needle) for value in values)


def _match_title(record: CatalogRecord, value: str) -> bool:
    return _contains(record.title, value)


def _match_director(record: CatalogRecord, value: str) -> bool:
    return _contains(record.director, value)


def _match_tag(record: CatalogRecord, value: str) -> bool:
    return _any_contains(record.tags, value)


def _match_genre(record: CatalogRecord, value: str) -> bool:
    return _any_contains(record.genres, value) or _any_contains(record.genres_fr, value)


def _match_year(record: CatalogRecord, value: str) -> bool:
    try:
        year = int(value)
    except ValueError:
        # Non-numeric years impose no constraint.
        return True
    return record.release_year == year


def _match_type(record: CatalogRecord, value: str) -> bool:
    return record.media_kind.value == value


def _match_description(record: CatalogRecord, value: str) -> bool:
    return _contains(record.description, value) or _contains(record.description_fr, value)


Matcher = Callable[[CatalogRecord, str], bool]

MATCHERS: dict[SearchField, Matcher] = {
    SearchField.TITLE: _match_title,
    SearchField.DIRECTOR: _match_director,
    SearchField.TAG: _match_tag,
    SearchField.GENRE: _match_genre,
    SearchField.YEAR: _match_year,
    SearchField.TYPE: _match_type,
    SearchField.DESCRIPTION: _match_description,
}


def matches_all(record: CatalogRecord, predicates: Iterable[SearchPredicate]) -> bool:
    """Return True when the record satisfies every recognized predicate."""
    for predicate in predicates:
        kind = predicate.kind
        if kind is None:
            continue
        if not MATCHERS[kind](record, predicate.value):
            return False
    return True


def matches_any_text(record: CatalogRecord, text: str) -> bool:
    """Unscoped fallback: substring match across the searchable text fields."""
    needle = text.strip()
    if not needle:
        return False
    return (
        _contains(record.title, needle)
        or _contains(record.director, needle)
        or _any_contains(record.tags, needle)
        or _any_contains(record.genres, needle)
        or _any_contains(record.genres_fr, needle)
        or _contains(record.description, needle)
        or _contains(record.description_fr, needle)
    )
