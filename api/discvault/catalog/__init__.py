"""Pure catalog logic: record snapshots, query parsing, and statistics."""

from discvault.catalog.query_parser import SearchField, SearchPredicate, matches_all, matches_any_text, parse_query
from discvault.catalog.records import CatalogRecord, MediaKind, Season
from discvault.catalog.statistics import (
    SpotlightBasis,
    StatisticsOptions,
    StatisticsSummary,
    UnknownPricePolicy,
    summarize,
)

__all__ = [
    "CatalogRecord",
    "MediaKind",
    "Season",
    "SearchField",
    "SearchPredicate",
    "SpotlightBasis",
    "StatisticsOptions",
    "StatisticsSummary",
    "UnknownPricePolicy",
    "matches_all",
    "matches_any_text",
    "parse_query",
    "summarize",
]
