"""Outbound metadata lookups: TMDB and barcode databases."""

from discvault.ingestion.barcode import BarcodeItem, lookup_dvdfr, lookup_upc
from discvault.ingestion.http import ExternalAPIError, fetch_json, fetch_text
from discvault.ingestion.tmdb import TMDBClient, TMDBCredentialsMissing

__all__ = [
    "BarcodeItem",
    "ExternalAPIError",
    "TMDBClient",
    "TMDBCredentialsMissing",
    "fetch_json",
    "fetch_text",
    "lookup_dvdfr",
    "lookup_upc",
]
