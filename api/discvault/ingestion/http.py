from __future__ import annotations

import logging

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from discvault.utils.redaction import SENSITIVE_HEADERS, redact_mapping, redact_secrets

logger = logging.getLogger("discvault.ingestion")

REQUEST_TIMEOUT_SECONDS = 15


class ExternalAPIError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamUnavailable(ExternalAPIError):
    """Transient upstream failure worth retrying."""


async def _request(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict | None = None,
    method: str = "GET",
) -> httpx.Response:
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(3),
            wait=wait_exponential_jitter(initial=1, max=8),
            retry=retry_if_exception_type((httpx.TransportError, UpstreamUnavailable)),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as client:
                    response = await client.request(method, url, headers=headers, params=params)
                    if response.status_code >= 500:
                        raise UpstreamUnavailable(
                            f"Server error {response.status_code}", status_code=response.status_code
                        )
                    if response.status_code >= 400:
                        raise ExternalAPIError(
                            f"Upstream returned {response.status_code}", status_code=response.status_code
                        )
                    return response
    except (httpx.TransportError, ExternalAPIError) as exc:
        logger.warning(
            "Outbound request failed",
            extra={
                "url": redact_secrets(url),
                "params": redact_mapping(params),
                "headers": redact_mapping(headers, SENSITIVE_HEADERS),
                "error": redact_secrets(str(exc)),
            },
        )
        if isinstance(exc, ExternalAPIError):
            raise
        raise ExternalAPIError(f"Request to upstream failed: {exc.__class__.__name__}") from exc
    raise ExternalAPIError("Unreachable")


async def fetch_json(
    url: str, *, headers: dict[str, str] | None = None, params: dict | None = None, method: str = "GET"
) -> dict:
    response = await _request(url, headers=headers, params=params, method=method)
    try:
        return response.json()
    except ValueError as exc:
        raise ExternalAPIError("Upstream returned invalid JSON") from exc


async def fetch_text(url: str, *, headers: dict[str, str] | None = None, params: dict | None = None) -> str:
    response = await _request(url, headers=headers, params=params)
    return response.text
