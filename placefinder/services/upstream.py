"""
Thin JSON-over-HTTP helper shared by the provider variants and the review fetcher.

Transport problems are translated into placefinder exceptions so callers only
have one error family to handle.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from placefinder.core.exceptions import (
    MalformedResponseError,
    ProviderRequestError,
    ProviderStatusError,
    ProviderTimeoutError,
)

logger = logging.getLogger(__name__)


async def fetch_json(
    method: str,
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    Send a single request and return the decoded JSON object.

    Args:
        method: HTTP method
        url: Endpoint URL without credentials
        params: Query-string parameters
        json: JSON request body
        headers: Extra request headers
        timeout: Request timeout in seconds; None disables it
        transport: Optional httpx transport (used by tests)

    Returns:
        The response body as a dict

    Raises:
        ProviderTimeoutError, ProviderRequestError, ProviderStatusError,
        MalformedResponseError
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            response = await client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException:
            raise ProviderTimeoutError(url)
        except httpx.HTTPError as e:
            raise ProviderRequestError(url, type(e).__name__)

    if response.status_code != 200:
        raise ProviderStatusError(url, response.status_code)

    try:
        data = response.json()
    except ValueError:
        raise MalformedResponseError(url, "body is not valid JSON")

    if not isinstance(data, dict):
        raise MalformedResponseError(url, "expected a JSON object")

    logger.debug(f"{method} {url} -> {response.status_code}")
    return data
