import httpx
import logging
from typing import Optional, Dict

# Default timeout configuration (in seconds)
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONNECT_TIMEOUT = 5.0

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Linux; Android 12; Pixel 7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/108.0.0.0 Mobile Safari/537.36 Edg/108.0.1462.42",
    "Accept": "*/*",
}


async def fetch_url(
    url: str,
    timeout: Optional[float] = None,
    connect_timeout: Optional[float] = None,
    headers: Optional[Dict[str, str]] = None,
    referer: Optional[str] = None,
) -> httpx.Response:
    """
    GET a URL with redirects followed and configurable timeouts.

    Args:
        url: The URL to fetch
        timeout: Total request timeout in seconds (default: 10s)
        connect_timeout: Connection timeout in seconds (default: 5s)
        headers: Extra HTTP headers, merged over the defaults
        referer: Page URL sent as the Referer header

    Returns:
        httpx.Response object. Status codes are not checked here.
    """
    logger = logging.getLogger(__name__)
    logger.debug(f"HTTP GET {url} (timeout: {timeout or DEFAULT_TIMEOUT}s)")

    timeout_config = httpx.Timeout(
        timeout=timeout or DEFAULT_TIMEOUT,
        connect=connect_timeout or DEFAULT_CONNECT_TIMEOUT
    )
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}
    if referer:
        request_headers["Referer"] = referer

    try:
        async with httpx.AsyncClient(timeout=timeout_config, follow_redirects=True) as client:
            response = await client.get(url, headers=request_headers)
            logger.debug(f"HTTP {response.status_code} {url} ({len(response.content)} bytes)")
            return response
    except httpx.TimeoutException as e:
        logger.warning(f"HTTP timeout for {url}: {e}")
        raise
    except httpx.RequestError as e:
        logger.warning(f"HTTP request error for {url}: {e}")
        raise
