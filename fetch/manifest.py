import json
import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from fetch.http_client import fetch_url
from models.manifest import ManifestFetchResult

logger = logging.getLogger(__name__)

BOM = "\ufeff"


def parse_manifest(text: str) -> Any:
    """Parse manifest text, tolerating a leading byte order mark."""
    return json.loads(text.lstrip(BOM).strip())


class ManifestFetcher:
    """Fetch and parse a web app manifest linked from a page."""

    def __init__(self, timeout: float = None):
        self.timeout = timeout

    async def fetch(self, manifest_url: str, page_url: str) -> ManifestFetchResult:
        url = urljoin(page_url, manifest_url)
        logger.debug(f"Fetching manifest {url} for {page_url}")

        try:
            response = await fetch_url(url, timeout=self.timeout, referer=page_url)
        except httpx.HTTPError as e:
            return ManifestFetchResult(error=f"Failed to fetch manifest {url}: {e}")

        if not response.is_success:
            return ManifestFetchResult(error=f"Manifest {url} returned HTTP {response.status_code}")

        raw = response.text
        try:
            data = parse_manifest(raw)
        except ValueError as e:
            return ManifestFetchResult(error=f"Manifest {url} is not valid JSON: {e}")

        if not isinstance(data, dict):
            return ManifestFetchResult(error=f"Manifest {url} is not a JSON object")

        logger.debug(f"Parsed manifest {url} with {len(data)} members")
        return ManifestFetchResult(raw=raw, json=data)
