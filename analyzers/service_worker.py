import asyncio
import logging
import re
from typing import Dict, List, Optional
from urllib.parse import urljoin

import httpx

from core.errors import ServiceWorkerFetchError
from fetch.http_client import fetch_url
from models.service_worker import FeatureRule, ServiceWorkerAnalysis
from rules.rules_loader import load_feature_rules

IMPORT_SCRIPTS_PATTERN = re.compile(r'importScripts\s*\(([^)]*)\)')
STRING_LITERAL_PATTERN = re.compile(r'["\']([^"\']+)["\']')
COMMENT_PATTERN = re.compile(r'/\*.*?\*/|//[^\n]*', re.DOTALL)


def find_imported_scripts(source: str, base_url: str) -> List[str]:
    """Absolute URLs passed to importScripts(), in order, without duplicates."""
    urls: List[str] = []
    for args in IMPORT_SCRIPTS_PATTERN.findall(source):
        for src in STRING_LITERAL_PATTERN.findall(args):
            url = urljoin(base_url, src)
            if url not in urls:
                urls.append(url)
    return urls


def is_empty_worker(source: str) -> bool:
    return not COMMENT_PATTERN.sub("", source).strip()


def classify_features(sources: List[str], rules: List[FeatureRule]) -> Dict[str, bool]:
    """Flag every rule with a pattern matching any of the sources."""
    text = "\n".join(sources)
    features: Dict[str, bool] = {}
    for rule in rules:
        features[rule.name] = any(re.search(pattern, text, re.IGNORECASE) for pattern in rule.patterns)
    features["detectedEmpty"] = is_empty_worker(sources[0]) if sources else True
    return features


class ServiceWorkerAnalyzer:
    """Fetch a service worker (and the scripts it imports) and classify its features."""

    def __init__(self, rules: Optional[List[FeatureRule]] = None, timeout: float = None):
        self.logger = logging.getLogger(__name__)
        self.rules = rules if rules is not None else load_feature_rules()
        self.timeout = timeout

    async def _fetch_script(self, url: str) -> str:
        try:
            response = await fetch_url(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise ServiceWorkerFetchError(f"Failed to fetch service worker {url}: {e}", url=url) from e
        if not response.is_success:
            raise ServiceWorkerFetchError(
                f"Service worker {url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response.text

    async def _fetch_imports(self, urls: List[str]) -> List[str]:
        results = await asyncio.gather(*(self._fetch_script(url) for url in urls), return_exceptions=True)
        sources: List[str] = []
        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                self.logger.warning(f"Skipping imported script {url}: {result}")
                continue
            sources.append(result)
        return sources

    async def analyze(self, script_url: str) -> ServiceWorkerAnalysis:
        self.logger.debug(f"Analyzing service worker {script_url}")
        main_source = await self._fetch_script(script_url)

        imports = find_imported_scripts(main_source, script_url)
        if imports:
            self.logger.debug(f"Service worker imports {len(imports)} script(s)")
        sources = [main_source, *await self._fetch_imports(imports)]

        features = classify_features(sources, self.rules)
        detected = [name for name, found in features.items() if found]
        self.logger.debug(f"Service worker features for {script_url}: {', '.join(detected) or 'none'}")
        return ServiceWorkerAnalysis(features=features, raw=sources)
