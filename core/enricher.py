"""
Concurrent service worker and manifest enrichment.

Both branches run together and are always awaited to completion; a failure
in one is captured in its BranchResult and never affects the other.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Mapping, Optional, TypeVar

from core.errors import ManifestFetchError
from models.manifest import ManifestFetchResult
from models.report import ExtractedAudits
from models.service_worker import ServiceWorkerAnalysis

T = TypeVar("T")


@dataclass(frozen=True)
class BranchResult(Generic[T]):
    """Tagged outcome of one enrichment branch: a value or the error."""
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Enrichment:
    """Results of both branches. ``None`` means the branch was not applicable."""
    service_worker: Optional[BranchResult[ServiceWorkerAnalysis]] = None
    manifest: Optional[BranchResult[ManifestFetchResult]] = None


class Enricher:
    def __init__(self, service_worker_analyzer: Any, manifest_fetcher: Any):
        """
        Args:
            service_worker_analyzer: object with ``async analyze(script_url) -> ServiceWorkerAnalysis``
            manifest_fetcher: object with ``async fetch(manifest_url, page_url) -> ManifestFetchResult``
        """
        self.logger = logging.getLogger(__name__)
        self.service_worker_analyzer = service_worker_analyzer
        self.manifest_fetcher = manifest_fetcher

    async def enrich(self, audits: ExtractedAudits, page_url: str) -> Enrichment:
        script_url = audits.service_worker_url
        manifest_url = audits.manifest_url

        if not script_url and not manifest_url:
            self.logger.debug("No service worker or manifest reported, skipping enrichment")
            return Enrichment()

        sw_task = self._run_branch("service worker", self._analyze_service_worker(script_url)) if script_url else None
        manifest_task = self._run_branch("manifest", self._fetch_manifest(manifest_url, page_url)) if manifest_url else None

        pending = [task for task in (sw_task, manifest_task) if task is not None]
        self.logger.debug(f"Running {len(pending)} enrichment branch(es) for {page_url}")
        results = iter(await asyncio.gather(*pending))

        return Enrichment(
            service_worker=next(results) if sw_task else None,
            manifest=next(results) if manifest_task else None,
        )

    async def _run_branch(self, name: str, work: Awaitable[T]) -> BranchResult[T]:
        try:
            value = await work
        except Exception as e:
            self.logger.warning(f"{name} enrichment failed: {type(e).__name__}: {e}")
            return BranchResult(error=e)
        self.logger.debug(f"{name} enrichment succeeded")
        return BranchResult(value=value)

    async def _analyze_service_worker(self, script_url: str) -> ServiceWorkerAnalysis:
        analysis = await self.service_worker_analyzer.analyze(script_url)
        if not isinstance(analysis, ServiceWorkerAnalysis):
            raise TypeError(f"Service worker analyzer returned {type(analysis).__name__}")
        if not isinstance(analysis.features, Mapping):
            raise TypeError(f"Service worker features must be a mapping, got {type(analysis.features).__name__}")
        if not isinstance(analysis.raw, (list, tuple)) or not all(isinstance(source, str) for source in analysis.raw):
            raise TypeError("Service worker raw sources must be a list of strings")
        return analysis

    async def _fetch_manifest(self, manifest_url: str, page_url: str) -> ManifestFetchResult:
        result = await self.manifest_fetcher.fetch(manifest_url, page_url)
        if result is None:
            raise ManifestFetchError("Manifest fetcher returned no result", url=manifest_url)
        if not result.ok:
            raise ManifestFetchError(result.error or "Manifest fetch returned no content", url=manifest_url)
        if not isinstance(result.raw, str) or not isinstance(result.json, Mapping):
            raise ManifestFetchError("Manifest fetch returned malformed content", url=manifest_url)
        return result
