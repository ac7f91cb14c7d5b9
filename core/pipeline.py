import logging
from collections.abc import Mapping
from typing import Any, Optional

from core.assembler import assemble_report
from core.enricher import Enricher
from core.errors import AuditInvocationError
from core.extractor import extract_audits
from models.report import Report


class ReportPipeline:
    """Audit a page, enrich the result, and assemble the report.

    The audit must complete before enrichment starts since the audit
    output decides which enrichment branches apply.
    """

    def __init__(self, invoker: Any, service_worker_analyzer: Any, manifest_fetcher: Any):
        self.logger = logging.getLogger(__name__)
        self.invoker = invoker
        self.enricher = Enricher(service_worker_analyzer, manifest_fetcher)

    async def run(self, url: str, desktop: Optional[bool] = None) -> Report:
        self.logger.debug(f"Invoking audit for {url} (desktop={bool(desktop)})")
        raw_audits = await self.invoker.invoke(url, bool(desktop))
        if not raw_audits or not isinstance(raw_audits, Mapping):
            raise AuditInvocationError("Lighthouse audit failed")
        self.logger.debug(f"Audit returned {len(raw_audits)} checks")

        audits = extract_audits(raw_audits)
        enrichment = await self.enricher.enrich(audits, url)
        return assemble_report(audits, enrichment)
