import copy
from dataclasses import replace
from typing import Any, Dict, Optional

from core.enricher import Enrichment
from models.report import (
    Artifacts,
    ExtractedAudits,
    Report,
    ServiceWorkerArtifact,
    WebAppManifestArtifact,
)


def _features(features: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in features.items() if key != "raw"}


def _service_worker_artifact(audits: ExtractedAudits, enrichment: Enrichment) -> Optional[ServiceWorkerArtifact]:
    if not audits.service_worker_url:
        return None
    branch = enrichment.service_worker
    if branch is not None and branch.ok:
        return ServiceWorkerArtifact(url=audits.service_worker_url, raw=tuple(branch.value.raw))
    return ServiceWorkerArtifact(url=audits.service_worker_url)


def _manifest_artifact(audits: ExtractedAudits, enrichment: Enrichment) -> Optional[WebAppManifestArtifact]:
    if not audits.manifest_url:
        return None
    branch = enrichment.manifest
    if branch is not None and branch.ok:
        return WebAppManifestArtifact(
            url=audits.manifest_url,
            raw=branch.value.raw,
            json=copy.deepcopy(branch.value.json),
        )
    return WebAppManifestArtifact(url=audits.manifest_url)


def assemble_report(audits: ExtractedAudits, enrichment: Enrichment) -> Report:
    """Merge extracted checks and enrichment outcomes into a Report.

    Pure and infallible: failed branches only leave optional fields unset.
    The service worker features never carry the script source; that lives
    in the service worker artifact alone.
    """
    sw_branch = enrichment.service_worker
    if audits.service_worker_url and sw_branch is not None and sw_branch.ok:
        sw_check = replace(
            audits.service_worker,
            details=replace(audits.service_worker.details, features=_features(sw_branch.value.features)),
        )
        audits = replace(audits, service_worker=sw_check)

    return Report(
        audits=audits,
        artifacts=Artifacts(
            web_app_manifest=_manifest_artifact(audits, enrichment),
            service_worker=_service_worker_artifact(audits, enrichment),
        ),
    )
