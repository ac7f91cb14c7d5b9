"""Pull the PWA checks out of a raw audit payload."""
import logging
import math
from typing import Any, Mapping, Optional

from models.report import (
    CheckResult,
    ExtractedAudits,
    InstallableManifestCheck,
    InstallableManifestDetails,
    ServiceWorkerCheck,
    ServiceWorkerDetails,
)

logger = logging.getLogger(__name__)

# Audit ids as reported by the audit tool
IS_ON_HTTPS = "is-on-https"
INSTALLABLE_MANIFEST = "installable-manifest"
SERVICE_WORKER = "service-worker"
MASKABLE_ICON = "maskable-icon"
SPLASH_SCREEN = "splash-screen"
THEMED_OMNIBOX = "themed-omnibox"
VIEWPORT = "viewport"

AUDIT_IDS = [
    SERVICE_WORKER,
    INSTALLABLE_MANIFEST,
    IS_ON_HTTPS,
    MASKABLE_ICON,
    SPLASH_SCREEN,
    THEMED_OMNIBOX,
    VIEWPORT,
]


def is_truthy(value: Any) -> bool:
    """Lenient truthiness used for audit scores.

    Mirrors how the audit tool's JSON consumers read scores: any
    non-empty string passes (including "false"), non-zero numbers pass,
    objects and arrays pass even when empty. None, False, 0, NaN and ""
    fail.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (int, float, str)):
        return bool(value)
    return True


def _get(value: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _url(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    if value is not None:
        logger.debug(f"Ignoring non-string URL field: {value!r}")
    return None


def _check(audits: Mapping[str, Any], audit_id: str) -> CheckResult:
    return CheckResult(score=is_truthy(_get(audits, audit_id, "score")))


def extract_audits(audits: Mapping[str, Any]) -> ExtractedAudits:
    """Build an ExtractedAudits record from the raw ``audits`` mapping.

    Never raises: absent or oddly shaped entries come back as failed checks
    with empty details.
    """
    if not isinstance(audits, Mapping):
        logger.warning(f"Audit payload is not a mapping ({type(audits).__name__}), treating as empty")
        audits = {}

    missing = [audit_id for audit_id in AUDIT_IDS if not isinstance(audits.get(audit_id), Mapping)]
    if missing:
        logger.debug(f"Audits missing or malformed: {', '.join(missing)}")

    manifest_url = _url(_get(audits, INSTALLABLE_MANIFEST, "details", "debugData", "manifestUrl"))
    script_url = _url(_get(audits, SERVICE_WORKER, "details", "scriptUrl"))
    scope_url = _url(_get(audits, SERVICE_WORKER, "details", "scopeUrl"))

    return ExtractedAudits(
        is_on_https=_check(audits, IS_ON_HTTPS),
        installable_manifest=InstallableManifestCheck(
            score=is_truthy(_get(audits, INSTALLABLE_MANIFEST, "score")),
            details=InstallableManifestDetails(url=manifest_url),
        ),
        service_worker=ServiceWorkerCheck(
            score=is_truthy(_get(audits, SERVICE_WORKER, "score")),
            details=ServiceWorkerDetails(url=script_url, scope=scope_url),
        ),
        maskable_icon=_check(audits, MASKABLE_ICON),
        splash_screen=_check(audits, SPLASH_SCREEN),
        themed_omnibox=_check(audits, THEMED_OMNIBOX),
        viewport=_check(audits, VIEWPORT),
    )
