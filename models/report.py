import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class CheckResult:
    """A single pass/fail audit check."""
    score: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score}


@dataclass(frozen=True)
class InstallableManifestDetails:
    url: Optional[str] = None  # manifest URL reported by the audit


@dataclass(frozen=True)
class ServiceWorkerDetails:
    url: Optional[str] = None  # script URL
    scope: Optional[str] = None
    features: Optional[Dict[str, Any]] = field(default=None, hash=False)


@dataclass(frozen=True)
class InstallableManifestCheck:
    score: bool = False
    details: InstallableManifestDetails = field(default_factory=InstallableManifestDetails)

    def to_dict(self) -> Dict[str, Any]:
        details: Dict[str, Any] = {}
        if self.details.url is not None:
            details["url"] = self.details.url
        return {"score": self.score, "details": details}


@dataclass(frozen=True)
class ServiceWorkerCheck:
    score: bool = False
    details: ServiceWorkerDetails = field(default_factory=ServiceWorkerDetails)

    def to_dict(self) -> Dict[str, Any]:
        details: Dict[str, Any] = {}
        if self.details.url is not None:
            details["url"] = self.details.url
        if self.details.scope is not None:
            details["scope"] = self.details.scope
        if self.details.features is not None:
            details["features"] = dict(self.details.features)
        return {"score": self.score, "details": details}


@dataclass(frozen=True)
class ExtractedAudits:
    """The fixed set of checks pulled out of a raw audit payload.

    Every field is always populated; a check missing from the payload
    is represented as a failed check rather than omitted.
    """
    is_on_https: CheckResult = field(default_factory=CheckResult)
    installable_manifest: InstallableManifestCheck = field(default_factory=InstallableManifestCheck)
    service_worker: ServiceWorkerCheck = field(default_factory=ServiceWorkerCheck)
    maskable_icon: CheckResult = field(default_factory=CheckResult)
    splash_screen: CheckResult = field(default_factory=CheckResult)
    themed_omnibox: CheckResult = field(default_factory=CheckResult)
    viewport: CheckResult = field(default_factory=CheckResult)

    @property
    def manifest_url(self) -> Optional[str]:
        return self.installable_manifest.details.url

    @property
    def service_worker_url(self) -> Optional[str]:
        return self.service_worker.details.url

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isOnHttps": self.is_on_https.to_dict(),
            "installableManifest": self.installable_manifest.to_dict(),
            "serviceWorker": self.service_worker.to_dict(),
            "maskableIcon": self.maskable_icon.to_dict(),
            "splashScreen": self.splash_screen.to_dict(),
            "themedOmnibox": self.themed_omnibox.to_dict(),
            "viewport": self.viewport.to_dict(),
        }


@dataclass(frozen=True)
class ServiceWorkerArtifact:
    url: str
    raw: Optional[Tuple[str, ...]] = None  # fetched script sources, main worker first

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url}
        if self.raw is not None:
            data["raw"] = list(self.raw)
        return data


@dataclass(frozen=True)
class WebAppManifestArtifact:
    url: str
    raw: Optional[str] = None
    json: Optional[Dict[str, Any]] = field(default=None, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url}
        if self.raw is not None:
            data["raw"] = self.raw
        if self.json is not None:
            data["json"] = copy.deepcopy(self.json)
        return data


@dataclass(frozen=True)
class Artifacts:
    web_app_manifest: Optional[WebAppManifestArtifact] = None
    service_worker: Optional[ServiceWorkerArtifact] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.web_app_manifest is not None:
            data["webAppManifest"] = self.web_app_manifest.to_dict()
        if self.service_worker is not None:
            data["serviceWorker"] = self.service_worker.to_dict()
        return data


@dataclass(frozen=True)
class Report:
    """Normalized PWA audit report returned to the response layer."""
    audits: ExtractedAudits
    artifacts: Artifacts = field(default_factory=Artifacts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "audits": self.audits.to_dict(),
            "artifacts": self.artifacts.to_dict(),
        }
