from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class FeatureRule:
    """A regex rule that flags a service worker capability."""
    name: str  # output key, e.g. 'detectedPushRegistration'
    patterns: List[str] = field(default_factory=list)
    description: str = ""


@dataclass(frozen=True)
class ServiceWorkerAnalysis:
    """Feature classification of a service worker plus the fetched sources."""
    features: Dict[str, bool] = field(default_factory=dict)
    raw: List[str] = field(default_factory=list)
