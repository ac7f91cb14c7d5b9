from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ManifestFetchResult:
    """Outcome of fetching a web app manifest.

    Either ``raw`` and ``json`` are set, or ``error`` describes why not.
    """
    raw: Optional[str] = None
    json: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.raw is not None and self.json is not None
