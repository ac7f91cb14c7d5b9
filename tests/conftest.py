import os
import sys
import pytest

# Ensure project root is on sys.path for imports like `core.*`
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
if TESTS_DIR not in sys.path:
    sys.path.insert(0, TESTS_DIR)

# Configure pytest-asyncio
pytest_plugins = ('pytest_asyncio',)

from helpers import MANIFEST_URL, SW_SCOPE, SW_URL
from models.manifest import ManifestFetchResult
from models.service_worker import ServiceWorkerAnalysis


@pytest.fixture
def raw_audits():
    """A Lighthouse audits payload with every PWA check reported."""
    return {
        "is-on-https": {"score": 1},
        "installable-manifest": {
            "score": 1,
            "details": {"debugData": {"manifestUrl": MANIFEST_URL}},
        },
        "service-worker": {
            "score": 1,
            "details": {"scriptUrl": SW_URL, "scopeUrl": SW_SCOPE},
        },
        "maskable-icon": {"score": 1},
        "splash-screen": {"score": 0},
        "themed-omnibox": {"score": 1},
        "viewport": {"score": 1},
    }


@pytest.fixture
def sw_analysis():
    return ServiceWorkerAnalysis(
        features={
            "detectedBackgroundSync": False,
            "detectedPeriodicBackgroundSync": False,
            "detectedPushRegistration": True,
            "detectedSignsOfLogic": True,
            "detectedEmpty": False,
        },
        raw=["self.addEventListener('push', e => {});"],
    )


@pytest.fixture
def manifest_result():
    return ManifestFetchResult(raw='{"name": "X"}', json={"name": "X"})
