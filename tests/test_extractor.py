import math

import pytest

from core.extractor import AUDIT_IDS, extract_audits, is_truthy
from helpers import MANIFEST_URL, SW_SCOPE, SW_URL

FIELDS = [
    "is_on_https",
    "installable_manifest",
    "service_worker",
    "maskable_icon",
    "splash_screen",
    "themed_omnibox",
    "viewport",
]


def test_extracts_scores_and_details(raw_audits):
    audits = extract_audits(raw_audits)

    assert audits.is_on_https.score is True
    assert audits.installable_manifest.score is True
    assert audits.installable_manifest.details.url == MANIFEST_URL
    assert audits.service_worker.score is True
    assert audits.service_worker.details.url == SW_URL
    assert audits.service_worker.details.scope == SW_SCOPE
    assert audits.service_worker.details.features is None
    assert audits.splash_screen.score is False
    assert audits.viewport.score is True


@pytest.mark.parametrize("audit_id", AUDIT_IDS)
def test_missing_check_defaults_to_failed(raw_audits, audit_id):
    del raw_audits[audit_id]

    audits = extract_audits(raw_audits)

    for name in FIELDS:
        assert isinstance(getattr(audits, name).score, bool)
    assert audits.to_dict().keys() == {
        "isOnHttps", "installableManifest", "serviceWorker",
        "maskableIcon", "splashScreen", "themedOmnibox", "viewport",
    }
    key = {
        "is-on-https": "is_on_https",
        "installable-manifest": "installable_manifest",
        "service-worker": "service_worker",
        "maskable-icon": "maskable_icon",
        "splash-screen": "splash_screen",
        "themed-omnibox": "themed_omnibox",
        "viewport": "viewport",
    }[audit_id]
    assert getattr(audits, key).score is False


def test_empty_payload_gives_all_failed():
    audits = extract_audits({})

    assert all(getattr(audits, name).score is False for name in FIELDS)
    assert audits.manifest_url is None
    assert audits.service_worker_url is None


@pytest.mark.parametrize("payload", [None, [], "audits", 42])
def test_non_mapping_payload_is_treated_as_empty(payload):
    audits = extract_audits(payload)
    assert audits.viewport.score is False


def test_malformed_entries_degrade_to_defaults():
    audits = extract_audits({
        "viewport": "yes",
        "service-worker": {"score": 1, "details": "broken"},
        "installable-manifest": {"score": 1, "details": {"debugData": ["x"]}},
        "is-on-https": {"details": {}},
    })

    assert audits.viewport.score is False
    assert audits.service_worker.score is True
    assert audits.service_worker_url is None
    assert audits.installable_manifest.score is True
    assert audits.manifest_url is None
    assert audits.is_on_https.score is False


def test_non_string_urls_are_ignored():
    audits = extract_audits({
        "service-worker": {"score": 0, "details": {"scriptUrl": 12, "scopeUrl": ""}},
        "installable-manifest": {"score": 0, "details": {"debugData": {"manifestUrl": None}}},
    })

    assert audits.service_worker_url is None
    assert audits.service_worker.details.scope is None
    assert audits.manifest_url is None


@pytest.mark.parametrize("value,expected", [
    (1, True),
    (0.5, True),
    (True, True),
    ("true", True),
    ("false", True),  # any non-empty string passes
    ({}, True),
    (0, False),
    (0.0, False),
    (False, False),
    (None, False),
    ("", False),
    (math.nan, False),
])
def test_score_truthiness(value, expected):
    assert is_truthy(value) is expected
