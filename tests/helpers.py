"""Shared constants and in-memory collaborator fakes for tests."""

PAGE_URL = "https://x/"
MANIFEST_URL = "https://x/manifest.json"
SW_URL = "https://x/sw.js"
SW_SCOPE = "https://x/"


class FakeInvoker:
    def __init__(self, audits=None, error=None):
        self.audits = audits
        self.error = error
        self.calls = []

    async def invoke(self, url, desktop):
        self.calls.append((url, desktop))
        if self.error is not None:
            raise self.error
        return self.audits


class FakeServiceWorkerAnalyzer:
    def __init__(self, analysis=None, error=None):
        self.analysis = analysis
        self.error = error
        self.calls = []

    async def analyze(self, script_url):
        self.calls.append(script_url)
        if self.error is not None:
            raise self.error
        return self.analysis


class FakeManifestFetcher:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def fetch(self, manifest_url, page_url):
        self.calls.append((manifest_url, page_url))
        if self.error is not None:
            raise self.error
        return self.result
