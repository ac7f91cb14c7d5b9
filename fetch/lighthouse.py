"""
Run the Lighthouse CLI against a page and return its raw audit results.
"""
import asyncio
import contextlib
import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

from core.errors import AuditInvocationError, AuditTimeoutError
from core.extractor import AUDIT_IDS

DEFAULT_LIGHTHOUSE_TIMEOUT = 180.0  # seconds

CHROME_FLAGS = [
    "--headless=new",
    "--no-sandbox",
    "--no-pings",
    "--enable-automation",
    "--allow-pre-commit-input",
    "--deny-permission-prompts",
    "--disable-breakpad",
    "--disable-dev-shm-usage",
    "--disable-domain-reliability",
    "--disable-hang-monitor",
    "--disable-ipc-flooding-protection",
    "--disable-popup-blocking",
    "--disable-prompt-on-repost",
    "--disable-renderer-backgrounding",
    "--disable-gpu",
    "--block-new-web-contents",
]

THROTTLING_FLAGS = [
    "--throttling-method=simulate",
    "--throttling.rttMs=0",
    "--throttling.throughputKbps=0",
    "--throttling.requestLatencyMs=0",
    "--throttling.downloadThroughputKbps=0",
    "--throttling.uploadThroughputKbps=0",
    "--throttling.cpuSlowdownMultiplier=0",
]


def build_lighthouse_args(url: str, desktop: bool = False, lighthouse_path: str = "lighthouse") -> List[str]:
    args = [lighthouse_path, *THROTTLING_FLAGS, url, "--output", "json"]
    if desktop:
        args.append("--preset=desktop")
    args.append(f"--only-audits={','.join(AUDIT_IDS)}")
    args.append(f"--chrome-flags={' '.join(CHROME_FLAGS)}")
    args.extend(["--disable-full-page-screenshot", "--disable-storage-reset"])
    return args


def parse_lighthouse_output(stdout: str) -> Dict[str, Any]:
    """Return the ``audits`` mapping from Lighthouse JSON output."""
    try:
        result = json.loads(stdout)
    except ValueError as e:
        raise AuditInvocationError(f"Lighthouse produced invalid JSON: {e}") from e

    audits = result.get("audits") if isinstance(result, dict) else None
    if not audits or not isinstance(audits, dict):
        raise AuditInvocationError("Lighthouse audit failed")
    return audits


class LighthouseInvoker:
    """Run Lighthouse as a subprocess.

    Configuration falls back to the LIGHTHOUSE_PATH, CHROME_PATH,
    LIGHTHOUSE_TIMEOUT and PWA_REPORT_TEMP environment variables.
    """

    def __init__(
        self,
        lighthouse_path: Optional[str] = None,
        chrome_path: Optional[str] = None,
        timeout: Optional[float] = None,
        temp_dir: Optional[str] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.lighthouse_path = lighthouse_path or os.environ.get("LIGHTHOUSE_PATH", "lighthouse")
        self.chrome_path = chrome_path or os.environ.get("CHROME_PATH")
        self.timeout = timeout or float(os.environ.get("LIGHTHOUSE_TIMEOUT", DEFAULT_LIGHTHOUSE_TIMEOUT))
        self.temp_dir = temp_dir or os.environ.get("PWA_REPORT_TEMP") or tempfile.gettempdir()

    def _env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env["TEMP"] = self.temp_dir
        if self.chrome_path:
            env["CHROME_PATH"] = self.chrome_path
        return env

    async def invoke(self, url: str, desktop: bool = False) -> Dict[str, Any]:
        args = build_lighthouse_args(url, desktop, self.lighthouse_path)
        self.logger.info(f"Running Lighthouse for {url} ({'desktop' if desktop else 'mobile'})")
        self.logger.debug(f"Lighthouse command: {' '.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._env(),
            )
        except OSError as e:
            raise AuditInvocationError(f"Could not start Lighthouse: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise AuditTimeoutError(f"Lighthouse timed out after {self.timeout}s for {url}") from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip().splitlines()
            detail = message[-1] if message else "no output"
            raise AuditInvocationError(f"Lighthouse exited with code {process.returncode}: {detail}")

        audits = parse_lighthouse_output(stdout.decode(errors="replace"))
        self.logger.debug(f"Lighthouse returned {len(audits)} audits for {url}")
        return audits
