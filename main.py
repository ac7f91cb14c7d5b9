import asyncio
import argparse
import json
import logging
import sys
from analyzers.service_worker import ServiceWorkerAnalyzer
from core.handler import handle_report_request
from core.pipeline import ReportPipeline
from fetch.lighthouse import LighthouseInvoker
from fetch.manifest import ManifestFetcher


def build_pipeline(timeout: float = None, chrome_path: str = None, lighthouse_path: str = None) -> ReportPipeline:
    return ReportPipeline(
        invoker=LighthouseInvoker(lighthouse_path=lighthouse_path, chrome_path=chrome_path, timeout=timeout),
        service_worker_analyzer=ServiceWorkerAnalyzer(),
        manifest_fetcher=ManifestFetcher(),
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="PWA audit report CLI")
    parser.add_argument("url", help="Site URL to audit (e.g., https://example.com)")
    parser.add_argument("--desktop", action="store_true", help="Use the desktop form factor instead of mobile")
    parser.add_argument("--timeout", type=float, help="Lighthouse time limit in seconds (default: LIGHTHOUSE_TIMEOUT or 180)")
    parser.add_argument("--chrome-path", type=str, help="Chrome executable for Lighthouse (default: CHROME_PATH)")
    parser.add_argument("--lighthouse-path", type=str, help="Lighthouse executable (default: LIGHTHOUSE_PATH or 'lighthouse')")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity level (default: INFO)")
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, args.log_level),
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )

    pipeline = build_pipeline(args.timeout, args.chrome_path, args.lighthouse_path)
    params = {"site": args.url, "desktop": "true" if args.desktop else None}
    response = asyncio.run(handle_report_request(params, pipeline))

    print(json.dumps(response.body, indent=2))
    return 0 if response.status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
