"""Request handling around the report pipeline."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from core.errors import classify_failure
from core.pipeline import ReportPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    status: int
    body: Dict[str, Any] = field(default_factory=dict)


def check_params(params: Mapping[str, Any], required: List[str]) -> Optional[Response]:
    """Return a 400 response naming the first missing parameter, or None."""
    for name in required:
        if not params.get(name):
            return Response(
                status=400,
                body={"error": {"message": f"Required parameter '{name}' is missing"}},
            )
    return None


async def handle_report_request(params: Mapping[str, Any], pipeline: ReportPipeline) -> Response:
    """Produce the report response for a ``site`` (and optional ``desktop``) request."""
    invalid = check_params(params, ["site"])
    if invalid is not None:
        logger.error(f"Report: {invalid.body['error']['message']}")
        return invalid

    url = str(params["site"])
    desktop = True if params.get("desktop") == "true" else None
    logger.info(f"Report: function is processing a request for site: {url}")

    try:
        report = await pipeline.run(url, desktop)
    except Exception as e:
        failure = classify_failure(e)
        if failure.is_timeout:
            logger.error(f"Report: function TIMED OUT processing a request for site: {url}")
        else:
            logger.error(f"Report: function failed for {url} with the following error: {failure.message}")
        return Response(status=500, body={"error": failure.message})

    logger.info(f"Report: function is DONE processing a request for site: {url}")
    return Response(status=200, body={"data": report.to_dict()})
