import json
import logging
from typing import Callable, List

import requests

from .models import HealthResult

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/health/detailed"
PROBE_TIMEOUT = 5


def is_success(response: requests.Response) -> bool:
    """Only 2xx counts; `Response.ok` also lets 3xx through."""
    return 200 <= response.status_code < 300


class ServerHealthProbe:
    """Checks whether a WhatsApp server is up and its client is ready."""

    def __init__(self, secret: Callable[[], str], timeout: float = PROBE_TIMEOUT):
        self.secret = secret
        self.timeout = timeout

    def probe(self, url: str) -> bool:
        """Return True only if ``overall.healthy`` is true in the detailed health report.

        Never raises: bad statuses, timeouts, transport errors and unparsable
        bodies all count as unhealthy.
        """
        try:
            response = requests.get(
                f"{url}{HEALTH_PATH}",
                headers={"x-secret": self.secret()},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.info(f"Server {url} health check failed: {e}")
            return False

        if not is_success(response):
            logger.info(f"Server {url} health check failed with status: {response.status_code}")
            return False

        try:
            health_data = response.json()
        except ValueError as e:
            logger.info(f"Server {url} health check returned an invalid body: {e}")
            return False

        overall = health_data.get("overall") if isinstance(health_data, dict) else None
        healthy = isinstance(overall, dict) and overall.get("healthy") is True
        if not healthy:
            logger.info(f"Server {url} health details: {json.dumps(health_data, indent=2)}")
        return healthy

    def probe_all(self, urls: List[str]) -> List[HealthResult]:
        return [HealthResult(url=url, healthy=self.probe(url)) for url in urls]
