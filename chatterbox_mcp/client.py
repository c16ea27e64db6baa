import logging
from typing import Any, Callable, Dict, Optional, Tuple

import requests

from .errors import ClientError, RequestFailed
from .health import is_success
from .pool import ServerPool

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10

# A dead server either refuses the connection or never answers.
FAILOVER_ERRORS = (requests.ConnectionError, requests.Timeout)

Outcome = Tuple[Optional[requests.Response], Optional[requests.RequestException]]


def _describe(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason or ''}".strip()


def _failure(prefix: str, outcome: Outcome) -> RequestFailed:
    response, error = outcome
    if response is not None:
        return RequestFailed(f"{prefix}: {_describe(response)}", status=response.status_code)
    return RequestFailed(f"{prefix}: {error}", error=error)


class FailoverClient:
    """Calls one service of the WhatsApp server, switching servers when the active one fails.

    A 5xx status, a refused connection or a timeout triggers one sweep of the
    pool for another healthy server, followed by exactly one retry against it.
    A 4xx status is returned to the caller as a ClientError straight away.
    """

    def __init__(
        self,
        pool: ServerPool,
        secret: Callable[[], str],
        base_prefix: str = "",
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.pool = pool
        self.secret = secret
        self.base_prefix = base_prefix
        self.timeout = timeout

    def call(
        self,
        endpoint_path: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
    ) -> requests.Response:
        """Send a request to the active server and return the 2xx response unparsed.

        Raises:
            NoServersAvailable: if no server has been selected yet and none is healthy.
            ClientError: on a 4xx status.
            RequestFailed: on any other non-2xx status below 500, without failover.
            RequestFailed: when the request, and the retry after failover if
                one happened, did not succeed.
        """
        current_url = self.pool.active_url or self.pool.select_initial()
        outcome = self._send(current_url, endpoint_path, method, headers, body)
        response, error = outcome

        if error is not None:
            if not isinstance(error, FAILOVER_ERRORS):
                raise _failure("WhatsApp API request failed", outcome)
            logger.info(f"Network error ({error}), attempting failover...")
        elif is_success(response):
            return response
        elif 400 <= response.status_code < 500:
            raise ClientError(
                f"WhatsApp API request failed: {_describe(response)}", status=response.status_code
            )
        elif response.status_code < 500:
            raise _failure("WhatsApp API request failed", outcome)
        else:
            logger.info(f"Server error ({response.status_code}), attempting failover...")

        new_url = self.pool.failover(current_url)
        if new_url is None:
            raise _failure("WhatsApp API request failed", outcome)

        logger.info(f"Retrying request with new server: {self.url_for(new_url, endpoint_path)}")
        retry = self._send(new_url, endpoint_path, method, headers, body)
        if retry[0] is not None and is_success(retry[0]):
            return retry[0]
        raise _failure("WhatsApp API request failed after failover", retry)

    def url_for(self, server_url: str, endpoint_path: str) -> str:
        return f"{server_url}{self.base_prefix}{endpoint_path}"

    def _send(
        self,
        server_url: str,
        endpoint_path: str,
        method: str,
        headers: Optional[Dict[str, str]],
        body: Optional[Any],
    ) -> Outcome:
        request_headers = {"x-secret": self.secret()}
        if headers:
            request_headers.update(headers)
        try:
            response = requests.request(
                method,
                self.url_for(server_url, endpoint_path),
                headers=request_headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return None, e
        return response, None
