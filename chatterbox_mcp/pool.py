import logging
import threading
from typing import List, Optional

from .config import parse_server_urls
from .errors import NoServersAvailable
from .health import ServerHealthProbe

logger = logging.getLogger(__name__)


class ServerPool:
    """Ordered candidate WhatsApp servers and the one currently in use.

    The earliest-listed healthy server always wins, so the order of the
    configured URLs matters. The active URL is either empty or one of the
    candidates.
    """

    def __init__(self, probe: ServerHealthProbe, url_string: str = ""):
        self.probe = probe
        self._lock = threading.Lock()
        self._urls: List[str] = []
        self._active = ""
        self.configure(url_string)

    def configure(self, url_string: str) -> None:
        """Replace the candidates and drop the active server."""
        with self._lock:
            self._urls = parse_server_urls(url_string)
            self._active = ""

    @property
    def urls(self) -> List[str]:
        return list(self._urls)

    @property
    def active_url(self) -> str:
        return self._active

    @property
    def is_initialized(self) -> bool:
        return bool(self._active)

    def select_initial(self) -> str:
        """Activate the first healthy candidate.

        Raises:
            NoServersAvailable: if no candidate passes the health check.
        """
        with self._lock:
            for url in self._urls:
                if self.probe.probe(url):
                    self._active = url
                    logger.info(f"WhatsApp service initialized with URL: {url}")
                    return url
        raise NoServersAvailable()

    def failover(self, current_url: str) -> Optional[str]:
        """Switch to the first healthy candidate other than ``current_url``.

        Returns:
            The new active URL, or None if no other candidate is healthy. In
            that case the active URL is left unchanged.
        """
        with self._lock:
            logger.info("Attempting to switch to next available server...")
            for url in self._urls:
                if url == current_url:
                    continue
                if self.probe.probe(url):
                    self._active = url
                    logger.info(f"Switched to new WhatsApp server: {url}")
                    return url
            logger.info("No alternative WhatsApp servers are available")
            return None
