from typing import Optional


class ChatterboxError(Exception):
    """Base class for errors raised while talking to the WhatsApp server."""


class NoServersAvailable(ChatterboxError):
    """None of the configured WhatsApp servers passed a health check."""

    def __init__(self, message: str = "No available WhatsApp servers found. All servers are unreachable."):
        super().__init__(message)


class RequestFailed(ChatterboxError):
    """A request failed for good, either with an HTTP status or a transport error."""

    def __init__(self, message: str, status: Optional[int] = None, error: Optional[BaseException] = None):
        super().__init__(message)
        self.status = status
        self.error = error


class ClientError(RequestFailed):
    """The server answered with a 4xx status. Never retried."""
