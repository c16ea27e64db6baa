import json

import pytest
import requests

from chatterbox_mcp.config import SecretStore
from chatterbox_mcp.models import HealthResult
from chatterbox_mcp.pool import ServerPool


def make_response(status_code=200, json_data=None, text="", reason=""):
    """A real requests.Response carrying the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    body = json.dumps(json_data) if json_data is not None else text
    response._content = body.encode("utf-8")
    return response


class FakeProbe:
    """Health probe that reports a fixed set of URLs as healthy."""

    def __init__(self, healthy=()):
        self.healthy = set(healthy)
        self.calls = []

    def probe(self, url):
        self.calls.append(url)
        return url in self.healthy

    def probe_all(self, urls):
        return [HealthResult(url=url, healthy=self.probe(url)) for url in urls]


@pytest.fixture
def secret():
    return SecretStore("s3cret")


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.fixture
def pool(probe):
    return ServerPool(probe, "http://a, http://b, http://c")
