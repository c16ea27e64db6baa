"""Tests for FailoverClient retry and failover rules with mocked HTTP."""
from unittest.mock import patch

import pytest
import requests

from chatterbox_mcp import ClientError, FailoverClient, NoServersAvailable, RequestFailed
from conftest import make_response


@pytest.fixture
def client(pool, probe, secret):
    probe.healthy = {"http://a", "http://b", "http://c"}
    return FailoverClient(pool, secret, base_prefix="/api/whatsapp")


def test_call_selects_server_and_returns_response(client, pool):
    """The first call probes for a server, then sends the request with the secret."""
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        mock_request.return_value = make_response(200, {"ok": True})
        response = client.call("/getAllChats")

    assert response.json() == {"ok": True}
    assert pool.active_url == "http://a"
    args, kwargs = mock_request.call_args
    assert args == ("GET", "http://a/api/whatsapp/getAllChats")
    assert kwargs["headers"]["x-secret"] == "s3cret"
    assert kwargs["timeout"] == 10


def test_call_merges_headers_and_sends_json_body(client):
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        mock_request.return_value = make_response(200, text="sent")
        client.call(
            "/sendMessage/123",
            method="POST",
            headers={"Content-Type": "application/json"},
            body={"message": "hi"},
        )

    _, kwargs = mock_request.call_args
    assert kwargs["headers"] == {"x-secret": "s3cret", "Content-Type": "application/json"}
    assert kwargs["json"] == {"message": "hi"}


def test_call_without_healthy_servers_raises(pool, probe, secret):
    client = FailoverClient(pool, secret)
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        with pytest.raises(NoServersAvailable):
            client.call("/getAllChats")
        mock_request.assert_not_called()


def test_503_fails_over_and_retries_once(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request, \
            patch.object(pool, "failover", wraps=pool.failover) as mock_failover:
        mock_request.side_effect = [make_response(503), make_response(200, {"ok": True})]
        response = client.call("/getAllChats")

    assert response.json() == {"ok": True}
    mock_failover.assert_called_once_with("http://a")
    assert pool.active_url == "http://b"
    assert mock_request.call_count == 2
    assert mock_request.call_args[0][1] == "http://b/api/whatsapp/getAllChats"


def test_second_503_is_terminal_without_another_sweep(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request, \
            patch.object(pool, "failover", wraps=pool.failover) as mock_failover:
        mock_request.side_effect = [make_response(503), make_response(503, reason="Service Unavailable")]
        with pytest.raises(RequestFailed) as excinfo:
            client.call("/getAllChats")

    assert excinfo.value.status == 503
    assert "after failover" in str(excinfo.value)
    mock_failover.assert_called_once()
    assert mock_request.call_count == 2


def test_404_never_fails_over(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request, \
            patch.object(pool, "failover", wraps=pool.failover) as mock_failover:
        mock_request.return_value = make_response(404, reason="Not Found")
        with pytest.raises(ClientError) as excinfo:
            client.call("/lookupContact/nobody")

    assert excinfo.value.status == 404
    mock_failover.assert_not_called()
    assert mock_request.call_count == 1


def test_connection_error_fails_over(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        mock_request.side_effect = [requests.ConnectionError("refused"), make_response(200, text="ok")]
        response = client.call("/getAllChats")

    assert response.text == "ok"
    assert pool.active_url == "http://b"


def test_retry_transport_error_is_reported(client):
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        retry_error = requests.Timeout("slow")
        mock_request.side_effect = [make_response(500), retry_error]
        with pytest.raises(RequestFailed) as excinfo:
            client.call("/getAllChats")

    assert excinfo.value.error is retry_error
    assert excinfo.value.status is None


def test_no_alternative_server_reports_original_error(client, pool, probe):
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        mock_request.return_value = make_response(200)
        client.call("/getAllChats")
        probe.healthy = {"http://a"}
        mock_request.return_value = make_response(502, reason="Bad Gateway")
        with pytest.raises(RequestFailed) as excinfo:
            client.call("/getAllChats")

    assert excinfo.value.status == 502
    assert "after failover" not in str(excinfo.value)
    assert pool.active_url == "http://a"
    assert mock_request.call_count == 2


def test_other_request_errors_do_not_fail_over(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request, \
            patch.object(pool, "failover", wraps=pool.failover) as mock_failover:
        mock_request.side_effect = requests.exceptions.InvalidURL("bad url")
        with pytest.raises(RequestFailed):
            client.call("/getAllChats")
    mock_failover.assert_not_called()


def test_304_is_not_success_and_never_fails_over(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request, \
            patch.object(pool, "failover", wraps=pool.failover) as mock_failover:
        mock_request.return_value = make_response(304, reason="Not Modified")
        with pytest.raises(RequestFailed) as excinfo:
            client.call("/getAllChats")

    assert not isinstance(excinfo.value, ClientError)
    assert excinfo.value.status == 304
    mock_failover.assert_not_called()
    assert mock_request.call_count == 1


def test_redirect_on_retry_is_reported_as_failure(client, pool):
    with patch("chatterbox_mcp.client.requests.request") as mock_request:
        mock_request.side_effect = [make_response(503), make_response(302, {"ok": True}, reason="Found")]
        with pytest.raises(RequestFailed) as excinfo:
            client.call("/getAllChats")

    assert excinfo.value.status == 302
    assert "after failover" in str(excinfo.value)


def test_call_uses_url_returned_by_select_initial(client, pool):
    # Another thread may clear the active URL between the check and the read.
    with patch("chatterbox_mcp.client.requests.request") as mock_request, \
            patch.object(pool, "select_initial", return_value="http://c") as mock_select:
        mock_request.return_value = make_response(200, {"ok": True})
        client.call("/getAllChats")

    mock_select.assert_called_once()
    assert mock_request.call_args[0][1] == "http://c/api/whatsapp/getAllChats"
