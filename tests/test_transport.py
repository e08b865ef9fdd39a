"""
Tests for the requests-backed transport
"""

import io
from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from urllib3.response import HTTPResponse

from apigateway_sdk.proxy import ProxySettings
from apigateway_sdk.transport import RequestsTransport, ResponseStream, Transport, TransportResponse
from apigateway_sdk.types import HttpMethod, UnsignedRequest, SignedRequest

ENDPOINT = "https://example.com/prod/items"


def make_response(status_code=200, reason="OK", body=b"Response Body", headers=None):
    """Build a streamed requests.Response backed by an in-memory body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = HTTPResponse(
        body=io.BytesIO(body),
        headers=headers or {},
        status=status_code,
        preload_content=False,
    )
    return response


def make_signed_request(method=HttpMethod.POST, payload=b'{"a": 1}'):
    unsigned = UnsignedRequest(
        method=method,
        uri=ENDPOINT,
        headers={"Content-Type": "application/json"},
        payload=payload,
    )
    return SignedRequest(
        request=unsigned,
        headers={
            "Content-Type": "application/json",
            "X-Amz-Date": "20240115T123045Z",
            "Authorization": "AWS4-HMAC-SHA256 Credential=AKID/20240115/us-west-2/execute-api/aws4_request, "
                             "SignedHeaders=content-type;host;x-amz-date, Signature=" + "0" * 64,
        },
    )


@pytest.fixture
def session():
    session = Mock(spec=requests.Session)
    session.send.return_value = make_response()
    return session


class TestTransportResponse:
    """Test response classification"""

    @pytest.mark.parametrize("status,successful", [(200, True), (204, True), (299, True),
                                                   (301, False), (404, False), (500, False)])
    def test_successful(self, status, successful):
        assert TransportResponse(status_code=status).successful is successful


class TestRequestsTransport:
    """Test sending through a requests session"""

    def test_is_transport(self, session):
        """RequestsTransport satisfies the Transport protocol"""
        assert isinstance(RequestsTransport(session=session), Transport)

    def test_session_ignores_environment(self, session):
        """The session never reads proxy or auth settings from the environment"""
        RequestsTransport(session=session)
        assert session.trust_env is False

    def test_send_prepared_request(self, session):
        """Method, URI, headers and payload are sent unchanged"""
        transport = RequestsTransport(session=session)
        signed = make_signed_request()

        transport.send(signed, ProxySettings.direct(), 3.0)

        session.send.assert_called_once()
        prepared = session.send.call_args.args[0]
        assert prepared.method == "POST"
        assert prepared.url == ENDPOINT
        assert prepared.body == b'{"a": 1}'
        assert prepared.headers["Authorization"] == signed.headers["Authorization"]
        assert prepared.headers["X-Amz-Date"] == "20240115T123045Z"
        assert prepared.headers["Content-Type"] == "application/json"

    def test_send_options(self, session):
        """Sends stream, do not follow redirects and use the timeout"""
        transport = RequestsTransport(session=session, verify_ssl=False)
        transport.send(make_signed_request(), ProxySettings.direct(), 3.0)

        kwargs = session.send.call_args.kwargs
        assert kwargs["proxies"] == {}
        assert kwargs["timeout"] == 3.0
        assert kwargs["stream"] is True
        assert kwargs["allow_redirects"] is False
        assert kwargs["verify"] is False

    def test_send_through_proxy(self, session):
        """Enabled proxy settings are passed as the proxies mapping"""
        transport = RequestsTransport(session=session)
        proxy = ProxySettings(endpoint="proxy.local:8080", username="user", password="pw")

        transport.send(make_signed_request(), proxy, None)

        assert session.send.call_args.kwargs["proxies"] == {
            "http": "http://user:pw@proxy.local:8080",
            "https": "http://user:pw@proxy.local:8080",
        }

    def test_environment_proxies_ignored(self, session, monkeypatch):
        """Proxy variables in the environment never reach the send"""
        monkeypatch.setenv("HTTPS_PROXY", "http://env-proxy:3128")
        monkeypatch.setenv("HTTP_PROXY", "http://env-proxy:3128")
        transport = RequestsTransport(session=session)

        transport.send(make_signed_request(), ProxySettings.direct(), None)

        assert session.send.call_args.kwargs["proxies"] == {}

    def test_response_fields(self, session):
        """Status, reason and body are returned"""
        session.send.return_value = make_response(status_code=201, reason="Created", body=b"payload")
        response = RequestsTransport(session=session).send(make_signed_request(), ProxySettings.direct(), None)

        assert response.status_code == 201
        assert response.status_text == "Created"
        assert response.successful
        with response.body as body:
            assert body.read() == b"payload"

    def test_missing_reason_is_none(self, session):
        """An empty reason phrase becomes None"""
        session.send.return_value = make_response(status_code=500, reason="")
        response = RequestsTransport(session=session).send(make_signed_request(), ProxySettings.direct(), None)
        assert response.status_text is None

    @pytest.mark.parametrize("status", [204, 205, 304])
    def test_no_body(self, session, status):
        """Statuses that cannot carry a body report no body"""
        session.send.return_value = make_response(status_code=status, body=b"")
        response = RequestsTransport(session=session).send(make_signed_request(), ProxySettings.direct(), None)
        assert response.body is None

    def test_empty_success_body_is_stream(self, session):
        """A 200 with Content-Length 0 still returns a readable stream"""
        session.send.return_value = make_response(status_code=200, body=b"", headers={"Content-Length": "0"})
        response = RequestsTransport(session=session).send(make_signed_request(), ProxySettings.direct(), None)

        assert response.body is not None
        with response.body as body:
            assert body.read() == b""

    def test_caller_session_taken_over(self):
        """A supplied session is reconfigured in place"""
        session = requests.Session()
        transport = RequestsTransport(session=session)

        assert transport.session is session
        assert session.trust_env is False
        assert session.get_adapter("https://example.com").max_retries.total == 0

    def test_io_failure_propagates(self, session):
        """Connection failures are raised to the caller"""
        session.send.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(requests.ConnectionError):
            RequestsTransport(session=session).send(make_signed_request(), ProxySettings.direct(), None)

    def test_close(self, session):
        """Closing the transport closes the session"""
        RequestsTransport(session=session).close()
        session.close.assert_called_once()


class TestResponseStream:
    """Test response body stream"""

    def test_read_all(self):
        stream = ResponseStream(make_response(body=b"x" * 100000))
        assert stream.read() == b"x" * 100000

    def test_read_in_chunks(self):
        stream = ResponseStream(make_response(body=b"abcdef"))
        assert stream.read(4) == b"abcd"
        assert stream.read(4) == b"ef"
        assert stream.read(4) == b""

    def test_close_releases_response(self):
        response = make_response()
        response.close = Mock()
        stream = ResponseStream(response)

        stream.close()
        stream.close()

        assert stream.closed
        response.close.assert_called_once()
