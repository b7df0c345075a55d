"""Test the httpx transport."""

import json

import httpx
import pytest

from nylasapi.connection import Connection, TransportOptions
from nylasapi.errors import TransportFailure
from nylasapi.exceptions import TransportError
from nylasapi.request import Request
from nylasapi.resources.messages import Message, Messages
from nylasapi.result import Err, Ok
from nylasapi.transport import Failure, HttpxTransport, Success, decode_body


def mock_options(handler, **kwargs) -> TransportOptions:
    return TransportOptions(
        transport=HttpxTransport(httpx.MockTransport(handler)), **kwargs
    )


class TestDecodeBody:
    """Test decode_body."""

    def test_json(self):
        response = httpx.Response(200, json={'id': '1'})

        assert decode_body(response) == {'id': '1'}

    def test_text(self):
        response = httpx.Response(
            200, text='From: a@b.c', headers={'content-type': 'message/rfc822'}
        )

        assert decode_body(response) == 'From: a@b.c'

    def test_invalid_json_falls_back_to_text(self):
        response = httpx.Response(
            200, content=b'not json', headers={'content-type': 'application/json'}
        )

        assert decode_body(response) == 'not json'

    def test_empty_body(self):
        assert decode_body(httpx.Response(200)) == ''


class TestHttpxTransport:
    """Test HttpxTransport.dispatch."""

    def test_sends_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=[{'id': '1'}])

        request = Request(
            method='POST',
            url='https://api.nylas.test/things',
            headers={'authorization': 'Bearer t'},
            params={'limit': 1},
            json={'name': 'x'},
        )
        outcome = HttpxTransport(httpx.MockTransport(handler)).dispatch(
            request, TransportOptions()
        )

        assert isinstance(outcome, Success)
        assert outcome.status == 201
        assert outcome.body == [{'id': '1'}]
        assert seen[0].method == 'POST'
        assert seen[0].url.params['limit'] == '1'
        assert seen[0].headers['authorization'] == 'Bearer t'
        assert json.loads(seen[0].content) == {'name': 'x'}

    def test_raw_content(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        request = Request(method='POST', url='https://api.nylas.test/send', content='MIME')
        HttpxTransport(httpx.MockTransport(handler)).dispatch(request, TransportOptions())

        assert seen[0].content == b'MIME'

    def test_connect_error_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('Connection refused', request=request)

        request = Request(method='GET', url='https://api.nylas.test/things')
        outcome = HttpxTransport(httpx.MockTransport(handler)).dispatch(
            request, TransportOptions()
        )

        assert isinstance(outcome, Failure)
        assert outcome.reason == 'Connection refused'
        assert isinstance(outcome.cause, httpx.ConnectError)

    def test_timeout_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout('', request=request)

        request = Request(method='GET', url='https://api.nylas.test/things')
        outcome = HttpxTransport(httpx.MockTransport(handler)).dispatch(
            request, TransportOptions()
        )

        assert isinstance(outcome, Failure)
        assert outcome.reason == 'ReadTimeout'

    def test_undecodable_content_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                content=b'not gzip',
                headers={'content-encoding': 'gzip', 'content-type': 'application/json'},
            )

        request = Request(method='GET', url='https://api.nylas.test/things')
        outcome = HttpxTransport(httpx.MockTransport(handler)).dispatch(
            request, TransportOptions()
        )

        assert isinstance(outcome, Failure)
        assert isinstance(outcome.cause, httpx.DecodingError)

    def test_too_many_redirects_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.TooManyRedirects('Exceeded maximum allowed redirects.', request=request)

        request = Request(method='GET', url='https://api.nylas.test/things')
        outcome = HttpxTransport(httpx.MockTransport(handler)).dispatch(
            request, TransportOptions()
        )

        assert isinstance(outcome, Failure)
        assert outcome.reason == 'Exceeded maximum allowed redirects.'

    def test_invalid_url_is_failure(self):
        request = Request(method='GET', url='https://api\tnylas.test/things')
        outcome = HttpxTransport(
            httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        ).dispatch(request, TransportOptions())

        assert isinstance(outcome, Failure)
        assert isinstance(outcome.cause, httpx.InvalidURL)

    def test_event_hooks_are_called(self):
        calls = []
        options = mock_options(
            lambda request: httpx.Response(200, json=[]),
            event_hooks={
                'request': [lambda request: calls.append(('request', request.url.path))],
                'response': [lambda response: calls.append(('response', response.status_code))],
            },
        )
        request = Request(method='GET', url='https://api.nylas.test/things')

        options.transport.dispatch(request, options)

        assert calls == [('request', '/things'), ('response', 200)]


class TestEndToEnd:
    """Test generated operations over the httpx transport."""

    @pytest.fixture
    def conn(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == '/messages/msg-1':
                return httpx.Response(
                    200, json={'id': 'msg-1', 'subject': 'Hi', 'new_field': 1}
                )
            return httpx.Response(404, json={'message': 'not found'})

        return Connection(
            api_server='https://api.nylas.test',
            access_token='token-1',
            options=mock_options(handler),
        )

    def test_find(self, conn):
        result = Messages.find(conn, 'msg-1')

        assert isinstance(result, Ok)
        assert isinstance(result.value, Message)
        assert result.value.subject == 'Hi'

    def test_not_found(self, conn):
        result = Messages.find(conn, 'msg-2')

        assert result.error.status == 404
        assert result.error.body == {'message': 'not found'}

    def test_undecodable_content_is_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, content=b'not gzip', headers={'content-encoding': 'gzip'}
            )

        conn = Connection(
            api_server='https://api.nylas.test',
            access_token='token-1',
            options=mock_options(handler),
        )

        result = Messages.list(conn)

        assert isinstance(result, Err)
        assert isinstance(result.error, TransportFailure)
        with pytest.raises(TransportError):
            Messages.list_or_raise(conn)
