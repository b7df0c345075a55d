"""Test request assembly."""

import base64

import pytest

from nylasapi.connection import Connection
from nylasapi.descriptor import Descriptor, HeaderStyle
from nylasapi.exceptions import ConfigurationError
from nylasapi.models import ResultModel
from nylasapi.request import (
    Request,
    base_url,
    build_headers,
    build_request,
    header_basic,
    header_bearer,
    resource_url,
    serialize_body,
)
from nylasapi.resources.messages import Message


class Thing(ResultModel):
    id: str | None = None


@pytest.fixture
def conn():
    return Connection(
        api_server='https://api.nylas.test/',
        client_id='client-1',
        access_token='token-1',
    )


class TestUrls:
    """Test URL shaping."""

    def test_plain_base_url(self, conn):
        """Test that the trailing slash of the server is dropped."""
        assert base_url(conn) == 'https://api.nylas.test'

    def test_client_scoped_base_url(self, conn):
        """Test the client-scoped root."""
        assert base_url(conn, use_client_url=True) == 'https://api.nylas.test/a/client-1'

    def test_client_scoped_requires_client_id(self):
        """Test that a client-scoped URL is never built without a client id."""
        conn = Connection(api_server='https://api.nylas.test', access_token='t')

        with pytest.raises(ConfigurationError) as exc_info:
            base_url(conn, use_client_url=True)

        assert exc_info.value.field == 'client_id'
        assert base_url(conn) == 'https://api.nylas.test'

    def test_plain_resource_url(self, conn):
        """Test a plain resource path."""
        descriptor = Descriptor(path='things', model=Thing)

        assert resource_url(descriptor, conn) == 'https://api.nylas.test/things'
        assert resource_url(descriptor, conn, 'abc') == 'https://api.nylas.test/things/abc'

    def test_client_scoped_resource_url(self, conn):
        """Test a client-scoped resource path."""
        descriptor = Descriptor(path='accounts', model=Thing, use_client_url=True)

        assert (
            resource_url(descriptor, conn, 'acc-1', 'downgrade')
            == 'https://api.nylas.test/a/client-1/accounts/acc-1/downgrade'
        )

    def test_segments_are_stringified(self, conn):
        """Test that non-string segments are converted."""
        descriptor = Descriptor(path='things', model=Thing)

        assert resource_url(descriptor, conn, 42).endswith('/things/42')


class TestHeaders:
    """Test header construction styles."""

    def test_bearer(self, conn):
        """Test bearer authorization."""
        assert header_bearer(conn) == {'authorization': 'Bearer token-1'}

    def test_basic_uses_token_as_username(self, conn):
        """Test basic authorization with an empty password."""
        header = header_basic(conn)['authorization']

        assert header.startswith('Basic ')
        assert base64.b64decode(header.removeprefix('Basic ')) == b'token-1:'

    def test_build_headers_without_body(self, conn):
        """Test that no content type is set without a body."""
        headers = build_headers(HeaderStyle.BEARER, conn)

        assert headers == {
            'accept': 'application/json',
            'authorization': 'Bearer token-1',
        }

    def test_build_headers_with_content_type(self, conn):
        """Test that the content type is appended."""
        headers = build_headers('basic', conn, content_type='application/json')

        assert headers['content-type'] == 'application/json'
        assert headers['authorization'].startswith('Basic ')

    def test_build_headers_accept_override(self, conn):
        """Test overriding the accept header."""
        headers = build_headers('bearer', conn, accept='message/rfc822')

        assert headers['accept'] == 'message/rfc822'


class TestBuildRequest:
    """Test build_request."""

    def test_get_request(self, conn):
        """Test a request without body."""
        request = build_request(
            'get', 'https://api.nylas.test/things', 'bearer', conn, params={'a': 1}
        )

        assert request == Request(
            method='GET',
            url='https://api.nylas.test/things',
            headers={'accept': 'application/json', 'authorization': 'Bearer token-1'},
            params={'a': 1},
        )
        assert request.has_body is False

    def test_json_body_adds_content_type(self, conn):
        """Test that a JSON body sets the JSON content type."""
        request = build_request(
            'POST', 'https://api.nylas.test/things', 'bearer', conn, json={'a': 1}
        )

        assert request.json == {'a': 1}
        assert request.headers['content-type'] == 'application/json'
        assert request.has_body is True

    def test_empty_json_body_is_a_body(self, conn):
        """Test that an empty JSON object still counts as a body."""
        request = build_request('POST', 'https://x', 'bearer', conn, json={})

        assert request.headers['content-type'] == 'application/json'

    def test_raw_content(self, conn):
        """Test raw content with an explicit content type."""
        request = build_request(
            'POST',
            'https://api.nylas.test/send',
            'bearer',
            conn,
            content='MIME',
            content_type='message/rfc822',
        )

        assert request.content == 'MIME'
        assert request.json is None
        assert request.headers['content-type'] == 'message/rfc822'

    def test_params_are_copied(self, conn):
        """Test that the caller's parameters are not shared."""
        params = {'a': 1}
        request = build_request('GET', 'https://x', 'bearer', conn, params=params)
        params['b'] = 2

        assert request.params == {'a': 1}


class TestSerializeBody:
    """Test serialize_body."""

    def test_model_is_dumped_by_alias(self):
        """Test that drafts are dumped with aliases and only set fields."""
        draft = Message.Build(subject='Hi', **{'from': [{'email': 'a@b.c'}]})

        assert serialize_body(draft) == {
            'subject': 'Hi',
            'from': [{'email': 'a@b.c'}],
        }

    def test_plain_data_unchanged(self):
        """Test that plain data passes through."""
        body = {'subject': 'Hi'}

        assert serialize_body(body) is body
