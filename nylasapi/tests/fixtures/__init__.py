"""Test fixtures for nylasapi tests.

This module provides sample API payloads and a transport that records the
requests it receives instead of sending them.
"""

from nylasapi.connection import Connection, TransportOptions
from nylasapi.transport import Failure, Success

MESSAGE_JSON = {
    'id': 'msg-1',
    'object': 'message',
    'account_id': 'acc-1',
    'subject': 'Hello',
    'from': [{'name': 'Ada', 'email': 'ada@example.com'}],
    'to': [{'name': 'Bob', 'email': 'bob@example.com'}],
    'unread': True,
    'starred': False,
    'date': 1700000000,
    # Not declared on Message
    'thread_count': 3,
}

MESSAGE_LIST_JSON = [
    MESSAGE_JSON,
    {'id': 'msg-2', 'object': 'message', 'subject': 'Re: Hello'},
]

ACCOUNT_JSON = {
    'id': 'acc-1',
    'billing_state': 'paid',
    'email_address': 'ada@example.com',
    'provider': 'gmail',
    'sync_state': 'running',
    'trial': False,
}

NOT_FOUND_JSON = {
    'message': "Couldn't find message",
    'type': 'invalid_request_error',
}


class RecordingTransport:
    """Transport returning canned outcomes and recording every request."""

    def __init__(self, *outcomes: Success | Failure):
        self.outcomes = list(outcomes) or [Success(status=200, body={})]
        self.requests = []
        self.options = []

    def dispatch(self, request, options):
        self.requests.append(request)
        self.options.append(options)
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]

    @property
    def last(self):
        return self.requests[-1]


def ok(body, status: int = 200) -> Success:
    return Success(status=status, body=body)


def make_connection(
    *outcomes: Success | Failure, **kwargs
) -> tuple[Connection, RecordingTransport]:
    transport = RecordingTransport(*outcomes)
    conn = Connection(
        api_server=kwargs.pop('api_server', 'https://api.nylas.test'),
        client_id=kwargs.pop('client_id', 'client-1'),
        access_token=kwargs.pop('access_token', 'token-1'),
        options=TransportOptions(transport=transport, **kwargs),
    )
    return conn, transport
