"""Nylas connector credentials.

Credentials are scoped by provider, so their paths cannot be described by a
single descriptor. The operations follow the same result and raising
contract as generated ones.
"""

from collections.abc import Mapping
from typing import Any

from nylasapi.connection import Connection
from nylasapi.descriptor import HeaderStyle
from nylasapi.errors import unwrap
from nylasapi.models import ResultModel
from nylasapi.request import base_url, build_request
from nylasapi.response import handle_response
from nylasapi.result import Result

__all__ = ['ConnectorCredential', 'ConnectorCredentials']


class ConnectorCredential(ResultModel):
    id: str | None = None
    name: str | None = None
    credential_type: str | None = None
    hashed_data: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


def _url(conn: Connection, provider: str, *segments: str) -> str:
    return '/'.join([f'{base_url(conn)}/v3/connectors/{provider}/creds', *segments])


def _send(
    conn: Connection,
    method: str,
    url: str,
    model: type[ConnectorCredential] | None = ConnectorCredential,
    **kwargs,
) -> Result[Any]:
    request = build_request(method, url, HeaderStyle.BEARER, conn, **kwargs)
    return handle_response(conn.dispatch(request), model)


class ConnectorCredentials:
    """Interface for Nylas connector credentials."""

    @staticmethod
    def list(
        conn: Connection, provider: str, params: Mapping[str, Any] | None = None
    ) -> Result[list[ConnectorCredential]]:
        """List the credentials of a connector."""
        return _send(conn, 'GET', _url(conn, provider), params=dict(params or {}))

    @staticmethod
    def list_or_raise(
        conn: Connection, provider: str, params: Mapping[str, Any] | None = None
    ) -> 'list[ConnectorCredential]':
        return unwrap(ConnectorCredentials.list(conn, provider, params))

    @staticmethod
    def create(
        conn: Connection, provider: str, body: Any
    ) -> Result[ConnectorCredential]:
        """Create a connector credential."""
        return _send(conn, 'POST', _url(conn, provider), json=body)

    @staticmethod
    def create_or_raise(conn: Connection, provider: str, body: Any) -> ConnectorCredential:
        return unwrap(ConnectorCredentials.create(conn, provider, body))

    @staticmethod
    def find(conn: Connection, provider: str, id: str) -> Result[ConnectorCredential]:
        """Find a connector credential."""
        return _send(conn, 'GET', _url(conn, provider, id))

    @staticmethod
    def find_or_raise(conn: Connection, provider: str, id: str) -> ConnectorCredential:
        return unwrap(ConnectorCredentials.find(conn, provider, id))

    @staticmethod
    def delete(conn: Connection, provider: str, id: str) -> Result[Any]:
        """Delete a connector credential. The response body is returned as is."""
        return _send(conn, 'DELETE', _url(conn, provider, id), model=None)

    @staticmethod
    def delete_or_raise(conn: Connection, provider: str, id: str) -> Any:
        return unwrap(ConnectorCredentials.delete(conn, provider, id))

    @staticmethod
    def update(
        conn: Connection, provider: str, id: str, changeset: Any
    ) -> Result[ConnectorCredential]:
        """Update a connector credential."""
        return _send(conn, 'PATCH', _url(conn, provider, id), json=changeset)

    @staticmethod
    def update_or_raise(
        conn: Connection, provider: str, id: str, changeset: Any
    ) -> ConnectorCredential:
        return unwrap(ConnectorCredentials.update(conn, provider, id, changeset))
