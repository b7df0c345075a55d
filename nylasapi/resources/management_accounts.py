"""Nylas management accounts.

Management endpoints live under ``/a/{client_id}/`` and authenticate with
HTTP basic auth.
"""

from typing import Any, TypeVar

from pydantic import BaseModel

from nylasapi.connection import Connection
from nylasapi.descriptor import Descriptor, HeaderStyle
from nylasapi.errors import unwrap
from nylasapi.generator import Resource
from nylasapi.models import ResultModel
from nylasapi.request import base_url, build_request
from nylasapi.response import handle_response
from nylasapi.result import Result

__all__ = ['ManagementAccount', 'ManagementAccounts']

M = TypeVar('M', bound=BaseModel)


class ManagementAccount(ResultModel):
    id: str | None = None
    billing_state: str | None = None
    email_address: str | None = None
    namespace_id: str | None = None
    provider: str | None = None
    sync_state: str | None = None
    trial: bool | None = None
    authentication_type: str | None = None

    class Downgrade(ResultModel):
        success: bool | None = None

    class Upgrade(ResultModel):
        success: bool | None = None

    class RevokeAll(ResultModel):
        success: bool | None = None

    class IPAddresses(ResultModel):
        ip_addresses: list[str] | None = None
        updated_at: int | None = None

    class TokenInfo(ResultModel):
        created_at: int | None = None
        scopes: str | None = None
        state: str | None = None
        updated_at: int | None = None


def _call(
    conn: Connection, method: str, path: str, model: type[M], json: Any = None
) -> Result[M]:
    url = f'{base_url(conn, use_client_url=True)}/{path}'
    request = build_request(method, url, HeaderStyle.BASIC, conn, json=json)
    return handle_response(conn.dispatch(request), model)


class ManagementAccounts(
    Resource,
    descriptor=Descriptor(
        path='accounts',
        model=ManagementAccount,
        include=['list', 'find'],
        header_style=HeaderStyle.BASIC,
        use_client_url=True,
    ),
):
    """Interface for Nylas management accounts."""

    @staticmethod
    def downgrade(
        conn: Connection, account_id: str
    ) -> Result[ManagementAccount.Downgrade]:
        """Downgrade an account.

        Example:
            >>> result = ManagementAccounts.downgrade(conn, account_id)
        """
        return _call(
            conn,
            'POST',
            f'accounts/{account_id}/downgrade',
            ManagementAccount.Downgrade,
            json={},
        )

    @staticmethod
    def downgrade_or_raise(
        conn: Connection, account_id: str
    ) -> ManagementAccount.Downgrade:
        return unwrap(ManagementAccounts.downgrade(conn, account_id))

    @staticmethod
    def upgrade(conn: Connection, account_id: str) -> Result[ManagementAccount.Upgrade]:
        """Upgrade an account."""
        return _call(
            conn,
            'POST',
            f'accounts/{account_id}/upgrade',
            ManagementAccount.Upgrade,
            json={},
        )

    @staticmethod
    def upgrade_or_raise(conn: Connection, account_id: str) -> ManagementAccount.Upgrade:
        return unwrap(ManagementAccounts.upgrade(conn, account_id))

    @staticmethod
    def revoke_all(conn: Connection, id: str) -> Result[ManagementAccount.RevokeAll]:
        """Revoke all tokens of an account."""
        return _call(
            conn,
            'POST',
            f'accounts/{id}/revoke-all',
            ManagementAccount.RevokeAll,
            json={},
        )

    @staticmethod
    def revoke_all_or_raise(conn: Connection, id: str) -> ManagementAccount.RevokeAll:
        return unwrap(ManagementAccounts.revoke_all(conn, id))

    @staticmethod
    def ip_addresses(conn: Connection) -> Result[ManagementAccount.IPAddresses]:
        """Get the IP addresses the API connects from."""
        return _call(conn, 'GET', 'ip_addresses', ManagementAccount.IPAddresses)

    @staticmethod
    def ip_addresses_or_raise(conn: Connection) -> ManagementAccount.IPAddresses:
        return unwrap(ManagementAccounts.ip_addresses(conn))

    @staticmethod
    def token_info(conn: Connection, id: str) -> Result[ManagementAccount.TokenInfo]:
        """Get information about the connection's access token for an account."""
        return _call(
            conn,
            'POST',
            f'accounts/{id}/token-info',
            ManagementAccount.TokenInfo,
            json={'access_token': conn.access_token},
        )

    @staticmethod
    def token_info_or_raise(conn: Connection, id: str) -> ManagementAccount.TokenInfo:
        return unwrap(ManagementAccounts.token_info(conn, id))
