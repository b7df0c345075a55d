"""Nylas messages."""

from typing import Any

from pydantic import Field

from nylasapi.connection import Connection
from nylasapi.descriptor import Descriptor
from nylasapi.errors import unwrap
from nylasapi.generator import Resource
from nylasapi.models import Draft, ResultModel
from nylasapi.request import base_url, build_request
from nylasapi.response import handle_response
from nylasapi.result import Result

__all__ = ['Message', 'Messages']

RFC822 = 'message/rfc822'


class Message(ResultModel):
    account_id: str | None = None
    bcc: list[Any] | None = None
    body: str | None = None
    cc: list[Any] | None = None
    date: int | None = None
    events: list[Any] | None = None
    files: list[Any] | None = None
    folder: dict[str, Any] | None = None
    from_: list[Any] | None = Field(None, alias='from')
    id: str | None = None
    labels: list[Any] | None = None
    object: str | None = None
    reply_to: list[Any] | None = None
    snippet: str | None = None
    starred: bool | None = None
    subject: str | None = None
    thread_id: str | None = None
    to: list[Any] | None = None
    unread: bool | None = None
    reply_to_message_id: str | None = None
    metadata: dict[str, Any] | None = None
    cids: list[Any] | None = None
    headers: dict[str, Any] | None = None

    class Build(Draft):
        """The send message request payload."""

        bcc: list[Any] | None = None
        body: str | None = None
        cc: list[Any] | None = None
        events: list[Any] | None = None
        files: list[Any] | None = None
        from_: list[Any] | None = Field(None, alias='from')
        labels: list[Any] | None = None
        reply_to: list[Any] | None = None
        subject: str | None = None
        to: list[Any] | None = None
        tracking: dict[str, Any] | None = None
        metadata: dict[str, Any] | None = None


class Messages(
    Resource,
    descriptor=Descriptor(
        path='messages',
        model=Message,
        include=['list', 'first', 'search', 'find', 'update', 'send', 'build'],
        draft=Message.Build,
    ),
):
    """Interface for Nylas messages."""

    @staticmethod
    def get_raw(conn: Connection, id: str) -> Result[str]:
        """Get the raw MIME content of a message.

        Example:
            >>> result = Messages.get_raw(conn, message_id)
        """
        request = build_request(
            'GET', f'{base_url(conn)}/messages/{id}', 'bearer', conn, accept=RFC822
        )
        return handle_response(conn.dispatch(request))

    @staticmethod
    def get_raw_or_raise(conn: Connection, id: str) -> str:
        return unwrap(Messages.get_raw(conn, id))

    @staticmethod
    def send_raw(conn: Connection, raw: str | bytes) -> Result[Message]:
        """Send a message given as raw MIME.

        Example:
            >>> result = Messages.send_raw(conn, mime)
        """
        request = build_request(
            'POST',
            f'{base_url(conn)}/send',
            'bearer',
            conn,
            content=raw,
            content_type=RFC822,
        )
        return handle_response(conn.dispatch(request), Message)

    @staticmethod
    def send_raw_or_raise(conn: Connection, raw: str | bytes) -> Message:
        return unwrap(Messages.send_raw(conn, raw))
