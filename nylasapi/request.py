"""Request assembly.

Everything here is pure data assembly: given a descriptor, a connection and
call arguments it produces a ``Request`` without touching the network.
"""

import base64
import dataclasses
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from nylasapi.descriptor import HeaderStyle
from nylasapi.exceptions import ConfigurationError

if TYPE_CHECKING:
    from nylasapi.connection import Connection
    from nylasapi.descriptor import Descriptor

__all__ = [
    'Request',
    'base_url',
    'resource_url',
    'header_bearer',
    'header_basic',
    'build_headers',
    'build_request',
    'serialize_body',
]

JSON_CONTENT_TYPE = 'application/json'


@dataclasses.dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    params: dict[str, Any] | None = None
    json: Any = None
    content: str | bytes | None = None

    @property
    def has_body(self) -> bool:
        return self.json is not None or self.content is not None


def base_url(conn: 'Connection', use_client_url: bool = False) -> str:
    server = conn.api_server.rstrip('/')
    if use_client_url:
        if not conn.client_id:
            raise ConfigurationError(
                'A client id is required for client-scoped resources',
                field='client_id',
            )
        return f'{server}/a/{conn.client_id}'
    return server


def resource_url(descriptor: 'Descriptor', conn: 'Connection', *segments: Any) -> str:
    """Build ``{server}[/a/{client_id}]/{resource}[/segment...]``."""
    parts = [base_url(conn, descriptor.use_client_url), descriptor.path]
    parts.extend(str(segment) for segment in segments)
    return '/'.join(parts)


def header_bearer(conn: 'Connection') -> dict[str, str]:
    return {'authorization': f'Bearer {conn.access_token}'}


def header_basic(conn: 'Connection') -> dict[str, str]:
    # The access token is the username, the password is empty.
    credentials = base64.b64encode(f'{conn.access_token}:'.encode()).decode('ascii')
    return {'authorization': f'Basic {credentials}'}


_HEADER_BUILDERS = {
    HeaderStyle.BEARER: header_bearer,
    HeaderStyle.BASIC: header_basic,
}


def build_headers(
    style: HeaderStyle | str,
    conn: 'Connection',
    content_type: str | None = None,
    accept: str = JSON_CONTENT_TYPE,
) -> dict[str, str]:
    """Build the headers for one request.

    Args:
        style: Header construction style of the resource.
        conn: Connection providing the access token.
        content_type: Content type of the body, if the request has one.
        accept: Value of the accept header.

    Returns:
        A new header dictionary.
    """
    headers = {'accept': accept}
    headers.update(_HEADER_BUILDERS[HeaderStyle(style)](conn))
    if content_type:
        headers['content-type'] = content_type
    return headers


def serialize_body(body: Any) -> Any:
    """Turn models into JSON-compatible data, leave anything else alone."""
    if isinstance(body, BaseModel):
        # Drafts keep values as given, which may not match the annotations.
        return body.model_dump(
            mode='json', by_alias=True, exclude_unset=True, warnings=False
        )
    return body


def build_request(
    method: str,
    url: str,
    style: HeaderStyle | str,
    conn: 'Connection',
    *,
    params: dict[str, Any] | None = None,
    json: Any = None,
    content: str | bytes | None = None,
    content_type: str | None = None,
    accept: str = JSON_CONTENT_TYPE,
) -> Request:
    """Assemble a request, adding a content type when there is a body.

    JSON bodies get ``application/json`` unless ``content_type`` says
    otherwise; raw ``content`` requires an explicit ``content_type``.
    """
    if json is not None:
        json = serialize_body(json)
        content_type = content_type or JSON_CONTENT_TYPE

    return Request(
        method=method.upper(),
        url=url,
        headers=build_headers(style, conn, content_type=content_type, accept=accept),
        params=dict(params) if params is not None else None,
        json=json,
        content=content,
    )
