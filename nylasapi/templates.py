"""Operation templates.

One template per ``OperationKind``. A template knows the HTTP verb, how to
build the request from the call arguments and how to interpret a successful
body. The ``build`` template is the exception: it checks the keys of a
payload locally and never builds a request.
"""

import dataclasses
import inspect
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from nylasapi.connection import Connection
from nylasapi.descriptor import OperationKind
from nylasapi.errors import ValidationFailure
from nylasapi.request import Request, base_url, build_request, resource_url
from nylasapi.result import Err, Ok, Result
from nylasapi.transform import transform

if TYPE_CHECKING:
    from nylasapi.descriptor import Descriptor

__all__ = [
    'OperationTemplate',
    'TEMPLATES',
    'PAGE_SIZE_PARAM',
    'build_draft',
    'draft_fields',
]

PAGE_SIZE_PARAM = 'limit'

_PLACEHOLDER_CONNECTION = Connection(
    api_server='{server}', client_id='{client_id}', access_token=''
)


@dataclasses.dataclass(frozen=True)
class OperationTemplate:
    kind: OperationKind
    method: str | None
    doc: str
    request: Callable[..., Request] | None = None
    interpret: Callable[[Any, type[BaseModel]], Any] | None = None

    @property
    def local(self) -> bool:
        """Whether the operation runs without a network call."""
        return self.request is None

    def parameters(self) -> list[inspect.Parameter]:
        """Call parameters of the generated operation, connection first."""
        if self.request is None:
            return [
                inspect.Parameter('payload', inspect.Parameter.POSITIONAL_OR_KEYWORD)
            ]
        # Drop the descriptor, which the generator binds.
        return list(inspect.signature(self.request).parameters.values())[1:]

    def url_template(self, descriptor: 'Descriptor') -> str | None:
        """Render the URL shape with ``{placeholders}`` for display."""
        if self.request is None:
            return None
        # Optional arguments such as query params never appear in the path.
        args = [
            f'{{{p.name}}}'
            for p in self.parameters()[1:]
            if p.default is inspect.Parameter.empty
        ]
        return self.request(descriptor, _PLACEHOLDER_CONNECTION, *args).url


def _list_request(
    descriptor: 'Descriptor', conn: Connection, params: Mapping[str, Any] | None = None
) -> Request:
    return build_request(
        'GET',
        resource_url(descriptor, conn),
        descriptor.header_style,
        conn,
        params=dict(params or {}),
    )


def _first_request(
    descriptor: 'Descriptor', conn: Connection, params: Mapping[str, Any] | None = None
) -> Request:
    return _list_request(descriptor, conn, {**(params or {}), PAGE_SIZE_PARAM: 1})


def _search_request(
    descriptor: 'Descriptor', conn: Connection, search_text: str
) -> Request:
    return build_request(
        'GET',
        resource_url(descriptor, conn, 'search'),
        descriptor.header_style,
        conn,
        params={'q': search_text},
    )


def _find_request(descriptor: 'Descriptor', conn: Connection, id: str) -> Request:
    return build_request(
        'GET', resource_url(descriptor, conn, id), descriptor.header_style, conn
    )


def _delete_request(descriptor: 'Descriptor', conn: Connection, id: str) -> Request:
    return build_request(
        'DELETE', resource_url(descriptor, conn, id), descriptor.header_style, conn
    )


def _send_request(descriptor: 'Descriptor', conn: Connection, message: Any) -> Request:
    return build_request(
        'POST',
        f'{base_url(conn)}/{descriptor.send_path}',
        descriptor.header_style,
        conn,
        json=message,
    )


def _create_request(descriptor: 'Descriptor', conn: Connection, body: Any) -> Request:
    return build_request(
        'POST',
        resource_url(descriptor, conn),
        descriptor.header_style,
        conn,
        json=body,
    )


def _update_request(
    descriptor: 'Descriptor', conn: Connection, changeset: Any, id: str
) -> Request:
    # Client-scoped resources are updated on the collection path.
    if descriptor.use_client_url:
        url = resource_url(descriptor, conn)
    else:
        url = resource_url(descriptor, conn, id)
    return build_request('PUT', url, descriptor.header_style, conn, json=changeset)


def _one(body: Any, model: type[BaseModel]) -> Any:
    return transform(body, model)


def _head(body: Any, model: type[BaseModel]) -> Any:
    if isinstance(body, list):
        return transform(body[0], model) if body else None
    return transform(body, model)


def _passthrough(body: Any, model: type[BaseModel]) -> Any:
    return body


def draft_fields(draft: type[BaseModel]) -> dict[str, str]:
    """Map every accepted payload key, alias or field name, to its field."""
    fields = {}
    for name, field in draft.model_fields.items():
        fields[name] = name
        if field.alias:
            fields[field.alias] = name
    return fields


def build_draft(descriptor: 'Descriptor', payload: Mapping[str, Any]) -> Result[Any]:
    """Create a draft from ``payload`` without sending it.

    Only the keys are checked: a key the draft type does not declare is
    rejected, values of declared fields are kept as given. No request is
    made.
    """
    draft = descriptor.draft
    model = draft.__qualname__
    if not isinstance(payload, Mapping):
        error = {
            'type': 'dict_type',
            'loc': (),
            'msg': f'Expected a mapping, got {type(payload).__name__}',
        }
        return Err(ValidationFailure(model=model, errors=(error,)))

    fields = draft_fields(draft)
    errors = tuple(
        {
            'type': 'extra_forbidden',
            'loc': (key,),
            'msg': 'Extra inputs are not permitted',
            'input': value,
        }
        for key, value in payload.items()
        if key not in fields
    )
    if errors:
        return Err(ValidationFailure(model=model, errors=errors))

    return Ok(draft.model_construct(**{fields[k]: v for k, v in payload.items()}))


_TEMPLATES = [
    OperationTemplate(
        kind=OperationKind.LIST,
        method='GET',
        doc='Fetch {name}(s), optionally filtered by query `params`.',
        request=_list_request,
        interpret=_one,
    ),
    OperationTemplate(
        kind=OperationKind.FIRST,
        method='GET',
        doc='Get the first {name}, or None when there is none.',
        request=_first_request,
        interpret=_head,
    ),
    OperationTemplate(
        kind=OperationKind.SEARCH,
        method='GET',
        doc='Search for {name}(s) matching `search_text`.',
        request=_search_request,
        interpret=_one,
    ),
    OperationTemplate(
        kind=OperationKind.FIND,
        method='GET',
        doc='Find a {name} by `id`.',
        request=_find_request,
        interpret=_one,
    ),
    OperationTemplate(
        kind=OperationKind.DELETE,
        method='DELETE',
        doc='Delete a {name} by `id`.',
        request=_delete_request,
        interpret=_passthrough,
    ),
    OperationTemplate(
        kind=OperationKind.SEND,
        method='POST',
        doc='Send a {name}.',
        request=_send_request,
        interpret=_one,
    ),
    OperationTemplate(
        kind=OperationKind.CREATE,
        method='POST',
        doc='Create a {name} from `body`.',
        request=_create_request,
        interpret=_one,
    ),
    OperationTemplate(
        kind=OperationKind.UPDATE,
        method='PUT',
        doc='Update the {name} `id` with `changeset`.',
        request=_update_request,
        interpret=_one,
    ),
    OperationTemplate(
        kind=OperationKind.BUILD,
        method=None,
        doc='Create and validate a {name} draft without sending it.',
    ),
]

TEMPLATES: Mapping[OperationKind, OperationTemplate] = MappingProxyType(
    {template.kind: template for template in _TEMPLATES}
)
