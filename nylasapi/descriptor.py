"""Declarative description of one API resource.

A ``Descriptor`` is everything the binding generator needs to produce the
operations of a resource: where it lives, what it returns, which operations
it supports and how requests authenticate.
"""

import dataclasses
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from nylasapi.exceptions import ConfigurationError, UnsupportedOperationError

__all__ = ['OperationKind', 'HeaderStyle', 'Descriptor']


class OperationKind(str, Enum):
    LIST = 'list'
    FIRST = 'first'
    SEARCH = 'search'
    FIND = 'find'
    DELETE = 'delete'
    SEND = 'send'
    BUILD = 'build'
    CREATE = 'create'
    UPDATE = 'update'

    @classmethod
    def coerce(cls, value: 'OperationKind | str') -> 'OperationKind':
        try:
            return cls(value)
        except ValueError:
            supported = ', '.join(kind.value for kind in cls)
            raise UnsupportedOperationError(
                str(value), suggestion=f'Supported operations: {supported}'
            ) from None


class HeaderStyle(str, Enum):
    BEARER = 'bearer'
    BASIC = 'basic'


@dataclasses.dataclass(frozen=True)
class Descriptor:
    """Configuration for one resource binding.

    Attributes:
        path: Path segment of the resource, e.g. ``'messages'``.
        model: Pydantic model the responses are transformed into.
        include: Operation kinds to generate. Strings are accepted.
        header_style: How the access token is sent.
        use_client_url: Root paths at ``/a/{client_id}/`` instead of the
            server root.
        draft: Model validated by ``build``. Required when ``build`` is
            included.
        send_path: Path of the endpoint used by ``send``.
    """

    path: str
    model: type[BaseModel]
    include: frozenset[OperationKind] = frozenset()
    header_style: HeaderStyle = HeaderStyle.BEARER
    use_client_url: bool = False
    draft: type[BaseModel] | None = None
    send_path: str = 'send'

    def __post_init__(self):
        include = self.include
        if isinstance(include, (str, OperationKind)):
            include = [include]
        object.__setattr__(self, 'include', self._coerce_include(include))

        try:
            object.__setattr__(self, 'header_style', HeaderStyle(self.header_style))
        except ValueError:
            raise ConfigurationError(
                f"Unknown header style '{self.header_style}'", field='header_style'
            ) from None

        if not self.path:
            raise ConfigurationError('Resource path must not be empty', field='path')

    @staticmethod
    def _coerce_include(
        include: Iterable[OperationKind | str],
    ) -> frozenset[OperationKind]:
        return frozenset(OperationKind.coerce(kind) for kind in include)

    @property
    def name(self) -> str:
        return self.model.__name__
