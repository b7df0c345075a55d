"""nylasapi - Typed Python bindings for the Nylas API.

Every resource is described once by a ``Descriptor``; the binding generator
expands it into a uniform family of operations (list, first, search, find,
delete, send, create, update and build). Each operation comes in two forms:
one returning ``Ok``/``Err`` and one that unwraps the result or raises.

Quick Start:
    >>> from nylasapi import Connection, Messages
    >>>
    >>> conn = Connection(access_token='...')
    >>> result = Messages.list(conn, {'unread': True})
    >>> if result.ok:
    ...     for message in result.value:
    ...         print(message.subject)
    >>>
    >>> message = Messages.find_or_raise(conn, 'message-id')

CLI Usage:
    $ nylasapi operations messages
    $ nylasapi call messages list -p limit=5
"""

from importlib.metadata import PackageNotFoundError, version

from nylasapi.config import ConnectionConfig, get_config
from nylasapi.connection import Connection, TransportOptions
from nylasapi.descriptor import Descriptor, HeaderStyle, OperationKind
from nylasapi.errors import (
    NylasFailure,
    RemoteFailure,
    TransportFailure,
    ValidationFailure,
    unwrap,
)
from nylasapi.exceptions import (
    BuildError,
    ConfigurationError,
    NylasAPIError,
    OperationError,
    RemoteError,
    TransportError,
    UnsupportedOperationError,
)
from nylasapi.generator import Operation, Resource, expand
from nylasapi.models import Draft, ResultModel
from nylasapi.resources import (
    ConnectorCredential,
    ConnectorCredentials,
    ManagementAccount,
    ManagementAccounts,
    Message,
    Messages,
)
from nylasapi.result import Err, Ok, Result
from nylasapi.transport import HttpxTransport

__all__ = [
    # Connection and configuration
    'Connection',
    'TransportOptions',
    'HttpxTransport',
    'ConnectionConfig',
    'get_config',
    # Generator
    'Descriptor',
    'HeaderStyle',
    'OperationKind',
    'Operation',
    'Resource',
    'expand',
    'ResultModel',
    'Draft',
    # Results
    'Ok',
    'Err',
    'Result',
    'unwrap',
    'NylasFailure',
    'TransportFailure',
    'RemoteFailure',
    'ValidationFailure',
    # Exceptions
    'NylasAPIError',
    'ConfigurationError',
    'UnsupportedOperationError',
    'OperationError',
    'TransportError',
    'RemoteError',
    'BuildError',
    # Resources
    'ConnectorCredential',
    'ConnectorCredentials',
    'ManagementAccount',
    'ManagementAccounts',
    'Message',
    'Messages',
]

try:
    __version__ = version('nylasapi')
except PackageNotFoundError:
    __version__ = 'unknown'
