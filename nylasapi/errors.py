"""Error normalization for nylasapi operations.

Every failure, whatever its origin, is represented by one of three values:

- ``TransportFailure``: the exchange never completed (DNS, refused
  connection, TLS, timeout).
- ``RemoteFailure``: the API answered with a non-success status. The
  response body is attached as received so that service specific error
  payloads can be inspected.
- ``ValidationFailure``: a ``build`` payload did not fit its draft type.

``unwrap`` is the only place where these values are turned into exceptions.
"""

import dataclasses
from typing import Any, TypeVar

from nylasapi.exceptions import (
    BuildError,
    OperationError,
    RemoteError,
    TransportError,
)
from nylasapi.result import Err, Ok, Result
from nylasapi.transport import Failure, Success

__all__ = [
    'NylasFailure',
    'RemoteFailure',
    'TransportFailure',
    'ValidationFailure',
    'normalize',
    'unwrap',
]

T = TypeVar('T')


@dataclasses.dataclass(frozen=True)
class TransportFailure:
    reason: str
    cause: BaseException | None = dataclasses.field(default=None, compare=False)

    def __str__(self) -> str:
        return f'Transport failure: {self.reason}'


@dataclasses.dataclass(frozen=True)
class RemoteFailure:
    status: int
    body: Any

    def __str__(self) -> str:
        return f'HTTP {self.status} Error: {self.body!r}'


@dataclasses.dataclass(frozen=True)
class ValidationFailure:
    model: str
    errors: tuple[dict[str, Any], ...] = ()

    @property
    def unknown_fields(self) -> list[str]:
        """Names of the payload keys the draft type does not declare."""
        return [
            '.'.join(str(part) for part in error['loc'])
            for error in self.errors
            if error.get('type') == 'extra_forbidden'
        ]

    def __str__(self) -> str:
        unknown = self.unknown_fields
        if unknown:
            return f'Invalid {self.model}: unknown field(s) {", ".join(unknown)}'
        return f'Invalid {self.model}: {len(self.errors)} validation error(s)'


NylasFailure = TransportFailure | RemoteFailure | ValidationFailure

_EXCEPTIONS: dict[type, type[OperationError]] = {
    TransportFailure: TransportError,
    RemoteFailure: RemoteError,
    ValidationFailure: BuildError,
}


def normalize(outcome: Success | Failure) -> TransportFailure | RemoteFailure:
    """Convert a failed transport outcome into a failure value.

    Args:
        outcome: A transport ``Failure`` or a ``Success`` whose status is not
            the success status.

    Returns:
        The matching failure value.
    """
    if isinstance(outcome, Failure):
        return TransportFailure(reason=outcome.reason, cause=outcome.cause)
    return RemoteFailure(status=outcome.status, body=outcome.body)


def unwrap(result: Result[T]) -> T:
    """Return the value of a successful result or raise its failure.

    Raises:
        TransportError: For a ``TransportFailure``.
        RemoteError: For a ``RemoteFailure``.
        BuildError: For a ``ValidationFailure``.
    """
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Err):
        raise _EXCEPTIONS[type(result.error)](result.error)
    raise TypeError(f'Expected Ok or Err, got {type(result).__name__}')
