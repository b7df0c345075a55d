"""Custom exceptions for nylasapi.

This module defines the hierarchy of exceptions raised by nylasapi. Result-form
operations never raise these for remote or transport failures; they are raised
by the ``*_or_raise`` operations and by descriptor validation.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nylasapi.errors import (
        NylasFailure,
        RemoteFailure,
        TransportFailure,
        ValidationFailure,
    )


class NylasAPIError(Exception):
    """Base exception for all nylasapi errors.

    All exceptions raised by nylasapi inherit from this class, making it easy
    to catch all nylasapi-related errors with a single except clause.

    Example:
        try:
            Messages.find_or_raise(conn, message_id)
        except NylasAPIError as e:
            print(f"Nylas error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigurationError(NylasAPIError):
    """Error in configuration.

    This exception is raised when the configuration file or a resource
    descriptor is invalid.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class UnsupportedOperationError(ConfigurationError):
    """A descriptor named an operation kind that has no template.

    Attributes:
        operation: The operation name that was requested.
        suggestion: Optional hint listing the supported operations.
    """

    def __init__(self, operation: str, suggestion: str | None = None):
        self.operation = operation
        self.suggestion = suggestion
        message = f"Unsupported operation: '{operation}'"
        if suggestion:
            message += f'. {suggestion}'
        super().__init__(message, field='include')


class OperationError(NylasAPIError):
    """Raised by ``*_or_raise`` operations when the result is an error.

    Attributes:
        error: The failure value the result-form operation returned.
    """

    def __init__(self, error: 'NylasFailure', message: str | None = None):
        self.error = error
        super().__init__(message or str(error))


class TransportError(OperationError):
    """The HTTP exchange could not be completed."""

    error: 'TransportFailure'

    @property
    def reason(self) -> str:
        return self.error.reason


class RemoteError(OperationError):
    """The API answered with a status other than the success status.

    Attributes:
        status: The HTTP status code of the response.
        body: The decoded response body, untouched.
    """

    error: 'RemoteFailure'

    @property
    def status(self) -> int:
        return self.error.status

    @property
    def body(self) -> Any:
        return self.error.body


class BuildError(OperationError):
    """A draft payload failed structural validation."""

    error: 'ValidationFailure'

    @property
    def unknown_fields(self) -> list[str]:
        return self.error.unknown_fields
