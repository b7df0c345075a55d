from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from nylasapi.transport import Failure, HttpxTransport, Success

if TYPE_CHECKING:
    from nylasapi.request import Request

DEFAULT_API_SERVER = 'https://api.nylas.com'


class TransportOptions(BaseModel):
    """Options handed to the transport on every dispatch."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    timeout: float | None = Field(
        30.0, description='Timeout in seconds for each request, None to disable.'
    )

    event_hooks: dict[str, list[Callable[..., Any]]] = Field(
        default_factory=dict,
        description="Instrumentation hooks keyed by 'request' and 'response'.",
    )

    transport: Any = Field(
        default_factory=HttpxTransport,
        description='Object implementing dispatch(request, options).',
    )


class Connection(BaseModel):
    """Credentials and server location threaded through every operation.

    Connections are immutable and may be shared between threads.
    """

    model_config = ConfigDict(frozen=True)

    api_server: str = Field(DEFAULT_API_SERVER, description='Base URL of the API.')

    client_id: str | None = Field(
        None, description='Application client id, used by client-scoped paths.'
    )

    access_token: str = Field(..., description='Access token or API key.')

    options: TransportOptions = Field(default_factory=TransportOptions)

    def dispatch(self, request: 'Request') -> Success | Failure:
        """Hand ``request`` to the configured transport."""
        return self.options.transport.dispatch(request, self.options)
