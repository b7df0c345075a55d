"""HTTP transport used by generated operations.

The operations only depend on the ``Transport`` protocol: a single
``dispatch`` call that turns a ``Request`` into either a ``Success`` (the
exchange completed, whatever the status) or a ``Failure`` (it did not).
``HttpxTransport`` is the default implementation.
"""

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

if TYPE_CHECKING:
    from nylasapi.connection import TransportOptions
    from nylasapi.request import Request

__all__ = ['Success', 'Failure', 'Transport', 'HttpxTransport', 'decode_body']

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Success:
    """The exchange completed; ``status`` may still be an error status."""

    status: int
    body: Any
    headers: dict[str, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class Failure:
    """The exchange could not be completed."""

    reason: str
    cause: BaseException | None = None


class Transport(Protocol):
    def dispatch(
        self, request: 'Request', options: 'TransportOptions'
    ) -> Success | Failure: ...


def decode_body(response: httpx.Response) -> Any:
    """Decode JSON bodies, return anything else as text."""
    content_type = response.headers.get('content-type', '')
    if 'json' in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class HttpxTransport:
    """Dispatch requests with a short-lived ``httpx.Client``.

    Timeout and event hooks come from the connection's transport options, so
    one transport instance can serve any number of connections.

    Example:
        >>> mock = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        >>> options = TransportOptions(transport=HttpxTransport(mock))
    """

    def __init__(self, transport: httpx.BaseTransport | None = None):
        self._transport = transport

    def dispatch(
        self, request: 'Request', options: 'TransportOptions'
    ) -> Success | Failure:
        try:
            with httpx.Client(
                timeout=options.timeout,
                event_hooks=options.event_hooks,
                transport=self._transport,
            ) as client:
                response = client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    params=request.params,
                    json=request.json,
                    content=request.content,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # Bad content encodings and malformed URLs fail the exchange too.
            reason = str(e) or type(e).__name__
            logger.debug(f'{request.method} {request.url} failed: {reason}')
            return Failure(reason=reason, cause=e)

        logger.debug(f'{request.method} {request.url} -> {response.status_code}')
        return Success(
            status=response.status_code,
            body=decode_body(response),
            headers=dict(response.headers),
        )
