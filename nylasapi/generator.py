"""Binding generator.

``expand`` turns a ``Descriptor`` into a fixed table of operations, one per
included ``OperationKind``, each with a result form returning ``Ok``/``Err``
and a raising form built on top of it. ``Resource`` runs the expansion once
when a subclass is created and exposes the operations as static methods::

    class Messages(Resource, descriptor=Descriptor(
        path='messages', model=Message, include=['list', 'find']
    )):
        pass

    result = Messages.list(conn, {'unread': True})
    message = Messages.find_or_raise(conn, message_id)
"""

import dataclasses
import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from pydantic import BaseModel

from nylasapi.connection import Connection
from nylasapi.descriptor import Descriptor, OperationKind
from nylasapi.errors import unwrap
from nylasapi.exceptions import ConfigurationError, UnsupportedOperationError
from nylasapi.response import classify
from nylasapi.templates import TEMPLATES, OperationTemplate, build_draft

__all__ = ['Operation', 'expand', 'Resource', 'RAISING_SUFFIX']

logger = logging.getLogger(__name__)

RAISING_SUFFIX = '_or_raise'


@dataclasses.dataclass(frozen=True)
class Operation:
    kind: OperationKind
    name: str
    method: str | None
    call: Callable[..., Any]
    call_or_raise: Callable[..., Any]
    template: OperationTemplate = dataclasses.field(repr=False)

    def url_template(self, descriptor: Descriptor) -> str | None:
        return self.template.url_template(descriptor)


def _check_descriptor(descriptor: Descriptor) -> None:
    model = descriptor.model
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise ConfigurationError(
            f"Result type of '{descriptor.path}' must be a pydantic model",
            field='model',
        )

    if OperationKind.BUILD not in descriptor.include:
        return
    draft = descriptor.draft
    if draft is None:
        raise ConfigurationError(
            f"'{descriptor.path}' includes build but declares no draft type",
            field='draft',
        )
    if not (isinstance(draft, type) and issubclass(draft, BaseModel)):
        raise ConfigurationError(
            f"Draft type of '{descriptor.path}' must be a pydantic model", field='draft'
        )
    if draft.model_config.get('extra') != 'forbid':
        raise ConfigurationError(
            f"Draft type {draft.__name__} must forbid extra fields", field='draft'
        )


def _remote_operation(
    template: OperationTemplate, descriptor: Descriptor
) -> Callable[..., Any]:
    interpret = functools.partial(template.interpret, model=descriptor.model)

    def operation(conn: Connection, *args, **kwargs):
        request = template.request(descriptor, conn, *args, **kwargs)
        logger.debug(
            f'{template.kind.value} {descriptor.path}: {request.method} {request.url}'
        )
        outcome = conn.dispatch(request)
        return classify(outcome, interpret)

    return operation


def _local_operation(
    template: OperationTemplate, descriptor: Descriptor
) -> Callable[..., Any]:
    def operation(payload):
        return build_draft(descriptor, payload)

    return operation


def _raising(operation: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(operation)
    def raising(*args, **kwargs):
        return unwrap(operation(*args, **kwargs))

    return raising


def _finish(
    func: Callable[..., Any],
    name: str,
    doc: str,
    parameters: list[inspect.Parameter],
    owner: str,
) -> Callable[..., Any]:
    func.__name__ = name
    func.__qualname__ = f'{owner}.{name}'
    func.__doc__ = doc
    func.__signature__ = inspect.Signature(parameters)
    return func


def _materialize(template: OperationTemplate, descriptor: Descriptor) -> Operation:
    name = template.kind.value
    owner = descriptor.path
    summary = template.doc.format(name=descriptor.name)
    parameters = template.parameters()

    if template.local:
        call = _local_operation(template, descriptor)
        returns = 'Ok with the draft, or Err with a ValidationFailure.'
    else:
        call = _remote_operation(template, descriptor)
        returns = 'Ok with the result, or Err with a TransportFailure or RemoteFailure.'

    call = _finish(call, name, f'{summary}\n\nReturns {returns}', parameters, owner)
    call_or_raise = _finish(
        _raising(call),
        name + RAISING_SUFFIX,
        f'{summary}\n\nReturns the unwrapped result and raises OperationError on failure.',
        parameters,
        owner,
    )
    return Operation(
        kind=template.kind,
        name=name,
        method=template.method,
        call=call,
        call_or_raise=call_or_raise,
        template=template,
    )


def expand(descriptor: Descriptor) -> Mapping[OperationKind, Operation]:
    """Generate the operations of a resource.

    Args:
        descriptor: The resource to generate operations for.

    Returns:
        A read-only mapping from operation kind to operation, ordered like
        ``OperationKind``.

    Raises:
        UnsupportedOperationError: If an included kind has no template.
        ConfigurationError: If the descriptor is otherwise unusable.
    """
    _check_descriptor(descriptor)

    operations = {}
    for kind in OperationKind:
        if kind not in descriptor.include:
            continue
        template = TEMPLATES.get(kind)
        if template is None:
            raise UnsupportedOperationError(kind.value)
        operations[kind] = _materialize(template, descriptor)

    logger.debug(
        f"Expanded '{descriptor.path}' into: {', '.join(k.value for k in operations)}"
    )
    return MappingProxyType(operations)


class Resource:
    """Base class for resources generated from a descriptor.

    Attributes defined on the subclass itself are left in place, so custom
    implementations can replace generated ones.
    """

    descriptor: ClassVar[Descriptor | None] = None
    operations: ClassVar[Mapping[OperationKind, Operation]] = MappingProxyType({})

    def __init_subclass__(cls, descriptor: Descriptor | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if descriptor is None:
            return

        cls.descriptor = descriptor
        cls.operations = expand(descriptor)
        for operation in cls.operations.values():
            for name, func in (
                (operation.name, operation.call),
                (operation.name + RAISING_SUFFIX, operation.call_or_raise),
            ):
                if name not in cls.__dict__:
                    setattr(cls, name, staticmethod(func))
