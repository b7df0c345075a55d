"""Classify transport outcomes into results."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from nylasapi.errors import normalize
from nylasapi.result import Err, Ok, Result
from nylasapi.transform import transform
from nylasapi.transport import Failure, Success

__all__ = ['SUCCESS_STATUS', 'classify', 'handle_response', 'passthrough']

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200

T = TypeVar('T')


def passthrough(body: Any) -> Any:
    return body


def classify(
    outcome: Success | Failure, interpret: Callable[[Any], T] = passthrough
) -> Result[T]:
    """Decide success or failure from the outcome alone.

    A status of 200 is a success and its body goes through ``interpret``.
    Any other status, and any transport failure, becomes an ``Err``.
    """
    if isinstance(outcome, Success) and outcome.status == SUCCESS_STATUS:
        return Ok(interpret(outcome.body))

    error = normalize(outcome)
    logger.debug(f'Request failed: {error}')
    return Err(error)


def handle_response(
    outcome: Success | Failure, model: type[BaseModel] | None = None
) -> Result[Any]:
    """Classify an outcome and transform a successful body into ``model``.

    Without a model the decoded body is returned as is.
    """
    if model is None:
        return classify(outcome)
    return classify(outcome, lambda body: transform(body, model))
