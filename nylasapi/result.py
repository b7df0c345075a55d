"""Result values returned by every result-form operation."""

import dataclasses
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from nylasapi.errors import NylasFailure

__all__ = ['Ok', 'Err', 'Result']

T = TypeVar('T')


@dataclasses.dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome carrying the typed value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True)
class Err:
    """A failed outcome carrying a normalized failure value."""

    error: 'NylasFailure'

    @property
    def ok(self) -> bool:
        return False


Result = Ok[T] | Err
