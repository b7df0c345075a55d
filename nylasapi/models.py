"""Base classes for result and draft models."""

from pydantic import BaseModel, ConfigDict

__all__ = ['ResultModel', 'Draft']


class ResultModel(BaseModel):
    """Record returned by the API. Every field should be optional."""

    model_config = ConfigDict(populate_by_name=True)


class Draft(BaseModel):
    """Unsent payload created by ``build``. Unknown fields are rejected."""

    model_config = ConfigDict(extra='forbid', populate_by_name=True)
