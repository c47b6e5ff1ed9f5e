"""Base Pydantic models for polyscript.

This module provides the base model class that all polyscript Pydantic models inherit from.
It establishes consistent configuration across all models:

- Strict field validation (no extra fields allowed)
- Immutable instances so a loaded configuration can be shared between evaluations

Example:
    >>> from polyscript.models import PolyscriptBaseModel
    >>> from pydantic import Field
    >>>
    >>> class MyModel(PolyscriptBaseModel):
    ...     name: str
    ...     count: int = Field(default=0, ge=0)
    >>>
    >>> instance = MyModel(name="test")
    >>> instance.model_dump()
    {'name': 'test', 'count': 0}
"""

from pydantic import BaseModel, ConfigDict


class PolyscriptBaseModel(BaseModel):
    """Base model for all polyscript Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
