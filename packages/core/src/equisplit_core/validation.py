"""Turn caller data into models at the engine boundary.

The public entry points accept either model instances or plain dicts.
Dicts are validated with pydantic and failures are re-raised as
``equisplit_core.exceptions`` errors so callers only catch one hierarchy.
"""

from typing import Any, Iterable, Optional, TypeVar

import pydantic
from pydantic import BaseModel

from .exceptions import UnknownJurisdictionError, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _location(prefix: str, loc: tuple) -> str:
    return ".".join(str(part) for part in (prefix, *loc) if part != "")


def coerce_model(model: type[ModelT], data: Any, *, field: str) -> ModelT:
    """
    Validate ``data`` as ``model``.

    Args:
        model: Target pydantic model class
        data: Model instance or mapping of field values
        field: Name of the input, used as the error location prefix

    Returns:
        The validated model instance

    Raises:
        UnknownJurisdictionError: If the jurisdiction code is not recognized
        ValidationError: For any other invalid input
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        loc = tuple(first.get("loc", ()))
        location = _location(field, loc)
        if loc and loc[-1] == "jurisdiction" and first.get("type") == "enum":
            raise UnknownJurisdictionError(first.get("input"), field=location) from e
        raise ValidationError(
            f"Invalid {field}: {first.get('msg', 'validation failed')}",
            field=location,
            value=_safe_value(first.get("input")),
            constraint=first.get("type"),
            locations=[_location(field, tuple(error.get("loc", ()))) for error in e.errors()],
        ) from e


def coerce_models(
    model: type[ModelT], items: Optional[Iterable[Any]], *, field: str
) -> list[ModelT]:
    """Validate each element of a sequence, indexing errors by position."""
    if items is None:
        return []
    return [
        coerce_model(model, item, field=f"{field}.{index}")
        for index, item in enumerate(items)
    ]


def _safe_value(value: Any) -> Optional[str]:
    """Keep scalar inputs for error details; drop nested structures."""
    if value is None or isinstance(value, (dict, list, tuple)):
        return None
    return str(value)
