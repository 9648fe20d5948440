"""Errors raised at the edges of the division engine.

Dividing well-formed input never fails. Errors come from two places:
turning caller data into models (``ValidationError`` and its
``UnknownJurisdictionError`` subclass) and loading settings
(``ConfigurationError``). Catching ``EquiSplitError`` covers all of them.

Example:
    try:
        division = classify_and_divide(personal_info, assets, debts)
    except ValidationError as e:
        return {"error": e.message, "fields": e.locations}
"""

from typing import Any, Iterable, Optional


class EquiSplitError(Exception):
    """Root of the engine's exception hierarchy.

    Attributes:
        message: Human-readable error description.
        details: Context for error responses; ``None`` values are dropped.
        recoverable: True when resubmitting corrected input can succeed.
    """

    recoverable = False

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = {key: value for key, value in details.items() if value is not None}


class ValidationError(EquiSplitError):
    """Caller data could not be turned into engine models.

    ``field`` is the dotted path of the first failure, such as
    ``assets.2.current_value``. ``locations`` holds the path of every
    failure reported for the same input.

    Example:
        >>> raise ValidationError(
        ...     "Invalid assets.0: Input should be greater than or equal to 0",
        ...     field="assets.0.current_value",
        ...     value="-100",
        ...     constraint="greater_than_equal",
        ... )
    """

    recoverable = True

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        locations: Iterable[str] = (),
    ) -> None:
        self.field = field
        self.value = value
        self.constraint = constraint
        self.locations = list(locations) or ([field] if field else [])
        super().__init__(
            message,
            field=field,
            value=value,
            constraint=constraint,
            locations=self.locations if len(self.locations) > 1 else None,
        )


class UnknownJurisdictionError(ValidationError):
    """The jurisdiction code is not one of the 50 states or DC."""

    def __init__(self, code: Any, *, field: str = "jurisdiction") -> None:
        super().__init__(
            f"Unknown jurisdiction code: {code!r}",
            field=field,
            value=code,
            constraint="two-letter code of a U.S. state or DC",
        )
        self.code = code


class ConfigurationError(EquiSplitError):
    """An ``EQUISPLIT_*`` setting is invalid.

    Attributes:
        config_key: Environment variable holding the bad value.
        actual: The value that was rejected.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        actual: Optional[Any] = None,
    ) -> None:
        super().__init__(message, config_key=config_key, actual=actual)
        self.config_key = config_key
        self.actual = actual


__all__ = [
    "EquiSplitError",
    "ValidationError",
    "UnknownJurisdictionError",
    "ConfigurationError",
]
