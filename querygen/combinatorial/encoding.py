"""Wire encoding for query parameter values.

Values are normalized once, when a parameter is declared, into a tuple
of strings. The combinatorial core only ever sees those tuples.
"""

from __future__ import annotations

import math
from typing import Any

from querygen.errors import ErrorCode, ErrorContext, InvalidParameterError

ParameterValue = str | int | float | bool
EncodedValues = tuple[str, ...]

_SCALAR_TYPES = (str, int, float, bool)


def encode_value(value: ParameterValue) -> str:
    """Render a value in its query-string form.

    Booleans become ``true``/``false`` and spaces become ``%20``. No other
    escaping is done.

    Example:
        >>> encode_value("north america")
        'north%20america'
        >>> encode_value(True)
        'true'
    """
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return text.replace(" ", "%20")


def is_absent(value: Any) -> bool:
    """Return True for values that declare no parameter at all.

    ``None``, ``""``, ``False`` and NaN are absent. ``0`` is a value.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def normalize_values(
    values: Any,
    name: str | None = None,
    context: ErrorContext | None = None,
) -> EncodedValues:
    """Coerce a raw declaration into an ordered tuple of encoded values.

    Args:
        values: A scalar, a list/tuple of scalars, or an absent value.
        name: Parameter name, used in error messages.
        context: Attached to the error raised for an unsupported value.

    Returns:
        Tuple of encoded strings; empty when the declaration is absent.

    Raises:
        InvalidParameterError: If any element is not a string, number or
            boolean.
    """
    if isinstance(values, (list, tuple)):
        items = list(values)
    elif is_absent(values):
        return ()
    else:
        items = [values]

    encoded: list[str] = []
    for item in items:
        if not isinstance(item, _SCALAR_TYPES):
            raise InvalidParameterError(
                f"Parameter '{name}' has an unsupported value {item!r} "
                f"of type {type(item).__name__}",
                name=name,
                value=item,
                error_code=ErrorCode.INVALID_PARAMETER_VALUE,
                context=context or ErrorContext(parameter=name),
            )
        encoded.append(encode_value(item))
    return tuple(encoded)
