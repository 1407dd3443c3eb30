"""Render structured values as single-cell text.

The output is canonical rather than round-trippable: strings are not quoted,
keywords lose their colon and collection members are joined with bare commas.
Maps and sets render in canonical order, so equal values render identically.
"""

import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from .values import Char, EdnList, EdnSet, Keyword, Map, Symbol, Tagged, Vector


def _join(values: Iterable[Any]) -> str:
    return ",".join(render(value) for value in values)


def render_float(value: float | Decimal) -> str:
    """Shortest round-trip digits in plain positional notation.

    ``2.0`` renders as ``2`` and ``1e20`` as ``100000000000000000000``.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        value = Decimal(repr(value))
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render(value: Any) -> str:
    """Render ``value`` recursively.

    Every structured value (the 13 EDN variants) renders without error.

    Raises:
        TypeError: If ``value`` is some other Python object, which no
            reader output can contain.
    """
    if value is None:
        return "nil"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Char):
        return value.value
    if isinstance(value, (Symbol, Keyword)):
        return value.name
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        return render_float(value)
    if isinstance(value, EdnList):
        return "(" + _join(value) + ")"
    if isinstance(value, Vector):
        return "[" + _join(value) + "]"
    if isinstance(value, Map):
        return "{" + ",".join(f"{render(k)} {render(v)}" for k, v in value.items()) + "}"
    if isinstance(value, EdnSet):
        return "#{" + _join(value) + "}"
    if isinstance(value, Tagged):
        return f"#{value.tag} {render(value.value)}"
    raise TypeError(f"Unsupported value type: {type(value)}")
