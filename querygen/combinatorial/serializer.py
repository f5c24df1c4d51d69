"""Query-string rendering for combinations."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from querygen.combinatorial.encoding import encode_value


def serialize(
    combination: Mapping[str, Sequence[str]],
    encoder: Callable[[str], str] = encode_value,
) -> str:
    """Render a combination as a query-string suffix.

    Parameters are rendered in the combination's order, one ``name=value``
    pair per value. Parameters without values contribute nothing.

    Returns:
        ``"?a=1&b=2"``, or ``""`` when no parameter carries a value.

    Example:
        >>> serialize({"colorCodingType": ("status",), "color": ("green", "red")})
        '?colorCodingType=status&color=green&color=red'
        >>> serialize({"color": ()})
        ''
    """
    pairs = [
        f"{name}={encoder(value)}"
        for name, values in combination.items()
        for value in values
    ]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def parse_query(suffix: str) -> list[tuple[str, str]]:
    """Split a suffix produced by :func:`serialize` back into pairs.

    Values are returned in their encoded form.
    """
    if not suffix:
        return []
    body = suffix[1:] if suffix.startswith("?") else suffix
    pairs: list[tuple[str, str]] = []
    for chunk in body.split("&"):
        name, _, value = chunk.partition("=")
        pairs.append((name, value))
    return pairs
