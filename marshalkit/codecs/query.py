"""Query-string codec with bracket notation.

Nested data is written as `a[b]=1&c[0]=x&c[1]=y`; decoding also accepts
the empty-index form `c[]=x&c[]=y`. Decoded leaves are strings.
"""

import re
from typing import Any, Iterable
from urllib.parse import parse_qsl, urlencode

_KEY_PART = re.compile(r"\[([^\]]*)\]")


def split_key(key: str) -> list[str]:
    """Split `a[b][]` into ["a", "b", ""]."""
    head, _, rest = key.partition("[")
    if not rest:
        return [key]
    return [head, *_KEY_PART.findall("[" + rest)]


def _insert(node: dict, parts: list[str], value: str) -> None:
    for part in parts[:-1]:
        if part == "":
            part = str(len(node))
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    last = parts[-1]
    if last == "":
        last = str(len(node))
    node[last] = value


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    converted = {key: _listify(value) for key, value in node.items()}
    keys = list(converted)
    if keys and keys == [str(i) for i in range(len(keys))]:
        return list(converted.values())
    return converted


def decode_query(query: str) -> dict:
    """Decode a query string into nested data.

    Args:
        query: Percent-encoded query string, with or without a leading "?"

    Returns:
        Nested mapping; groups keyed 0..n-1 become lists
    """
    root: dict = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        _insert(root, split_key(key), value)
    return {key: _listify(value) for key, value in root.items()}


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten(data: Any, prefix: str = "") -> list[tuple[str, str]]:
    """Flatten nested data into (bracketed key, value) pairs."""
    if isinstance(data, dict):
        items: Iterable = data.items()
    elif isinstance(data, (list, tuple, set, frozenset)):
        items = enumerate(data)
    else:
        return [(prefix, _scalar(data))]

    pairs = []
    for key, value in items:
        name = f"{prefix}[{key}]" if prefix else str(key)
        pairs.extend(flatten(value, name))
    return pairs


def encode_query(data: dict, omit: Iterable[str] = ()) -> str:
    """Encode a mapping as a percent-encoded query string.

    Args:
        data: Plain mapping, as produced by a stringifying dump
        omit: Top-level keys left out of the result
    """
    skipped = set(omit)
    kept = {key: value for key, value in data.items() if key not in skipped}
    return urlencode(flatten(kept))
