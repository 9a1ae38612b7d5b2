"""
Small helpers shared by node definitions.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Callable, List, Optional, TypeVar, Union

from schema_graph_engine.core.node_resolver.models import (
    Arrayable,
    MergeStrategy,
    NodeResolverOptions,
    SchemaNode,
)

R = TypeVar("R")


def as_list(value: Arrayable[Any]) -> List[Any]:
    """Wrap a bare value in a list; lists are returned as-is, tuples converted."""
    if value is None:
        return []
    if isinstance(value, tuple):
        return list(value)
    return value if isinstance(value, list) else [value]


def resolve_date_to_iso(value: Union[date, datetime, str]) -> str:
    """
    Convert a date, datetime or date string to an ISO-8601 UTC string.

    The output always has millisecond precision and a Z suffix, e.g.
    '2022-01-05T00:00:00.000Z'. Naive values are taken to be UTC.

    Raises:
        ValueError: If a string cannot be parsed as an ISO date
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def includes_type(node: SchemaNode, type_name: str) -> bool:
    """True when the node's @type (string or list) contains type_name."""
    return type_name in as_list(node.get("@type"))


def resolve_type(value: Arrayable[str], default_type: Arrayable[str]) -> Arrayable[str]:
    """
    Combine a node's @type with the definition's default type.

    Default types come first, duplicates are dropped. A single resulting
    type is returned as the value that was given.
    """
    if value == default_type:
        return value
    types: List[str] = []
    for type_name in as_list(default_type) + as_list(value):
        if type_name not in types:
            types.append(type_name)
    if len(types) == 1:
        return value or types[0]
    return types


def trim_length(value: str, length: int) -> str:
    """Cut value to at most length characters, backing off to a word boundary."""
    if len(value) <= length:
        return value
    trimmed = value[:length]
    last_space = trimmed.rfind(" ")
    if last_space == -1:
        return trimmed
    return trimmed[:last_space]


def call_as_partial(fn: Callable[[SchemaNode, NodeResolverOptions], R], data: Optional[SchemaNode]) -> R:
    """Call a node factory with a patch strategy, for partial updates of an existing node."""
    return fn(data or {}, NodeResolverOptions(strategy=MergeStrategy.PATCH))
