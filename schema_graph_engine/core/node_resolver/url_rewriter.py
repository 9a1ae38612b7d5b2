"""
Locator rewriting for graph nodes.

Relative urls and ids (root-relative "/path" or fragment "#name") are joined
onto a canonical base; anything carrying a protocol is treated as already
absolute and left alone.
"""

import re
from typing import Any, Dict

from schema_graph_engine.core.node_resolver.errors import MalformedIdError

PROTOCOL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]+:")
PROTOCOL_RELATIVE_PATTERN = re.compile(r"^//[^/]+")


def has_protocol(value: str, accept_relative: bool = False) -> bool:
    """True for 'https://...', 'mailto:...' and, optionally, '//host/...'."""
    if PROTOCOL_PATTERN.match(value):
        return True
    return accept_relative and bool(PROTOCOL_RELATIVE_PATTERN.match(value))


def join_url(base: str, *parts: str) -> str:
    """
    Join url segments with exactly one slash between them.

    Fragment segments ('#name') are appended directly so that
    join_url('https://example.com/', '#hero') gives 'https://example.com#hero'.
    """
    url = base or ""
    for part in parts:
        if not part or part == "/":
            continue
        if not url:
            url = part
        elif part.startswith("#"):
            url = url.rstrip("/") + part
        else:
            url = url.rstrip("/") + "/" + part.lstrip("/")
    return url


def with_base(value: str, base: str) -> str:
    """Prefix value with base unless it already starts with it."""
    if not base or base == "/":
        return value
    trimmed_base = base.rstrip("/")
    if value.startswith(trimmed_base):
        return value
    return join_url(trimmed_base, value)


def resolve_with_base_url(base: str, url_or_path: str) -> str:
    """
    Rewrite a root-relative or fragment-relative locator against base.

    Empty values, values with a protocol, and values starting with neither
    '/' nor '#' are returned unchanged.
    """
    if not url_or_path or has_protocol(url_or_path):
        return url_or_path
    if not url_or_path.startswith("/") and not url_or_path.startswith("#"):
        return url_or_path
    return with_base(url_or_path, base)


def prefix_id(url: str, node_id: str) -> str:
    """
    Qualify a bare id with url, e.g. ('https://example.com', 'hero') -> 'https://example.com#hero'.

    An id that already carries a protocol is considered prefixed: url is
    returned unchanged.
    """
    if has_protocol(node_id):
        return url
    if not node_id.startswith("#"):
        node_id = f"#{node_id}"
    return join_url(url, node_id)


def resolve_url(node: Dict[str, Any], key: str, prefix: str) -> None:
    """Rewrite node[key] in place when it holds a non-empty string."""
    value = node.get(key)
    if value and isinstance(value, str):
        node[key] = resolve_with_base_url(prefix, value)


def resolve_id(node: Dict[str, Any], prefix: str) -> None:
    """Rewrite node['@id'] in place when it holds a non-empty string."""
    resolve_url(node, "@id", prefix)


def resolve_raw_id(node: Dict[str, Any]) -> str:
    """
    Return the local '#fragment' part of a fully-qualified node id.

    Raises:
        MalformedIdError: If the id has no '#'
    """
    node_id = node.get("@id") or ""
    index = node_id.rfind("#")
    if index == -1:
        raise MalformedIdError(node_id)
    return node_id[index:]
