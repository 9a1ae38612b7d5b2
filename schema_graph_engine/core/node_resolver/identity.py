"""
Identifier references: pointers to a graph node by @id rather than by value.
"""

from typing import Any, Mapping, Union

from schema_graph_engine.core.node_resolver.models import IdReference, SchemaNode

IDENTITY_ID = "#identity"


def id_reference(node: Union[SchemaNode, str]) -> IdReference:
    """Return an {'@id': ...} pointer for a node or a raw id string."""
    if isinstance(node, str):
        return {"@id": node}
    return {"@id": node["@id"]}


def is_id_reference(value: Any) -> bool:
    """True when the value is a mapping whose only key is a non-empty @id."""
    if isinstance(value, str) or not isinstance(value, Mapping):
        return False
    return len(value) == 1 and bool(value.get("@id"))
