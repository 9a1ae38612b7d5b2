"""
Data models for the node resolver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union


# --- Type aliases ---

T = TypeVar("T")

SchemaNode = Dict[str, Any]
IdReference = Dict[str, str]
Arrayable = Union[T, List[T]]

# Hooks receive the active ResolutionContext as their second argument
DefaultsFactory = Callable[[Any], SchemaNode]
ResolveHook = Callable[[SchemaNode, Any], Optional[SchemaNode]]
MergeRelationsHook = Callable[[SchemaNode, Any], None]


# --- Enums ---

class ResolutionState(Enum):
    """Lifecycle of a NodeResolver. RESOLVED is terminal."""
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class MergeStrategy(Enum):
    """
    How the graph stores a node whose @id is already present.

    - REPLACE: the newer node takes the place of the existing one.
    - PATCH: the newer node's fields are merged over the existing one.
    """
    REPLACE = "replace"
    PATCH = "patch"


@dataclass
class NodeResolverDefinition:
    """
    Configuration bundle describing how one node type resolves.

    defaults:        fallback fields, either a partial node or a callable
                     taking the resolution context and returning one
    required:        field names the resolved node is expected to carry
                     (advisory, see NodeResolver.validate_required)
    resolve:         hook (node, context) -> node for type-specific
                     normalization; returning None keeps the given node
    merge_relations: hook (node, context) invoked by the graph once every
                     node is resolved
    """
    defaults: Union[SchemaNode, DefaultsFactory, None] = None
    required: List[str] = field(default_factory=list)
    resolve: Optional[ResolveHook] = None
    merge_relations: Optional[MergeRelationsHook] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeResolverDefinition":
        """Build a definition from a plain mapping with the same keys."""
        unknown = set(data) - {"defaults", "required", "resolve", "merge_relations"}
        if unknown:
            raise ValueError(f"Unknown node resolver definition keys: {sorted(unknown)}")
        return cls(
            defaults=data.get("defaults"),
            required=list(data.get("required") or []),
            resolve=data.get("resolve"),
            merge_relations=data.get("merge_relations"),
        )


@dataclass
class NodeResolverOptions:
    """Per-resolver options."""
    strategy: MergeStrategy = MergeStrategy.REPLACE


@dataclass
class ResolverOptions:
    """Options for resolving an Arrayable input."""
    array: bool = False  # always return a list, even for a single element
