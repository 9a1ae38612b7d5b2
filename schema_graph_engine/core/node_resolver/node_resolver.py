"""
Lazy, memoized resolution of a single graph node.

A NodeResolver wraps a partial node and the NodeResolverDefinition of its
type. Nothing is computed until resolve() (or resolve_id()) is first called;
the result is then cached and returned by every later call.

Resolution steps:
1. Compute defaults (static mapping, or a factory called with the context)
2. Deep merge the partial node over the defaults (caller wins)
3. Expand the image field into root-level ImageObject nodes
4. Run the definition's resolve hook
5. Strip empty attributes
6. Cache

A failure in any step leaves the resolver unresolved, so the next call
starts over.
"""

import copy
import logging
import threading
from typing import Any, Dict, List, Optional, Union

from schema_graph_engine.core.node_resolver.attribute_cleaner import clean_attributes
from schema_graph_engine.core.node_resolver.context import ResolutionContext, inject_context
from schema_graph_engine.core.node_resolver.errors import MissingRequiredFieldsError
from schema_graph_engine.core.node_resolver.merge import deep_merge
from schema_graph_engine.core.node_resolver.models import (
    NodeResolverDefinition,
    NodeResolverOptions,
    ResolutionState,
    SchemaNode,
)

logger = logging.getLogger(__name__)


class NodeResolver:
    """Resolves one partial node against its definition, exactly once."""

    def __init__(
        self,
        node_partial: SchemaNode,
        definition: NodeResolverDefinition,
        options: Optional[NodeResolverOptions] = None,
    ):
        self.node_partial = node_partial
        self.definition = definition
        self.options = options or NodeResolverOptions()
        self._resolved: Optional[SchemaNode] = None
        # Reentrant so a hook that reaches back into its own resolver
        # recurses instead of deadlocking
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"NodeResolver(state={self.state.value}, node_partial={self.node_partial!r})"

    def __deepcopy__(self, memo: Dict[int, Any]) -> "NodeResolver":
        # Resolvers are shared handles: nodes that embed one keep pointing at
        # the same memoized instance.
        return self

    @property
    def state(self) -> ResolutionState:
        return ResolutionState.RESOLVED if self._resolved is not None else ResolutionState.UNRESOLVED

    def resolve(self, context: Optional[ResolutionContext] = None) -> SchemaNode:
        """
        Resolve the node, or return the cached result.

        Args:
            context: Resolution context, defaults to the active one. Not
                looked up at all once the node is resolved.

        Returns:
            The resolved, cleaned node. The same object on every call.

        Raises:
            MissingContextError: If unresolved and no context is available
            Exception: Anything raised by the defaults factory or resolve hook
        """
        if self._resolved is not None:
            logger.debug(f"Node resolver cache HIT for {self._resolved.get('@id')}")
            return self._resolved

        with self._lock:
            # Double-checked: another caller may have finished while we waited
            if self._resolved is not None:
                return self._resolved

            resolution_context = inject_context(context)
            resolved = self._compute(resolution_context)
            self._resolved = resolved
            logger.debug(f"Node resolver cache SET for {resolved.get('@id')}")

        missing = self.missing_required_fields()
        if missing:
            logger.warning(f"Resolved node {resolved.get('@id')} is missing required fields: {', '.join(missing)}")
        return resolved

    def resolve_id(self, context: Optional[ResolutionContext] = None) -> Optional[str]:
        """Return the @id of the resolved node, resolving it if needed."""
        return self.resolve(context).get("@id")

    def merge_relations(self, context: Optional[ResolutionContext] = None, node: Optional[SchemaNode] = None) -> None:
        """
        Run the definition's merge_relations hook.

        Args:
            context: Resolution context, defaults to the active one
            node: The node the graph actually holds for this resolver (differs
                from the resolved node when it was patched into an existing
                one). Defaults to the resolved node.
        """
        if not self.definition.merge_relations:
            return
        resolution_context = inject_context(context)
        target = node if node is not None else self.resolve(resolution_context)
        self.definition.merge_relations(target, resolution_context)

    def missing_required_fields(self) -> List[str]:
        """Declared required fields absent from the resolved node (empty while unresolved)."""
        if self._resolved is None:
            return []
        return [key for key in self.definition.required if key not in self._resolved]

    def validate_required(self, context: Optional[ResolutionContext] = None) -> SchemaNode:
        """
        Resolve and enforce the definition's required fields.

        Raises:
            MissingRequiredFieldsError: If any required field is absent
        """
        node = self.resolve(context)
        missing = self.missing_required_fields()
        if missing:
            raise MissingRequiredFieldsError(node.get("@id") or "", missing)
        return node

    def _compute(self, context: ResolutionContext) -> SchemaNode:
        defaults = self.definition.defaults or {}
        if callable(defaults):
            defaults = defaults(context) or {}

        # user input wins over defaults
        node = deep_merge(self.node_partial, defaults)

        # image expansion registers root nodes; a failed build must not leave them behind
        root_nodes = list(context.nodes)
        try:
            if node.get("image"):
                node["image"] = context.resolve_images(
                    node["image"],
                    resolve_primary_image=True,
                    as_root_nodes=True,
                )

            # allow the node type to resolve itself
            if self.definition.resolve:
                try:
                    hooked = self.definition.resolve(node, context)
                except Exception as e:
                    logger.error(f"Resolve hook failed for node {node.get('@id')}: {e}", exc_info=True)
                    raise
                if hooked is not None:
                    node = hooked

            return clean_attributes(node)
        except Exception:
            context.nodes[:] = root_nodes
            raise


def define_node_resolver(
    node_partial: SchemaNode,
    definition: Union[NodeResolverDefinition, Dict[str, Any]],
    options: Optional[NodeResolverOptions] = None,
) -> NodeResolver:
    """
    Create a NodeResolver for a partial node.

    Args:
        node_partial: Fields supplied by the caller; these win over defaults
        definition: NodeResolverDefinition or a mapping with the same keys
        options: NodeResolverOptions, REPLACE strategy by default

    Returns:
        An unresolved NodeResolver
    """
    if isinstance(definition, dict):
        definition = NodeResolverDefinition.from_dict(definition)
    return NodeResolver(copy.copy(node_partial) if node_partial else {}, definition, options)
