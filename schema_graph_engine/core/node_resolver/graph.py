"""
Graph assembly: resolves registered nodes and links them together.

SchemaGraph owns one graph-building pass. Resolvers are resolved in
registration order and their results placed among the context's root-level
nodes (where image nodes created during resolution already live). Once every
node is resolved, merge_relations hooks run so nodes can point at each
other.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from schema_graph_engine.core.node_resolver.attribute_cleaner import clean_attributes
from schema_graph_engine.core.node_resolver.context import ResolutionContext, inject_context
from schema_graph_engine.core.node_resolver.models import MergeStrategy, SchemaNode
from schema_graph_engine.core.node_resolver.node_resolver import NodeResolver

logger = logging.getLogger(__name__)

SCHEMA_ORG_CONTEXT = "https://schema.org"


class SchemaGraph:
    """Collects node resolvers and plain nodes for one graph-building pass."""

    def __init__(self, context: Optional[ResolutionContext] = None):
        self.context = inject_context(context)
        self.resolvers: List[NodeResolver] = []
        # graph node stored for each already-placed resolver, in registration order
        self._placed: List[SchemaNode] = []
        # number of placed resolvers whose merge_relations hook has run
        self._linked = 0

    def add(self, item: Union[NodeResolver, SchemaNode], strategy: MergeStrategy = MergeStrategy.REPLACE) -> "SchemaGraph":
        """Register a resolver, or add an already-final node directly."""
        if isinstance(item, NodeResolver):
            self.resolvers.append(item)
        else:
            self.context.add_node(clean_attributes(item), strategy)
        return self

    @property
    def pending(self) -> List[NodeResolver]:
        """Resolvers registered since the last resolve()."""
        return self.resolvers[len(self._placed):]

    def resolve(self) -> List[SchemaNode]:
        """
        Resolve pending resolvers and run their relation hooks.

        Each resolver is placed in the graph and has its merge_relations
        hook run once; calling resolve() again only handles resolvers added
        in between.

        Returns:
            The root-level nodes of the graph, one per @id
        """
        if not self.pending and self._linked == len(self._placed):
            return self.context.nodes

        for resolver in self.pending:
            node = resolver.resolve(self.context)
            self._placed.append(self.context.add_node(node, resolver.options.strategy))

        while self._linked < len(self._placed):
            self.resolvers[self._linked].merge_relations(self.context, self._placed[self._linked])
            self._linked += 1

        # relation hooks may have written empty values
        for node in self.context.nodes:
            clean_attributes(node)

        logger.info(f"Resolved schema graph with {len(self.context.nodes)} node(s) from {len(self.resolvers)} resolver(s)")
        return self.context.nodes

    def find(self, node_id: str) -> Optional[SchemaNode]:
        return self.context.find_node(node_id)

    def to_graph(self) -> Dict[str, Any]:
        """Return the JSON-LD document mapping, resolving pending resolvers first."""
        return {"@context": SCHEMA_ORG_CONTEXT, "@graph": self.resolve()}
