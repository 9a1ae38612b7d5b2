"""
Resolution context and its scoped activation.

A ResolutionContext carries the site-wide values node defaults are computed
from, the list of root-level graph nodes, and the image expansion
collaborator. Functions that need one accept it explicitly; when omitted
they fall back to the context activated for the current scope:

    with active_context(ResolutionContext(canonical_host="https://example.com")):
        node = resolver.resolve()

Uses contextvars so concurrent threads and tasks each see their own scope.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional

from schema_graph_engine.core.node_resolver.config import (
    DEFAULT_CANONICAL_HOST,
    DEFAULT_LANGUAGE,
    ResolverSettings,
    load_settings,
)
from schema_graph_engine.core.node_resolver.errors import MissingContextError
from schema_graph_engine.core.node_resolver.image_resolver import resolve_images
from schema_graph_engine.core.node_resolver.merge import deep_merge
from schema_graph_engine.core.node_resolver.models import Arrayable, MergeStrategy, SchemaNode

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Shared state available to defaults factories and resolve hooks."""
    canonical_host: str = DEFAULT_CANONICAL_HOST
    canonical_url: Optional[str] = None
    default_language: str = DEFAULT_LANGUAGE
    meta: Dict[str, Any] = field(default_factory=dict)
    nodes: List[SchemaNode] = field(default_factory=list)
    image_resolver: Callable[..., Arrayable[SchemaNode]] = resolve_images

    def __post_init__(self):
        if not self.canonical_url:
            self.canonical_url = self.canonical_host

    @classmethod
    def from_settings(cls, settings: ResolverSettings, **kwargs) -> "ResolutionContext":
        return cls(
            canonical_host=settings.canonical_host,
            canonical_url=settings.canonical_url,
            default_language=settings.default_language,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "ResolutionContext":
        return cls.from_settings(load_settings(), **kwargs)

    def find_node(self, node_id: str) -> Optional[SchemaNode]:
        for node in self.nodes:
            if node.get("@id") == node_id:
                return node
        return None

    def add_node(self, node: SchemaNode, strategy: MergeStrategy = MergeStrategy.REPLACE) -> SchemaNode:
        """
        Add a root-level node to the graph.

        A node with an @id already present either replaces the existing
        node in place (REPLACE) or is merged into it (PATCH). With PATCH the
        existing dict object is updated and stays the one held by the graph.

        Returns:
            The node stored in the graph
        """
        node_id = node.get("@id")
        for index, existing in enumerate(self.nodes):
            if node_id and existing.get("@id") == node_id:
                if strategy == MergeStrategy.PATCH:
                    merged = deep_merge(node, existing)
                    existing.clear()
                    existing.update(merged)
                    stored = existing
                else:
                    stored = node
                    self.nodes[index] = stored
                logger.debug(f"Updated root node {node_id} ({strategy.value})")
                return stored
        self.nodes.append(node)
        return node

    def resolve_images(self, value: Any, resolve_primary_image: bool = False, as_root_nodes: bool = False) -> Arrayable[SchemaNode]:
        """Expand an image value through the configured collaborator."""
        return self.image_resolver(
            self,
            value,
            resolve_primary_image=resolve_primary_image,
            as_root_nodes=as_root_nodes,
        )


_active_context: ContextVar[Optional[ResolutionContext]] = ContextVar("resolution_context", default=None)


def get_active_context() -> Optional[ResolutionContext]:
    """Return the context activated for the current scope, if any."""
    return _active_context.get()


def set_active_context(context: Optional[ResolutionContext]) -> Token:
    """Activate a context; returns a token for reset_active_context()."""
    return _active_context.set(context)


def reset_active_context(token: Token) -> None:
    _active_context.reset(token)


@contextmanager
def active_context(context: ResolutionContext) -> Generator[ResolutionContext, None, None]:
    """Activate context for the duration of a with block."""
    token = set_active_context(context)
    try:
        yield context
    finally:
        reset_active_context(token)


def inject_context(context: Optional[ResolutionContext] = None) -> ResolutionContext:
    """
    Return the explicit context, else the active one.

    Raises:
        MissingContextError: If neither is available
    """
    if context is not None:
        return context
    current = _active_context.get()
    if current is None:
        raise MissingContextError()
    return current
