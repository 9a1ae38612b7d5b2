"""
Schema graph node resolver.

This module builds structured metadata graphs (schema.org JSON-LD nodes)
from partial node input: defaults are merged in, images expanded, relative
locators rewritten, and every node resolved lazily and exactly once.

The main entry points are define_node_resolver() and SchemaGraph.
"""

# Core resolution
from schema_graph_engine.core.node_resolver.node_resolver import NodeResolver, define_node_resolver
from schema_graph_engine.core.node_resolver.arrayable_resolver import resolve_arrayable
from schema_graph_engine.core.node_resolver.graph import SchemaGraph

# Context
from schema_graph_engine.core.node_resolver.context import (
    ResolutionContext,
    active_context,
    get_active_context,
    inject_context,
    reset_active_context,
    set_active_context,
)
from schema_graph_engine.core.node_resolver.config import ResolverSettings, configure_logging, load_settings

# Helpers
from schema_graph_engine.core.node_resolver.identity import IDENTITY_ID, id_reference, is_id_reference
from schema_graph_engine.core.node_resolver.url_rewriter import (
    has_protocol,
    join_url,
    prefix_id,
    resolve_id,
    resolve_raw_id,
    resolve_url,
    resolve_with_base_url,
)
from schema_graph_engine.core.node_resolver.attribute_cleaner import clean_attributes
from schema_graph_engine.core.node_resolver.merge import deep_merge
from schema_graph_engine.core.node_resolver.route_meta import resolve_route_meta, set_if_empty
from schema_graph_engine.core.node_resolver.image_resolver import resolve_images
from schema_graph_engine.core.node_resolver.utils import (
    as_list,
    call_as_partial,
    includes_type,
    resolve_date_to_iso,
    resolve_type,
    trim_length,
)

# Data models and errors
from schema_graph_engine.core.node_resolver.models import (
    MergeStrategy,
    NodeResolverDefinition,
    NodeResolverOptions,
    ResolutionState,
    ResolverOptions,
)
from schema_graph_engine.core.node_resolver.errors import (
    MalformedIdError,
    MissingContextError,
    MissingRequiredFieldsError,
    NodeResolutionError,
)

__all__ = [
    # Core resolution
    'NodeResolver',
    'define_node_resolver',
    'resolve_arrayable',
    'SchemaGraph',

    # Context
    'ResolutionContext',
    'active_context',
    'get_active_context',
    'inject_context',
    'reset_active_context',
    'set_active_context',
    'ResolverSettings',
    'configure_logging',
    'load_settings',

    # Helpers
    'IDENTITY_ID',
    'id_reference',
    'is_id_reference',
    'has_protocol',
    'join_url',
    'prefix_id',
    'resolve_id',
    'resolve_raw_id',
    'resolve_url',
    'resolve_with_base_url',
    'clean_attributes',
    'deep_merge',
    'resolve_route_meta',
    'set_if_empty',
    'resolve_images',
    'as_list',
    'call_as_partial',
    'includes_type',
    'resolve_date_to_iso',
    'resolve_type',
    'trim_length',

    # Data models and errors
    'MergeStrategy',
    'NodeResolverDefinition',
    'NodeResolverOptions',
    'ResolutionState',
    'ResolverOptions',
    'MalformedIdError',
    'MissingContextError',
    'MissingRequiredFieldsError',
    'NodeResolutionError',
]
