"""
Applies a per-node function across a single node or a list of nodes.
"""

from typing import Any, Callable, List, Optional

from schema_graph_engine.core.node_resolver.context import ResolutionContext, inject_context
from schema_graph_engine.core.node_resolver.identity import is_id_reference
from schema_graph_engine.core.node_resolver.models import Arrayable, ResolverOptions


def resolve_arrayable(
    value: Arrayable[Any],
    fn: Callable[[Any, ResolutionContext], Any],
    context: Optional[ResolutionContext] = None,
    array: Optional[bool] = None,
    options: Optional[ResolverOptions] = None,
) -> Arrayable[Any]:
    """
    Map fn over value, leaving id references untouched.

    Args:
        value: A node, or a list or tuple of nodes; id references pass through as-is
        fn: Called as fn(node, context) for every non-reference element
        context: Resolution context, defaults to the active one
        array: Return a list even when there is a single result
        options: ResolverOptions; an explicit array keyword overrides options.array

    Returns:
        The single result when exactly one element resolved and array is
        False, otherwise the list of results

    Raises:
        MissingContextError: If no context is given or active
    """
    if array is None:
        array = options.array if options else False
    resolution_context = inject_context(context)

    items = list(value) if isinstance(value, (list, tuple)) else [value]
    results: List[Any] = []
    for item in items:
        if is_id_reference(item):
            results.append(item)
        else:
            results.append(fn(item, resolution_context))

    # avoid lists for single entries
    if not array and len(results) == 1:
        return results[0]
    return results
