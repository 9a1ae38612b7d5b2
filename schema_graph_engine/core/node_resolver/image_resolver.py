"""
Default image expansion collaborator.

Turns image inputs (url strings, partial ImageObject dicts, id references,
or lists of them) into ImageObject nodes. A ResolutionContext can be given a
different collaborator with the same signature.
"""

import hashlib
import logging
from typing import Any, List

from schema_graph_engine.core.node_resolver.attribute_cleaner import clean_attributes
from schema_graph_engine.core.node_resolver.identity import id_reference, is_id_reference
from schema_graph_engine.core.node_resolver.models import Arrayable, SchemaNode
from schema_graph_engine.core.node_resolver.url_rewriter import prefix_id, resolve_id, resolve_with_base_url

logger = logging.getLogger(__name__)

PRIMARY_IMAGE_ID = "#primaryimage"
IMAGE_ID_PREFIX = "#/schema/image/"


def _image_id(url: str) -> str:
    return IMAGE_ID_PREFIX + hashlib.sha256(url.encode()).hexdigest()[:8]


def _build_image_node(context: Any, value: Any, primary: bool) -> SchemaNode:
    node = {"url": value} if isinstance(value, str) else dict(value)
    node.setdefault("@type", "ImageObject")
    node.setdefault("inLanguage", context.default_language)

    url = node.get("url") or node.get("contentUrl") or ""
    url = resolve_with_base_url(context.canonical_host, url)
    node["url"] = url
    node.setdefault("contentUrl", url)

    if node.get("@id"):
        resolve_id(node, context.canonical_host)
    elif primary:
        node["@id"] = prefix_id(context.canonical_url, PRIMARY_IMAGE_ID)
    else:
        node["@id"] = prefix_id(context.canonical_host, _image_id(url))
    return clean_attributes(node)


def resolve_images(
    context: Any,
    value: Any,
    resolve_primary_image: bool = False,
    as_root_nodes: bool = False,
) -> Arrayable[SchemaNode]:
    """
    Expand an image value into ImageObject nodes.

    Args:
        context: Active ResolutionContext
        value: Url, partial image node, id reference, or a list or tuple of them
        resolve_primary_image: Give the first image the page's #primaryimage id
        as_root_nodes: Add images to context.nodes and return id references

    Returns:
        A single node/reference, or a list when more than one image was given
    """
    items = list(value) if isinstance(value, (list, tuple)) else [value]
    results: List[SchemaNode] = []
    for index, item in enumerate(items):
        if is_id_reference(item):
            results.append(item)
            continue
        node = _build_image_node(context, item, primary=resolve_primary_image and index == 0)
        if as_root_nodes:
            context.add_node(node)
            results.append(id_reference(node))
        else:
            results.append(node)

    logger.debug(f"Expanded {len(items)} image value(s), as_root_nodes={as_root_nodes}")
    if len(results) == 1:
        return results[0]
    return results
