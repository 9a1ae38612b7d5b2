"""
Fill node defaults from route metadata.

Route metadata is a plain mapping (title, description, image, dateModified,
datePublished) handed in by the host application. Values only fill gaps:
a field the defaults already carry is never overwritten, and only fields the
node type declares in `keys` are touched.
"""

from datetime import date
from typing import Any, Iterable, Mapping, MutableMapping


def set_if_empty(node: MutableMapping[str, Any], field: str, value: Any) -> None:
    """Set node[field] to value unless it already holds a truthy value."""
    if not node.get(field):
        node[field] = value


def _is_date_value(value: Any) -> bool:
    # datetime is a subclass of date
    return isinstance(value, (str, date))


def resolve_route_meta(
    defaults: MutableMapping[str, Any],
    route_meta: Mapping[str, Any],
    keys: Iterable[str],
) -> MutableMapping[str, Any]:
    """
    Copy recognized route metadata into defaults without overriding.

    Dates are stored as given (date, datetime or string); converting them to
    ISO strings is left to resolve_date_to_iso.

    Returns:
        defaults, mutated in place
    """
    keys = set(keys)

    title = route_meta.get("title")
    if isinstance(title, str):
        if "headline" in keys:
            set_if_empty(defaults, "headline", title)
        if "name" in keys:
            set_if_empty(defaults, "name", title)

    description = route_meta.get("description")
    if isinstance(description, str) and "description" in keys:
        set_if_empty(defaults, "description", description)

    image = route_meta.get("image")
    if isinstance(image, str) and "image" in keys:
        set_if_empty(defaults, "image", image)

    date_modified = route_meta.get("dateModified")
    if "dateModified" in keys and _is_date_value(date_modified):
        set_if_empty(defaults, "dateModified", date_modified)

    date_published = route_meta.get("datePublished")
    if "datePublished" in keys and _is_date_value(date_published):
        set_if_empty(defaults, "datePublished", date_published)

    # video
    if "uploadDate" in keys and _is_date_value(date_published):
        set_if_empty(defaults, "uploadDate", date_published)

    return defaults
