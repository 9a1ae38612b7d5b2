"""
Removes empty attributes from resolved nodes.
"""

from typing import Any


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def clean_attributes(obj: Any) -> Any:
    """
    Remove attributes which have a None or empty string value.

    Walks dicts and lists recursively and mutates them in place. Lists keep
    their remaining elements in order (empty elements are dropped, never left
    as holes). Empty containers themselves are kept.

    Returns:
        The same object that was passed in
    """
    if isinstance(obj, dict):
        for key in list(obj.keys()):
            value = obj[key]
            if isinstance(value, (dict, list)):
                clean_attributes(value)
            elif _is_empty(value):
                del obj[key]
    elif isinstance(obj, list):
        for item in obj:
            if isinstance(item, (dict, list)):
                clean_attributes(item)
        obj[:] = [item for item in obj if not _is_empty(item)]
    return obj
