"""
Deep merge of caller input over node defaults.
"""

import copy
from typing import Any, Dict, Mapping


def deep_merge(value: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge value on top of defaults, returning a new dict.

    - A field defined on both sides takes the value's side, except that
      nested mappings are merged recursively.
    - None in value does not erase a default.
    - Lists are not concatenated: the value's list wins.

    Neither input is mutated; the result shares no containers with them.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(defaults))
    for key, item in value.items():
        if item is None:
            continue
        existing = merged.get(key)
        if isinstance(item, Mapping) and isinstance(existing, Mapping):
            merged[key] = deep_merge(item, existing)
        else:
            merged[key] = copy.deepcopy(item)
    return merged
