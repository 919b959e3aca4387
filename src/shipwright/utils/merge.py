"""
Dict merging helpers for attribute blocks and ship variants.
"""

import copy
from typing import Any, Dict, Iterable

from shipwright.utils.numbers import is_number


def deep_merge(target: Dict[str, Any], source: Dict[str, Any],
               replace_keys: Iterable[str] = (), additive: bool = False) -> Dict[str, Any]:
    """
    Returns a new dict with ``source`` layered over ``target``. Nested dicts
    merge recursively; lists and scalars replace. With ``additive`` set,
    numbers present on both sides are summed instead of replaced. Keys in
    ``replace_keys`` are always replaced wholesale at the top level.
    Neither input is mutated.
    """
    replace_keys = frozenset(replace_keys)
    result = copy.deepcopy(target)

    for key, value in source.items():
        existing = result.get(key)
        if key in replace_keys:
            result[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(existing, dict):
            result[key] = deep_merge(existing, value, additive=additive)
        elif additive and is_number(value) and is_number(existing):
            result[key] = existing + value
        else:
            result[key] = copy.deepcopy(value)

    return result
