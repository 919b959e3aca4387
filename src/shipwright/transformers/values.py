"""
Resolvers for the multi-shape values the source format produces.

A field such as 'thumbnail' or 'description' may arrive as a plain
string, a list of strings, or a wrapper dict carrying the scalar under
'_value'. ``classify`` names the shape once; each resolver dispatches on
that tag instead of re-inspecting types.
"""

from enum import Enum
from typing import Any, List, Optional

from shipwright.parsing.extractor import VALUE_KEY


class ScalarSource(Enum):
    TEXT = "text"
    LIST = "list"
    WRAPPER = "wrapper"     # dict with a '_value' member
    MAPPING = "mapping"     # dict without one
    MARKER = "marker"       # bare presence flag (True)
    OTHER = "other"         # numbers, None, anything unresolvable


def classify(value: Any) -> ScalarSource:
    if isinstance(value, str):
        return ScalarSource.TEXT
    if isinstance(value, list):
        return ScalarSource.LIST
    if isinstance(value, dict):
        return ScalarSource.WRAPPER if VALUE_KEY in value else ScalarSource.MAPPING
    if value is True:
        return ScalarSource.MARKER
    return ScalarSource.OTHER


def resolve_string(value: Any) -> Optional[str]:
    """
    Single-string resolution: a direct string; else the first element of
    a list; else a wrapper's string '_value'; else the first string-valued
    member of a mapping.
    """
    shape = classify(value)
    if shape is ScalarSource.TEXT:
        return value
    if shape is ScalarSource.LIST:
        return resolve_string(value[0]) if value else None
    if shape is ScalarSource.WRAPPER and isinstance(value[VALUE_KEY], str):
        return value[VALUE_KEY]
    if shape in (ScalarSource.WRAPPER, ScalarSource.MAPPING):
        for member in value.values():
            if isinstance(member, str):
                return member
    return None


def resolve_element(value: Any) -> Optional[str]:
    """An element of a string list: a string, or a wrapper carrying one."""
    shape = classify(value)
    if shape is ScalarSource.TEXT:
        return value
    if shape is ScalarSource.WRAPPER and isinstance(value[VALUE_KEY], str):
        return value[VALUE_KEY]
    return None


def resolve_string_list(value: Any) -> List[str]:
    """
    String-list resolution. A string is a one-element list; a list keeps
    every string-producing element in order and skips the rest; a mapping
    (an indented block of names) contributes each bare key plus any
    string-valued member.
    """
    shape = classify(value)
    if shape in (ScalarSource.TEXT, ScalarSource.WRAPPER):
        single = resolve_element(value)
        return [single] if single is not None else []
    if shape is ScalarSource.LIST:
        return [text for text in map(resolve_element, value) if text is not None]
    if shape is ScalarSource.MAPPING:
        names = []
        for key, member in value.items():
            if member is True:
                names.append(key)
            else:
                text = resolve_element(member)
                if text is not None:
                    names.append(text)
        return names
    return []
