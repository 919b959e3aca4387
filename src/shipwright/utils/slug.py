import re

_WHITESPACE = re.compile(r'\s+')
_DISALLOWED = re.compile(r'[^a-z0-9-]')
_HYPHEN_RUNS = re.compile(r'-+')


def slugify(name: str) -> str:
    """
    URL-friendly slug: lowercase, whitespace runs to single hyphens, every
    other non [a-z0-9-] character dropped, hyphen runs collapsed and edge
    hyphens trimmed. Idempotent.

    >>> slugify("R01 Skirmish Battery (Advanced)!")
    'r01-skirmish-battery-advanced'
    """
    if not name or not isinstance(name, str):
        return ""
    slug = _WHITESPACE.sub("-", name.lower().strip())
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")
