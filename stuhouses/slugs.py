from __future__ import annotations

import re

from slugify import slugify as _slugify


_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# "King's" -> "kings", not "king-s".
_REPLACEMENTS = [["&", " and "], ["'", ""], ["’", ""]]


def slugify(value: str) -> str:
    return _slugify(value, replacements=_REPLACEMENTS)


def is_slug(value: str) -> bool:
    """Lowercase ASCII words joined by single hyphens, safe to drop into a URL path."""
    return bool(_SLUG_RE.match(value))
