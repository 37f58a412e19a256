"""Element pattern shortcuts.

A route option may name one of these instead of spelling out a regex::

    Route("/articles/:id", {"controller": "Articles"}, {"id": "int"})
"""

# name -> regex used for the element's capture group
CONVERTERS: dict[str, str] = {
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "slug": r"[a-z0-9]+(?:-[a-z0-9]+)*",
    "uuid": r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    "path": r".+",
}

# Matches any element not restricted by an option
DEFAULT_ELEMENT_PATTERN = r"[^/]+"


def element_pattern(spec: str) -> str:
    """Resolve an option value to a regex.

    Converter names map to their regex; anything else is taken as a
    regex already.
    """
    return CONVERTERS.get(spec, spec)
