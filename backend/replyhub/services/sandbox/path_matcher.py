"""Path template compilation and parameter extraction.

Templates use ``{name}`` placeholders, each standing for exactly one
non-empty path segment::

    >>> pattern = compile_path_template("/v1/apps/{app_id}/reviews")
    >>> match_path(pattern, "/v1/apps/123/reviews")
    {'app_id': '123'}
"""

import re
from functools import lru_cache

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def has_placeholders(template: str) -> bool:
    return PLACEHOLDER_PATTERN.search(template) is not None


@lru_cache(maxsize=1024)
def compile_path_template(template: str) -> re.Pattern:
    """
    Compile a path template into a regex with one named group per placeholder.

    Literal portions are escaped, so characters like ``.`` or ``:`` in
    ``/reviews/{review_id}:reply`` match themselves.

    Raises:
        ValueError: if a placeholder name appears more than once
    """
    parts = []
    seen: set[str] = set()
    last = 0

    for match in PLACEHOLDER_PATTERN.finditer(template):
        name = match.group(1)
        if name in seen:
            raise ValueError(f"Duplicate path parameter '{name}' in template {template!r}")
        seen.add(name)

        parts.append(re.escape(template[last:match.start()]))
        parts.append(f"(?P<{name}>[^/]+)")
        last = match.end()

    parts.append(re.escape(template[last:]))
    return re.compile("".join(parts))


def match_path(pattern: re.Pattern, path: str) -> dict[str, str] | None:
    """Match a concrete path against a compiled template (full match only)."""
    match = pattern.fullmatch(path)
    if match is None:
        return None
    return match.groupdict()


def extract_path_params(template: str, path: str) -> dict[str, str] | None:
    return match_path(compile_path_template(template), path)


def render_path(template: str, params: dict[str, str]) -> str:
    """Substitute parameters back into a template; unknown placeholders are kept."""
    def replacer(match: re.Match) -> str:
        return str(params.get(match.group(1), match.group(0)))

    return PLACEHOLDER_PATTERN.sub(replacer, template)
