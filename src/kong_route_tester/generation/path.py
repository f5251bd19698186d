"""Materialization of regex path templates into concrete example paths."""

from __future__ import annotations

#: Ordered (pattern text, replacement) pairs. Patterns are matched as literal
#: substrings, not as regular expressions. Named captures precede the bare
#: character classes they contain so they are replaced as a unit.
PATH_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("(?<client_id>[0-9a-fA-F-]+)", "3a45625e-fd29-47a5-8294-e30fe2d3d391"),
    ("(?<seat_id>[0-9a-fA-F-]+)", "123e4567-e89b-12d3-a456-426614174000"),
    ("(?<invite_token>[0-9a-fA-F-]+)", "987fcdeb-51a2-43e1-b210-0123456789ab"),
    ("(?<test_id>[0-9a-fA-F-]+)", "test-id-123"),
    ("(?<user_id>[^/]+)", "user123"),
    ("(?<embed_id>[0-9a-fA-F-]+)", "embed-456"),
    ("[0-9a-fA-F-]+", "abc123def456"),
    ("[a-zA-Z0-9_-]+", "test-value"),
    ("[^/]+", "example"),
    ("(.*)", "path"),
)

_NAMED_CAPTURE_OPENER = "(?<"


def has_capture_syntax(path: str) -> bool:
    """Check whether a path template contains a named capture group."""
    return _NAMED_CAPTURE_OPENER in path


def materialize_path(path: str) -> str:
    """Rewrite known regex idioms in a path template into example values.

    Every entry of ``PATH_REPLACEMENTS`` is applied in order to the running
    result, replacing all occurrences. A path with no known idiom is returned
    unchanged.

    Args:
        path: The route path template.

    Returns:
        A concrete path suitable for a request.

    Example:
        >>> materialize_path("/items/[0-9a-fA-F-]+/details")
        '/items/abc123def456/details'
    """
    result = path
    for pattern, replacement in PATH_REPLACEMENTS:
        result = result.replace(pattern, replacement)
    return result
