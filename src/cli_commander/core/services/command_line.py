from __future__ import annotations


def tokenize(raw: str | None) -> list[str]:
    """Split a raw command line on runs of whitespace.

    There is no quoting or escaping: a space always separates tokens. Blank
    input yields an empty list, and leading or trailing whitespace never
    produces empty tokens.
    """
    if not raw:
        return []
    return raw.split()
