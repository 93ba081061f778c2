"""Name normalization shared by aliases and suggestions."""

from __future__ import annotations


def normalize_name(name: str | None) -> str:
    """Return the matching key for a free-text name: lowercased and trimmed.

    No other folding is applied (no punctuation stripping, accent removal or
    fuzzy matching), so the function is idempotent.
    """
    if not name:
        return ""
    return name.strip().lower()
