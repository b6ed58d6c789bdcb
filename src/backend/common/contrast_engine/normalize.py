from __future__ import annotations


def normalize(value: str) -> str:
    """Canonical form of every extracted value: surrounding whitespace trimmed."""
    return value.strip()
