from __future__ import annotations


def avatar_initials(name: str) -> str:
    """First letters of the first two words, upper-cased ("Ada Lovelace" -> "AL")."""
    parts = [p for p in (name or "").split() if p]
    return "".join(p[0] for p in parts)[:2].upper()
