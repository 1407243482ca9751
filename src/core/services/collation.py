"""Portuguese-friendly text folding and sort keys."""

from __future__ import annotations

import unicodedata


def fold_text(text: str | None) -> str:
    """Lower-case and strip accents ("Máquina" -> "maquina")."""
    decomposed = unicodedata.normalize("NFD", text or "")
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn").casefold()


def collation_key(text: str | None) -> tuple[str, str]:
    """
    Sort key ordering accented and unaccented spellings together.

    Accent/case-insensitive first, the original text breaks ties so the
    order is total.
    """
    return fold_text(text).strip(), text or ""
