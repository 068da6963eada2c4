"""Shared helpers for word normalization."""

from __future__ import annotations

import re

from ..core.constants import ALPHABET

WORD_RE = re.compile(r"[^A-Z]")


def clean_word(text: str) -> str:
    """Return ``text`` uppercased with everything outside A-Z removed."""

    if not text:
        return ""
    return WORD_RE.sub("", text.upper())


def is_playable_word(text: str) -> bool:
    """True when ``text`` consists of A-Z letters only (any case), at least one."""

    return bool(text) and all(char in ALPHABET for char in text.upper())


def normalize_letter(text: str) -> str:
    """Return the single uppercase letter in ``text`` or an empty string."""

    if not text or len(text) != 1:
        return ""
    letter = text.upper()
    return letter if letter in ALPHABET else ""


__all__ = ["clean_word", "is_playable_word", "normalize_letter"]
