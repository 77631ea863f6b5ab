"""Person name comparison tolerant of accents, case, punctuation and word order."""

from __future__ import annotations

import re

__all__ = ["normalize_person_name", "compare_names", "MIN_SIGNIFICANT_WORD_LENGTH"]

# Words of this length or shorter ("de", "la", initials) are not compared
MIN_SIGNIFICANT_WORD_LENGTH = 3

_ACCENT_TRANS = str.maketrans(
    {
        **dict.fromkeys("áàäâ", "a"),
        **dict.fromkeys("éèëê", "e"),
        **dict.fromkeys("íìïî", "i"),
        **dict.fromkeys("óòöô", "o"),
        **dict.fromkeys("úùüû", "u"),
        "ñ": "n",
    }
)
_NON_LETTER_RE = re.compile(r"[^a-z\s]")


def normalize_person_name(value: str | None) -> str:
    """Lowercase, fold Spanish diacritics and keep only ``a-z`` and whitespace."""
    if not value:
        return ""
    folded = value.lower().translate(_ACCENT_TRANS)
    return _NON_LETTER_RE.sub("", folded).strip()


def compare_names(registry_name: str | None, user_name: str | None) -> bool:
    """Decide whether ``user_name`` plausibly names the registry owner.

    Every user word of three or more letters must contain, or be contained in,
    some registry word. The check is one-directional: extra registry words are
    tolerated. A user name with no word of three or more letters only matches
    on exact normalized equality.

    Empty names never match, not even each other: two names that both
    normalize to ``""`` (blank, punctuation only, ``None``) return False.
    """
    normalized_registry = normalize_person_name(registry_name)
    normalized_user = normalize_person_name(user_name)

    if normalized_registry == normalized_user:
        return bool(normalized_user)

    registry_words = normalized_registry.split()
    user_words = [word for word in normalized_user.split() if len(word) >= MIN_SIGNIFICANT_WORD_LENGTH]
    if not user_words:
        return False

    return all(
        any(word in registry_word or registry_word in word for registry_word in registry_words)
        for word in user_words
    )
