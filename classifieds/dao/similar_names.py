"""LIKE patterns for fuzzy item-name search.

Patterns are written for ``LIKE :pattern ESCAPE '!'``.
"""

ESCAPE_CHAR = "!"

# Shorter names or words would match almost anything once a wildcard is added
MIN_FUZZY_LENGTH = 3

# Longer input falls back to substring matching; each pattern costs one query
MAX_FUZZY_LENGTH = 64
MAX_WORD_PATTERNS = 8


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so ``value`` matches literally."""
    return (
        value.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2)
        .replace("%", f"{ESCAPE_CHAR}%")
        .replace("_", f"{ESCAPE_CHAR}_")
    )


def create_similar_strings(name: str) -> list[str]:
    """Build LIKE patterns matching names similar to ``name``.

    Order is most specific first:
        1. the whole name as a substring
        2. the name with one character swapped for the ``_`` wildcard
           (names up to MAX_FUZZY_LENGTH characters)
        3. the first MAX_WORD_PATTERNS distinct words as substrings
           (multi-word names only)

    Args:
        name: Name typed by the user

    Returns:
        Distinct patterns; empty for a blank name
    """
    name = name.strip()
    if not name:
        return []

    patterns = [f"%{escape_like(name)}%"]

    if MIN_FUZZY_LENGTH <= len(name) <= MAX_FUZZY_LENGTH:
        for i, char in enumerate(name):
            if char.isspace():
                continue
            patterns.append(f"%{escape_like(name[:i])}_{escape_like(name[i + 1:])}%")

    words = name.split()
    if len(words) > 1:
        long_words = [word for word in dict.fromkeys(words) if len(word) >= MIN_FUZZY_LENGTH]
        patterns.extend(f"%{escape_like(word)}%" for word in long_words[:MAX_WORD_PATTERNS])

    return list(dict.fromkeys(patterns))
