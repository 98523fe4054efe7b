import re

from unidecode import unidecode

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")

# Used when nothing slug-worthy is left, e.g. a title made only of punctuation
EMPTY_SLUG = "n-a"


def slugify(text):
    """Turn a title into a URL handle.

    Non-ASCII letters are transliterated ("Crème" -> "creme"), everything
    outside [a-z0-9], whitespace and hyphens is dropped, whitespace runs become
    one hyphen, and leading/trailing hyphens are trimmed.
    """
    if not text or not isinstance(text, str):
        raise ValueError("Text to slugify must be a non-empty string")

    text = unidecode(text).lower()
    text = _DISALLOWED.sub("", text)
    text = _WHITESPACE.sub("-", text.strip())
    text = text.strip("-")
    return text or EMPTY_SLUG
