"""
Name normalization for GraphQL field and type names.

ACF field names are authored by people ("Page Title", "hero_image",
"Street Address! (primary)"). GraphQL names must match
``[_A-Za-z][_0-9A-Za-z]*``, so every label goes through ``camel_case``
before it reaches the schema.
"""

from __future__ import annotations

import re
from collections.abc import Iterable


def camel_case(raw: str | None, no_strip: Iterable[str] = ()) -> str:
    """
    Convert a human-authored label into a camelCase identifier.

    Runs of characters that are not ASCII letters, digits or one of
    ``no_strip`` become a single space; the result is trimmed, each word
    gets an upper-case first letter, spaces are removed and the first
    character is lower-cased.

    Args:
        raw: Label to normalize
        no_strip: Extra characters to keep as part of words

    Returns:
        The identifier, or an empty string when nothing usable remains

    Examples:
        >>> camel_case("Page Title")
        'pageTitle'
        >>> camel_case("  Street Address! (primary)")
        'streetAddressPrimary'
        >>> camel_case("hero_image")
        'heroImage'
        >>> camel_case("hero_image", no_strip=["_"])
        'hero_image'
    """
    if not raw:
        return ""

    allowed = "".join(re.escape(char) for char in no_strip)
    text = re.sub(rf"[^A-Za-z0-9{allowed}]+", " ", str(raw))
    text = text.strip()
    if not text:
        return ""

    words = [word[:1].upper() + word[1:] for word in text.split(" ")]
    joined = "".join(words)
    return joined[:1].lower() + joined[1:]


def pascal_case(raw: str | None, no_strip: Iterable[str] = ()) -> str:
    """Convert a label to PascalCase, used for generated type names."""
    name = camel_case(raw, no_strip)
    return name[:1].upper() + name[1:]
