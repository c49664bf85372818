"""Slug derivation for product titles."""

import hashlib
import re
import unicodedata

DEFAULT_SLUG = "product"

_SEPARATORS = re.compile(r"[\s_]+")
_DISALLOWED = re.compile(r"[^\w-]")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def slugify(value: str, default: str = DEFAULT_SLUG) -> str:
    """Turn a title (or a user-supplied slug) into a URL-safe slug.

    Lowercases, strips accents, turns whitespace and underscores into
    hyphens and drops anything else that is not a letter, digit or hyphen.
    Letters outside the Latin alphabet are kept as they are.

    Args:
        value: Text to slugify.
        default: Returned when nothing usable is left.

    Example:
        >>> slugify("Men's Chill Crew Neck")
        'mens-chill-crew-neck'
        >>> slugify("Café Table")
        'cafe-table'
    """
    value = unicodedata.normalize("NFKD", value)
    value = "".join(char for char in value if not unicodedata.combining(char))

    slug = _SEPARATORS.sub("-", value.strip().lower())
    slug = _DISALLOWED.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-") or default


def product_slug(title: str, slug: str | None = None) -> str:
    """Slug stored for a product.

    The explicit ``slug`` wins when it has any usable characters; otherwise
    the slug comes from ``title``. A title with nothing usable (e.g. "!!!")
    gets ``DEFAULT_SLUG`` plus a short digest of the title, so distinct
    titles never share a slug.
    """
    if slug:
        candidate = slugify(slug, default="")
        if candidate:
            return candidate

    digest = hashlib.sha1(title.encode("utf-8")).hexdigest()[:8]
    return slugify(title, default=f"{DEFAULT_SLUG}-{digest}")
