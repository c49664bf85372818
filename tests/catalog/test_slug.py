"""Tests for slug derivation."""

import pytest

from catalog_api.catalog.slug import DEFAULT_SLUG, product_slug, slugify


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Chair", "chair"),
        ("Men's Chill Crew Neck", "mens-chill-crew-neck"),
        ("  Quilted   Shirt_Jacket ", "quilted-shirt-jacket"),
        ("already-a-slug", "already-a-slug"),
        ("Tee (Limited) #2", "tee-limited-2"),
        ("A -- B", "a-b"),
        ("Café Table", "cafe-table"),
        ("Crème Brûlée", "creme-brulee"),
        ("日本茶", "日本茶"),
    ],
)
def test_slugify(value: str, expected: str) -> None:
    """Slugs are lowercase, hyphenated and URL-safe."""
    assert slugify(value) == expected


def test_slugify_is_idempotent() -> None:
    slug = slugify("Raven Lightweight Zip Up Bomber Jacket")
    assert slugify(slug) == slug


@pytest.mark.parametrize("value", ["!!!", "   ", "--", ""])
def test_slugify_never_empty(value: str) -> None:
    """Input with nothing usable falls back to the default."""
    assert slugify(value) == DEFAULT_SLUG
    assert slugify(value, default="item") == "item"


class TestProductSlug:
    """Tests for the slug stored on a product."""

    def test_derived_from_title(self) -> None:
        assert product_slug("Office Chair") == "office-chair"

    def test_explicit_slug_wins(self) -> None:
        assert product_slug("Desk", "Standing Desk") == "standing-desk"

    def test_unusable_explicit_slug_uses_title(self) -> None:
        assert product_slug("Chair", "!!!") == "chair"

    def test_unusable_titles_get_distinct_slugs(self) -> None:
        first = product_slug("!!!")
        second = product_slug("???")

        assert first.startswith(f"{DEFAULT_SLUG}-")
        assert second.startswith(f"{DEFAULT_SLUG}-")
        assert first != second

    def test_fallback_is_stable(self) -> None:
        assert product_slug("!!!") == product_slug("!!!")
