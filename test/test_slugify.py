"""
Tests for slugify utility function

Tests URL handle generation from recipe titles with various edge cases.
"""

import pytest

from app.utils.slugify import EMPTY_SLUG, slugify


class TestSlugifyBasic:
    """Test basic slugify functionality"""

    def test_slugify_simple_string(self):
        """Test slugifying a simple string"""
        assert slugify("Hello World") == "hello-world"

    def test_slugify_with_numbers(self):
        """Test slugifying string with numbers"""
        assert slugify("Pasta for 4") == "pasta-for-4"

    def test_slugify_lowercase_conversion(self):
        """Test that slugify converts to lowercase"""
        assert slugify("UPPERCASE TEXT") == "uppercase-text"
        assert slugify("MiXeD CaSe") == "mixed-case"

    def test_slugify_drops_special_characters(self):
        """Special characters are removed, not replaced"""
        assert slugify("Hello@World!") == "helloworld"
        assert slugify("Fish & Chips") == "fish-chips"
        assert slugify("Price: $9.99") == "price-999"

    def test_slugify_multiple_spaces(self):
        """Test that whitespace runs collapse to a single hyphen"""
        assert slugify("Hello    World") == "hello-world"
        assert slugify("Too \t Many \n Spaces") == "too-many-spaces"

    def test_slugify_keeps_existing_hyphens(self):
        """Hyphens already in the title are kept as they are"""
        assert slugify("Stir-fry Noodles") == "stir-fry-noodles"
        assert slugify("Salt - Pepper") == "salt---pepper"

    def test_slugify_trims_hyphens(self):
        assert slugify("-Leading and trailing-") == "leading-and-trailing"
        assert slugify("  padded  ") == "padded"


class TestSlugifyUnicode:
    """Test slugify with accented and non-Latin titles"""

    def test_creme_brulee(self):
        assert slugify("Crème Brûlée!!") == "creme-brulee"

    def test_slugify_accented_characters(self):
        """Test slugifying strings with accented characters"""
        assert slugify("Café") == "cafe"
        assert slugify("Tarte Tatin à l'ancienne") == "tarte-tatin-a-lancienne"

    def test_slugify_german_characters(self):
        """Test slugifying German umlauts and sharp s"""
        assert slugify("Käsespätzle") == "kasespatzle"
        assert slugify("Süße Brötchen") == "susse-brotchen"

    def test_slugify_spanish_characters(self):
        """Test slugifying Spanish characters"""
        assert slugify("Jamón y Piña") == "jamon-y-pina"

    def test_slugify_cyrillic(self):
        """Non-Latin scripts are transliterated"""
        assert slugify("Борщ") == "borshch"


class TestSlugifyEdgeCases:
    """Test slugify edge cases and errors"""

    def test_slugify_empty_string_raises(self):
        with pytest.raises(ValueError, match="non-empty string"):
            slugify("")

    def test_slugify_non_string_raises(self):
        with pytest.raises(ValueError):
            slugify(None)
        with pytest.raises(ValueError):
            slugify(123)

    def test_slugify_only_special_characters(self):
        """Nothing usable left falls back to a fixed handle"""
        assert slugify("@#$%") == EMPTY_SLUG
        assert slugify("!!!") == "n-a"

    def test_slugify_whitespace_only(self):
        assert slugify("   ") == EMPTY_SLUG

    def test_slugify_is_idempotent(self):
        once = slugify("Crème Brûlée!!")
        assert slugify(once) == once

    @pytest.mark.parametrize("title", ["Crème Brûlée!!", "Fish & Chips", "Борщ", "Pasta for 4"])
    def test_slugify_output_alphabet(self, title):
        handle = slugify(title)
        assert handle == handle.lower()
        assert all(c.isascii() and (c.isalnum() or c == "-") for c in handle)
        assert not handle.startswith("-")
        assert not handle.endswith("-")
