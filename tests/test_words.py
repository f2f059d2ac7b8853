# Area: Engine Tests
"""Tests for the word bank."""

import pytest

from imposter_engine._engine.words import (
    CUSTOM_CATEGORY,
    DEFAULT_CATEGORY,
    WORD_CATEGORIES,
    categories,
    is_known_category,
    select_word,
    word_pool,
)
from imposter_engine.errors import ValidationFailedError

from conftest import ZeroRandom


class TestCategories:
    """Tests for category lookup."""

    def test_builtin_categories(self):
        assert set(WORD_CATEGORIES) == {"animals", "food", "objects", "places"}
        assert DEFAULT_CATEGORY in WORD_CATEGORIES

    def test_categories_lists_custom_last(self):
        assert categories()[-1] == CUSTOM_CATEGORY
        assert "animals" in categories()

    def test_is_known_category(self):
        assert is_known_category("food")
        assert is_known_category(CUSTOM_CATEGORY)
        assert not is_known_category("vehicles")


class TestWordPool:
    """Tests for word_pool()."""

    def test_builtin_pool(self):
        assert word_pool("places", []) == list(WORD_CATEGORIES["places"])

    def test_custom_pool_skips_blank_entries(self):
        assert word_pool(CUSTOM_CATEGORY, ["kite", "  ", "lantern"]) == ["kite", "lantern"]

    def test_empty_custom_pool_rejected(self):
        with pytest.raises(ValidationFailedError):
            word_pool(CUSTOM_CATEGORY, [])

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationFailedError):
            word_pool("vehicles", [])


class TestSelectWord:
    """Tests for select_word()."""

    def test_draws_from_pool(self):
        assert select_word("food", [], ZeroRandom()) == "pizza"

    def test_draws_from_custom_list(self):
        assert select_word(CUSTOM_CATEGORY, ["kite"], ZeroRandom()) == "kite"
