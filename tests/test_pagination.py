"""
Tests for client-side pagination helpers.
"""

import pytest

from catalog.pagination import clamp_page, get_page, page_label, parse_page_input, total_pages


class TestGetPage:
    """Test get_page function."""

    def test_first_and_middle_pages(self):
        items = list(range(10))
        assert get_page(items, 0, 4) == [0, 1, 2, 3]
        assert get_page(items, 1, 4) == [4, 5, 6, 7]

    def test_last_page_is_partial(self):
        assert get_page(list(range(10)), 2, 4) == [8, 9]

    def test_out_of_range_page_is_empty(self):
        assert get_page(list(range(10)), 3, 4) == []
        assert get_page([], 0, 4) == []

    def test_negative_page_is_empty(self):
        assert get_page(list(range(10)), -1, 4) == []

    def test_non_positive_page_size_is_empty(self):
        assert get_page(list(range(10)), 0, 0) == []
        assert get_page(list(range(10)), 0, -3) == []

    def test_accepts_tuples(self):
        assert get_page((1, 2, 3), 0, 2) == [1, 2]

    @pytest.mark.parametrize("total,page_size", [(0, 5), (1, 5), (5, 5), (11, 5), (100, 48), (97, 48)])
    def test_pages_cover_every_item_exactly_once(self, total, page_size):
        """Test that concatenating all pages reproduces the input in order."""
        items = list(range(total))
        pages = total_pages(total, page_size)

        combined = []
        for page_index in range(pages):
            window = get_page(items, page_index, page_size)
            assert 1 <= len(window) <= page_size
            combined.extend(window)

        assert combined == items
        assert get_page(items, pages, page_size) == []


class TestTotalPages:
    """Test total_pages function."""

    def test_counts(self):
        assert total_pages(0, 48) == 0
        assert total_pages(1, 48) == 1
        assert total_pages(48, 48) == 1
        assert total_pages(49, 48) == 2

    def test_non_positive_page_size(self):
        assert total_pages(10, 0) == 0


class TestClampPage:
    """Test clamp_page function."""

    def test_in_range_is_unchanged(self):
        assert clamp_page(2, 100, 10) == 2

    def test_past_the_end_clamps_to_last_page(self):
        assert clamp_page(50, 25, 10) == 2

    def test_negative_clamps_to_zero(self):
        assert clamp_page(-4, 25, 10) == 0

    def test_no_items(self):
        assert clamp_page(7, 0, 10) == 0


class TestPageInput:
    """Test parse_page_input and page_label."""

    def test_valid_input_is_zero_based(self):
        assert parse_page_input("1", 5) == 0
        assert parse_page_input(" 5 ", 5) == 4

    @pytest.mark.parametrize("text", ["0", "6", "-1", "abc", "", "2.5"])
    def test_invalid_input(self, text):
        assert parse_page_input(text, 5) is None

    def test_page_label(self):
        assert page_label(0, 7) == "Page 1 / 7"
        assert page_label(0, 0) == "Page 1 / 1"
