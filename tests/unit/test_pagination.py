"""
Unit tests for pagination arithmetic and the category table.
"""
import pytest

from article_console.utils.pagination import (
    compute_total_pages,
    clamp_page,
    page_numbers,
    row_number,
    page_after_delete,
)


class TestTotalPages:
    """Tests for page count derivation."""

    @pytest.mark.parametrize("total, limit, last_page, expected", [
        (25, 10, None, 3),
        (20, 10, None, 2),
        (0, 10, None, 1),
        (None, 10, None, 1),
        (25, 10, 7, 7),
        (None, 10, 4, 4),
        (5, 0, None, 1),
    ])
    def test_compute(self, total, limit, last_page, expected):
        """Test last_page preference and ceiling division."""
        assert compute_total_pages(total, limit, last_page) == expected


class TestPageHelpers:
    """Tests for small pager helpers."""

    def test_clamp(self):
        """Test page numbers stay in range."""
        assert clamp_page(0, 5) == 1
        assert clamp_page(9, 5) == 5
        assert clamp_page(3, 0) == 1

    def test_page_numbers(self):
        """Test pager buttons."""
        assert page_numbers(3) == [1, 2, 3]
        assert page_numbers(0) == [1]

    def test_row_number(self):
        """Test numbering continues across pages."""
        assert row_number(1, 10, 0) == 1
        assert row_number(3, 10, 4) == 25


class TestPageAfterDelete:
    """Tests for where to land after deleting a row."""

    def test_last_row_of_later_page_steps_back(self):
        """Test deleting the only row on page 3 shows page 2."""
        assert page_after_delete(3, 1) == 2

    def test_last_row_of_first_page_stays(self):
        """Test page 1 never goes to page 0."""
        assert page_after_delete(1, 1) == 1

    def test_other_rows_stay(self):
        """Test a page with more rows stays put."""
        assert page_after_delete(3, 4) == 3


class TestCategoryTable:
    """Tests for the admin category table rows."""

    def test_rows(self):
        """Test numbering and columns of the table."""
        from article_console.ui.pages.admin_categories import build_category_table

        items = [
            {"id": "c1", "name": "News", "createdAt": "2025-06-05T10:00:00Z"},
            {"id": "c2", "name": "Tech", "createdAt": None},
        ]
        df = build_category_table(items, page=2, limit=10)

        assert list(df.columns) == ["No", "Name", "Created At"]
        assert df["No"].tolist() == [11, 12]
        assert df["Name"].tolist() == ["News", "Tech"]
        assert df["Created At"].tolist() == ["5 June 2025", ""]

    def test_empty(self):
        """Test an empty page still has the columns."""
        from article_console.ui.pages.admin_categories import build_category_table

        df = build_category_table([], page=1, limit=10)
        assert df.empty
        assert list(df.columns) == ["No", "Name", "Created At"]
