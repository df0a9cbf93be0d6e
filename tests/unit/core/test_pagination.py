"""Tests for page-number pagination."""

from django.test import SimpleTestCase, override_settings

from core.models import Order
from core.pagination import Page, PageRequest, paginate
from core.schemas.order import OrderQuery
from core.schemas.pagination import PaginationMeta
from tests.base import BaseUnitTest
from tests.factories import create_order


class TestPageRequest(SimpleTestCase):
    """Test cases for PageRequest."""

    def test_offset(self):
        """Test the offset skips the previous pages."""
        self.assertEqual(PageRequest(page=3, limit=20).offset, 40)

    def test_rejects_page_zero(self):
        """Test pages are 1-based."""
        with self.assertRaises(ValueError):
            PageRequest(page=0)

    def test_rejects_limit_over_maximum(self):
        """Test the limit is capped at the maximum page size."""
        with self.assertRaises(ValueError):
            PageRequest(limit=101)

    @override_settings(NOTIFICATION_MAX_PAGE_SIZE=500)
    def test_maximum_from_settings(self):
        """Test the maximum page size can be raised in settings."""
        self.assertEqual(PageRequest(limit=500).limit, 500)

    def test_built_from_list_query(self):
        """Test list query schemas hand their paging to the store."""
        request = OrderQuery(page=3, limit=5).page_request()

        self.assertEqual(request, PageRequest(page=3, limit=5))
        self.assertEqual(request.offset, 10)


class TestPage(SimpleTestCase):
    """Test cases for Page flags and metadata."""

    def test_middle_page(self):
        """Test a page with neighbours on both sides."""
        page = Page(items=[], total=25, page=2, limit=10)

        self.assertEqual(page.total_pages, 3)
        self.assertTrue(page.has_next_page)
        self.assertTrue(page.has_previous_page)

    def test_empty_result(self):
        """Test an empty result has no pages."""
        page = Page(items=[], total=0, page=1, limit=10)

        self.assertEqual(page.total_pages, 0)
        self.assertFalse(page.has_next_page)
        self.assertFalse(page.has_previous_page)

    def test_meta_serializes_camel_case(self):
        """Test the metadata block of list responses."""
        meta = PaginationMeta.from_page(Page(items=[], total=11, page=2, limit=10))

        self.assertEqual(
            meta.model_dump(by_alias=True),
            {
                "currentPage": 2,
                "itemsPerPage": 10,
                "totalItems": 11,
                "totalPages": 2,
                "hasNextPage": False,
                "hasPreviousPage": True,
            },
        )


class TestPaginate(BaseUnitTest):
    """Test cases for paginate."""

    def test_slices_ordered_queryset(self):
        """Test the requested slice and total are returned."""
        orders = [create_order(order_number=f"ORD-{index}") for index in range(5)]

        page = paginate(Order.objects.order_by("order_number"), PageRequest(page=2, limit=2))

        self.assertEqual(page.total, 5)
        self.assertEqual([order.pk for order in page.items], [orders[2].pk, orders[3].pk])

    def test_page_past_the_end(self):
        """Test a page beyond the last one is empty but keeps the total."""
        create_order()

        page = paginate(Order.objects.all(), PageRequest(page=4, limit=10))

        self.assertEqual(page.items, [])
        self.assertEqual(page.total, 1)
