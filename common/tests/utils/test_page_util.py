from unittest import TestCase

from common.utils.page_util import build_page, get_next_offset


class Test(TestCase):
    def test_build_page(self):
        page = build_page([1, 2], 2, 5)
        self.assertEqual({"data": [1, 2], "total_num": 5, "next_offset": 2}, page)

        # last page
        page = build_page([], None, 0)
        self.assertEqual([], page["data"])
        self.assertIsNone(page["next_offset"])

    def test_get_next_offset(self):
        # more pages
        self.assertEqual(20, get_next_offset(0, 20, 45))
        self.assertEqual(40, get_next_offset(20, 20, 45))

        # last page
        self.assertIsNone(get_next_offset(40, 20, 45))

        # exactly full
        self.assertIsNone(get_next_offset(20, 20, 40))

        # empty
        self.assertIsNone(get_next_offset(0, 20, 0))
