import unittest

from core.dedup import deduplicate_items, normalize_url
from models import DiscoveryItem


def _item(url, title="t", **fields):
    return DiscoveryItem(url=url, title=title, **fields)


class NormalizeUrlTests(unittest.TestCase):
    def test_case_folds_and_trims(self):
        self.assertEqual(normalize_url("  HTTPS://X.com/A  "), "https://x.com/a")

    def test_keeps_path_and_query(self):
        self.assertNotEqual(
            normalize_url("https://x.com/a?id=1"), normalize_url("https://x.com/a?id=2")
        )

    def test_item_key_matches_normalized_url(self):
        for url in ["  HTTPS://X.com/A  ", "https://x.com/a?ID=1", "http://Y.org/"]:
            self.assertEqual(_item(url).dedup_key, normalize_url(url))


class DeduplicationTests(unittest.TestCase):
    def test_first_seen_wins(self):
        items = [
            _item("https://x.com/1", "first", author="alice"),
            _item("https://X.com/1 ", "second", author="bob"),
        ]

        deduped = deduplicate_items(items)

        self.assertEqual(len(deduped), 1)
        self.assertEqual(deduped[0].title, "first")
        self.assertEqual(deduped[0].author, "alice")

    def test_preserves_relative_order(self):
        items = [
            _item("https://c.com"),
            _item("https://a.com"),
            _item("https://c.com"),
            _item("https://b.com"),
            _item("https://a.com"),
        ]

        urls = [i.url for i in deduplicate_items(items)]

        self.assertEqual(urls, ["https://c.com", "https://a.com", "https://b.com"])

    def test_is_deterministic_for_fixed_input(self):
        items = [_item(f"https://x.com/{n % 4}", title=str(n)) for n in range(12)]

        self.assertEqual(deduplicate_items(items), deduplicate_items(items))
        self.assertEqual([i.title for i in deduplicate_items(items)], ["0", "1", "2", "3"])

    def test_fields_do_not_affect_identity(self):
        items = [
            _item("https://x.com/1", "one", points=5),
            _item("https://x.com/1", "other", points=500, thumbnail="https://img"),
        ]

        self.assertEqual(len(deduplicate_items(items)), 1)

    def test_empty_input(self):
        self.assertEqual(deduplicate_items([]), [])

    def test_accepts_any_iterable(self):
        deduped = deduplicate_items(_item(u) for u in ["https://a", "https://a", "https://b"])
        self.assertEqual(len(deduped), 2)

    def test_does_not_mutate_input(self):
        items = [_item("https://a"), _item("https://a")]
        deduplicate_items(items)
        self.assertEqual(len(items), 2)


if __name__ == "__main__":
    unittest.main()
