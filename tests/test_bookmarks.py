import json
import os
import tempfile
import unittest
from unittest import mock

from textnav.bookmarks import Bookmark, BookmarkStore
from textnav.errors import PersistenceError


class BookmarkStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "bookmarks.json")

    def tearDown(self):
        self._tmp.cleanup()

    def read_file(self):
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def test_missing_file_loads_empty(self):
        store = BookmarkStore(self.path).load()
        self.assertEqual(store.list(), [])

    def test_corrupt_file_loads_empty(self):
        with open(self.path, "w") as f:
            f.write("{not json at all")

        store = BookmarkStore(self.path).load()
        self.assertEqual(store.list(), [])

    def test_non_list_top_level_loads_empty(self):
        with open(self.path, "w") as f:
            json.dump({"title": "x", "url": "y"}, f)

        self.assertEqual(len(BookmarkStore(self.path).load()), 0)

    def test_deeply_nested_file_loads_empty(self):
        with open(self.path, "w") as f:
            f.write("[" * 200000 + "]" * 200000)

        store = BookmarkStore(self.path).load()
        self.assertEqual(store.list(), [])

    def test_malformed_records_are_skipped(self):
        with open(self.path, "w") as f:
            json.dump([{"title": "ok", "url": "https://a"}, {"title": 3}, "junk"], f)

        store = BookmarkStore(self.path).load()
        self.assertEqual(store.list(), [Bookmark("ok", "https://a")])

    def test_add_without_current_url_is_noop(self):
        store = BookmarkStore(self.path)

        self.assertIsNone(store.add("Nothing", None))
        self.assertEqual(len(store), 0)
        self.assertFalse(os.path.exists(self.path))

    def test_add_writes_through(self):
        store = BookmarkStore(self.path)
        store.add("Example", "https://example.com")
        store.add("Example", "https://example.com")

        self.assertEqual(
            self.read_file(),
            [{"title": "Example", "url": "https://example.com"}] * 2,
        )
        reloaded = BookmarkStore(self.path).load()
        self.assertEqual(reloaded.list(), store.list())

    def test_delete_by_position(self):
        store = BookmarkStore(self.path)
        store.add("one", "https://1")
        store.add("two", "https://2")

        self.assertTrue(store.delete(1))
        self.assertEqual(store.list(), [Bookmark("two", "https://2")])
        self.assertEqual(self.read_file(), [{"title": "two", "url": "https://2"}])

    def test_delete_out_of_range_is_ignored(self):
        store = BookmarkStore(self.path)
        store.add("one", "https://1")

        self.assertFalse(store.delete(0))
        self.assertFalse(store.delete(2))
        self.assertEqual(len(store), 1)

    def test_get_out_of_range_raises(self):
        store = BookmarkStore(self.path)
        with self.assertRaises(IndexError):
            store.get(1)

    def test_write_failure_keeps_in_memory_mutation(self):
        store = BookmarkStore(self.path)
        with mock.patch("builtins.open", side_effect=PermissionError("read-only")):
            with self.assertRaises(PersistenceError):
                store.add("kept", "https://kept")

        self.assertEqual(store.list(), [Bookmark("kept", "https://kept")])


if __name__ == "__main__":
    unittest.main()
