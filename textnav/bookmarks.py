import json
import logging
import os
from dataclasses import asdict, dataclass

from .errors import PersistenceError

logger = logging.getLogger(__name__)

BOOKMARK_FILE = "bookmarks.json"


@dataclass(frozen=True)
class Bookmark:
    title: str
    url: str


def _parse_records(data):
    if not isinstance(data, list):
        raise ValueError("bookmark file must hold a JSON array")

    bookmarks = []
    for item in data:
        if not isinstance(item, dict):
            continue
        title, url = item.get("title"), item.get("url")
        if not isinstance(title, str) or not isinstance(url, str):
            # Malformed record, skip safely
            continue
        bookmarks.append(Bookmark(title, url))
    return bookmarks


class BookmarkStore:
    """Ordered, write-through collection of bookmarks.

    Bookmarks are addressed by 1-based position, the same numbering the
    bookmark menu shows. Duplicates are allowed.
    """

    def __init__(self, path=BOOKMARK_FILE):
        self.path = path
        self._items = []

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def list(self):
        return list(self._items)

    def get(self, index):
        if not 1 <= index <= len(self._items):
            raise IndexError(f"no bookmark #{index}")
        return self._items[index - 1]

    def load(self):
        """Replace the in-memory store with the file's contents.

        A missing or corrupt file leaves the store empty.
        """
        self._items = []
        if not os.path.exists(self.path):
            return self

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self._items = _parse_records(json.load(f))
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("bookmark file %s unreadable, starting empty: %s", self.path, e)
            self._items = []
        return self

    def save(self):
        records = [asdict(b) for b in self._items]
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
        except OSError as e:
            raise PersistenceError(f"could not write {self.path}: {e}") from e
        logger.debug("saved %d bookmarks to %s", len(records), self.path)

    def add(self, title, current_url):
        if not current_url:
            return None
        bookmark = Bookmark(title, current_url)
        self._items.append(bookmark)
        self.save()
        return bookmark

    def delete(self, index):
        if not 1 <= index <= len(self._items):
            return False
        del self._items[index - 1]
        self.save()
        return True
