from .config import MAX_HISTORY


class HistoryLedger:
    """Most-recently-used list of visited URLs.

    The front is the last visit. Revisiting a URL moves it to the front
    instead of duplicating it, and the oldest entry falls off the back once
    ``capacity`` is exceeded.
    """

    def __init__(self, capacity=MAX_HISTORY):
        self.capacity = capacity
        self._urls = []

    def __len__(self):
        return len(self._urls)

    def __iter__(self):
        return iter(self._urls)

    def record(self, url):
        if url in self._urls:
            self._urls.remove(url)
        self._urls.insert(0, url)
        if len(self._urls) > self.capacity:
            self._urls.pop()

    def list(self):
        return list(self._urls)

    def get(self, index):
        # 1-based, matches the history menu
        if not 1 <= index <= len(self._urls):
            raise IndexError(f"no history entry #{index}")
        return self._urls[index - 1]

    def front(self):
        return self._urls[0] if self._urls else None
