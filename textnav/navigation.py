import logging

from . import fetch, render

logger = logging.getLogger(__name__)

SCHEMES = ("http://", "https://")


def normalize_url(t):
    t = t.strip()
    if t.lower().startswith(SCHEMES):
        return t
    return "https://" + t


def render_response(response, width=100, safe_mode=True):
    kind = fetch.classify(response.content_type)
    if kind == fetch.HTML:
        # Let the document's own <meta charset> win unless the header names one
        encoding = response.encoding if "charset=" in response.content_type.lower() else None
        return render.render_html(response.body, response.url, encoding, width, safe_mode)
    if kind == fetch.JSON:
        return render.render_json(response.body).splitlines()
    return render.render_unsupported(response.content_type)


class Navigator:
    """Runs the visit-a-URL transaction and owns the current URL.

    Nothing changes unless both the fetch and the render succeed; a
    ``FetchError`` or ``RenderError`` leaves the previous page, URL and
    history in place and propagates to the caller.
    """

    def __init__(self, fetcher, viewport, history, width=100, safe_mode=True, on_navigate=None):
        self.fetcher = fetcher
        self.viewport = viewport
        self.history = history
        self.width = width
        self.safe_mode = safe_mode
        self.on_navigate = on_navigate
        self.current_url = None
        self.status = None

    def navigate(self, target):
        url = normalize_url(target)
        response = self.fetcher.fetch(url)
        lines = render_response(response, self.width, self.safe_mode)

        self.viewport.set_document(lines)
        self.current_url = url
        self.status = response.status
        self.history.record(url)
        logger.info("loaded %s (%d lines, status %s)", url, len(lines), response.status)

        if self.on_navigate:
            self.on_navigate()

    def reload(self):
        if not self.current_url:
            return False
        self.navigate(self.current_url)
        return True

    def fetch_raw(self):
        if not self.current_url:
            return None
        return self.fetcher.fetch(self.current_url)
