import logging
from dataclasses import dataclass

import requests

from .config import DEFAULT_CONFIG
from .errors import FetchError

logger = logging.getLogger(__name__)

HTML = "html"
JSON = "json"
OTHER = "other"


@dataclass(frozen=True)
class FetchResponse:
    url: str
    status: int
    content_type: str
    body: bytes
    encoding: str = None


def classify(content_type):
    ct = (content_type or "").split(";", 1)[0].strip().lower()
    if ct in ("text/html", "application/xhtml+xml"):
        return HTML
    if ct == "application/json" or ct.endswith("+json"):
        return JSON
    return OTHER


class Fetcher:
    """GET documents over one ``requests`` session; redirects are followed."""

    def __init__(self, user_agent=DEFAULT_CONFIG["USER_AGENT"], timeout=DEFAULT_CONFIG["TIMEOUT"], session=None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def fetch(self, url):
        logger.debug("GET %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            body = r.content
        except requests.RequestException as e:
            logger.info("fetch failed for %s: %s", url, e)
            raise FetchError(url, e) from e

        logger.debug("%s -> %s %s (%d bytes)", url, r.status_code, r.headers.get("content-type"), len(body))
        return FetchResponse(
            url=r.url or url,
            status=r.status_code,
            content_type=r.headers.get("content-type", ""),
            body=body,
            encoding=r.encoding,
        )
