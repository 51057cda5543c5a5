class BrowserError(Exception):
    pass


class FetchError(BrowserError):
    """Network, DNS, TLS or timeout failure while fetching ``url``."""

    def __init__(self, url, reason):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class RenderError(BrowserError):
    pass


class DecodeError(RenderError):
    """Payload could not be decoded as its declared content type."""


class PersistenceError(BrowserError):
    pass
