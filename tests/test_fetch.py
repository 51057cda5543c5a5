import unittest
from unittest import mock

import requests

from textnav.errors import FetchError
from textnav.fetch import HTML, JSON, OTHER, Fetcher, classify


def fake_response(url="https://example.com/", status=200, content_type="text/html", body=b"<p>hi</p>"):
    r = mock.Mock()
    r.url = url
    r.status_code = status
    r.headers = {"content-type": content_type}
    r.content = body
    r.encoding = "utf-8"
    return r


class ClassifyTests(unittest.TestCase):
    def test_html(self):
        self.assertEqual(classify("text/html; charset=UTF-8"), HTML)
        self.assertEqual(classify("application/xhtml+xml"), HTML)

    def test_json(self):
        self.assertEqual(classify("application/json"), JSON)
        self.assertEqual(classify("application/problem+json; charset=utf-8"), JSON)

    def test_other(self):
        self.assertEqual(classify("image/png"), OTHER)
        self.assertEqual(classify(""), OTHER)
        self.assertEqual(classify(None), OTHER)


class FetcherTests(unittest.TestCase):
    def test_fetch_returns_final_url_and_body(self):
        session = mock.Mock(headers={})
        session.get.return_value = fake_response(url="https://example.com/landing")

        resp = Fetcher(user_agent="ua/1", timeout=5, session=session).fetch("https://example.com")

        session.get.assert_called_once_with("https://example.com", timeout=5, allow_redirects=True)
        self.assertEqual(session.headers["User-Agent"], "ua/1")
        self.assertEqual(resp.url, "https://example.com/landing")
        self.assertEqual(resp.status, 200)
        self.assertEqual(resp.content_type, "text/html")
        self.assertEqual(resp.body, b"<p>hi</p>")

    def test_http_error_status_is_not_a_fetch_error(self):
        session = mock.Mock(headers={})
        session.get.return_value = fake_response(status=404)

        resp = Fetcher(session=session).fetch("https://example.com/missing")
        self.assertEqual(resp.status, 404)

    def test_transport_failures_map_to_fetch_error(self):
        for exc in (requests.ConnectionError("dns"), requests.Timeout("slow"), requests.exceptions.SSLError("tls")):
            session = mock.Mock(headers={})
            session.get.side_effect = exc
            with self.assertRaises(FetchError) as ctx:
                Fetcher(session=session).fetch("https://down.example")
            self.assertEqual(ctx.exception.url, "https://down.example")


if __name__ == "__main__":
    unittest.main()
