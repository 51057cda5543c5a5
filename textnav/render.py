import json
import re
from urllib.parse import parse_qs, unquote, urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup

from .errors import DecodeError

HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
BLOCK_TAGS = HEADINGS + ["p", "li", "pre", "blockquote"]

AD_HOSTS = ["doubleclick", "adservice", "adsystem", "tracking",
            "analytics", "pixel", "googlesyndication"]


# ========= CLEANING + WRAPPING =========
def clean_paragraph(text):
    text = text.replace("\n", " ")
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def wrap(text, width):
    words = text.split()
    lines = []
    current = ""

    for w in words:
        if len(current) + len(w) + (1 if current else 0) > width:
            if current:
                lines.append(current)
            current = w
        else:
            current = w if current == "" else current + " " + w

    if current:
        lines.append(current)

    return lines


def decode_text(body, encoding=None):
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


# ========= LINK HELPERS =========
def unwrap_duckduckgo_redirect(url):
    if url.startswith("//duckduckgo.com/l/?"):
        url = "https:" + url
    p = urlparse(url)
    if "duckduckgo.com" in p.netloc and p.path.startswith("/l"):
        qs = parse_qs(p.query)
        if "uddg" in qs:
            return unquote(qs["uddg"][0])
    return url


def strip_duckduckgo_tracking(url):
    p = urlparse(url)
    if "duckduckgo.com" not in p.netloc:
        return url
    return urlunparse(p._replace(query=""))


def unwrap_generic_redirect(url):
    return strip_duckduckgo_tracking(unwrap_duckduckgo_redirect(url))


def is_ad_or_tracker(url):
    host = urlparse(url).netloc.lower()
    return any(b in host for b in AD_HOSTS)


def extract_title(soup):
    if soup.title and soup.title.string:
        return clean_paragraph(soup.title.string)
    return None


def extract_links(root, base, safe_mode=True):
    links = []
    seen = set()
    for a in root.find_all("a", href=True):
        raw = a["href"].strip()
        if not raw or raw.startswith("#") or raw.lower().startswith(("javascript:", "mailto:")):
            continue
        href = unwrap_generic_redirect(urljoin(base, raw) if base else raw)
        if safe_mode and is_ad_or_tracker(href):
            continue
        if href in seen:
            continue
        seen.add(href)
        label = clean_paragraph(a.get_text(" ", strip=True))
        links.append((label if label else href, href))
    return links


# ========= HTML =========
def _block_lines(tag, width):
    if tag.name in HEADINGS:
        text = clean_paragraph(tag.get_text(" ", strip=True))
        if not text:
            return []
        return ["#" * int(tag.name[1]) + " " + text]

    if tag.name == "pre":
        return [line.rstrip() for line in tag.get_text().strip("\n").splitlines()]

    text = clean_paragraph(tag.get_text(" ", strip=True))
    if not text:
        return []
    if tag.name == "li":
        wrapped = wrap(text, max(10, width - 2))
        return ["* " + wrapped[0]] + ["  " + line for line in wrapped[1:]]
    if tag.name == "blockquote":
        return ["> " + line for line in wrap(text, max(10, width - 2))]
    return wrap(text, width)


def render_html(body, base_url=None, encoding=None, width=100, safe_mode=True):
    """Convert an HTML payload to display lines.

    Headings keep a ``#`` marker per level, prose is wrapped at ``width``,
    and the page's links are listed at the end.
    """
    if isinstance(body, bytes):
        soup = BeautifulSoup(body, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(body, "html.parser")

    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()

    lines = []
    title = extract_title(soup)
    if title:
        lines += ["# " + title, ""]

    root = soup.body or soup
    blocks = 0
    for tag in root.find_all(BLOCK_TAGS):
        if tag.find_parent(BLOCK_TAGS):
            continue
        block = _block_lines(tag, width)
        if block:
            lines.extend(block)
            lines.append("")
            blocks += 1

    if not blocks:
        # No block markup, fall back to the bare text
        for raw in root.get_text("\n").splitlines():
            clean = clean_paragraph(raw)
            if clean:
                lines.extend(wrap(clean, width))

    links = extract_links(root, base_url, safe_mode)
    if links:
        if lines and lines[-1] != "":
            lines.append("")
        lines += ["## Links", ""]
        for i, (label, href) in enumerate(links, 1):
            lines.append(f"[{i}] {label}: {href}")

    while lines and lines[-1] == "":
        lines.pop()

    return lines or ["[No readable text]"]


# ========= JSON =========
def render_json(body):
    try:
        value = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"invalid JSON payload: {e}") from e
    return json.dumps(value, indent=2, ensure_ascii=False)


def render_unsupported(content_type):
    return [f"Content-Type '{content_type}' not supported for display"]
