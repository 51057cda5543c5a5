from dataclasses import dataclass


@dataclass(frozen=True)
class MatchSpan:
    start: int
    length: int

    @property
    def end(self):
        return self.start + self.length


@dataclass(frozen=True)
class SearchResult:
    line_number: int
    text: str
    spans: tuple


def fold(text):
    """Lower-case ``text`` one character at a time without changing its length.

    Characters whose lower-case form is longer (``"İ"``) are kept as-is so
    offsets into the folded text stay valid for the original.
    """
    out = []
    for ch in text:
        low = ch.lower()
        out.append(low if len(low) == 1 else ch)
    return "".join(out)


def find_spans(line, query):
    if not query:
        return []

    haystack = fold(line)
    needle = fold(query)
    spans = []
    pos = haystack.find(needle)
    while pos != -1:
        spans.append(MatchSpan(pos, len(needle)))
        pos = haystack.find(needle, pos + len(needle))
    return spans


def search(lines, query):
    results = []
    if not query:
        return results
    for i, line in enumerate(lines):
        spans = find_spans(line, query)
        if spans:
            results.append(SearchResult(i + 1, line, tuple(spans)))
    return results


def highlight(text, spans, on, off):
    out = []
    last = 0
    for span in spans:
        out.append(text[last:span.start])
        out.append(f"{on}{text[span.start:span.end]}{off}")
        last = span.end
    out.append(text[last:])
    return "".join(out)
