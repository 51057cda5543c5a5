from dataclasses import dataclass

SCROLL_STEP = 5

HEADING = "heading"
LINK = "link"
PLAIN = "plain"


@dataclass(frozen=True)
class VisibleLine:
    number: int
    text: str
    style: str


def classify_line(text):
    if text.strip().startswith("#"):
        return HEADING
    if "http" in text or "www." in text:
        return LINK
    return PLAIN


class Viewport:
    """Rendered document plus a scroll offset windowed onto ``height`` rows.

    The offset is clamped against the height passed to each call, never a
    cached one, since the terminal can be resized between redraws.
    """

    def __init__(self, step=SCROLL_STEP):
        self.step = step
        self.lines = ()
        self._offset = 0

    def __len__(self):
        return len(self.lines)

    def set_document(self, lines):
        self.lines = tuple(lines)
        self._offset = 0

    def max_scroll(self, height):
        return max(0, len(self.lines) - max(0, height))

    def offset(self, height):
        self._offset = max(0, min(self._offset, self.max_scroll(height)))
        return self._offset

    def scroll_by(self, delta, height):
        self._offset = max(0, min(self.offset(height) + delta, self.max_scroll(height)))
        return self._offset

    def scroll_up(self, height):
        return self.scroll_by(-self.step, height)

    def scroll_down(self, height):
        return self.scroll_by(self.step, height)

    def visible_slice(self, height):
        if height <= 0:
            return []
        start = self.offset(height)
        window = self.lines[start:start + height]
        return [
            VisibleLine(start + i + 1, text, classify_line(text))
            for i, text in enumerate(window)
        ]
