"""
Quote-aware line splitting for NGINX configuration text.

Works on one trimmed physical line at a time: pulls off the trailing
comment, then cuts the rest into directive fragments on ``;`` and stops
at the first unquoted ``{``. Content inside '...' or "..." is never split.
"""

from dataclasses import dataclass, field

QUOTE_CHARS = ("'", '"')


@dataclass
class SplitLine:
    """Result of splitting one physical line."""

    remaining: str
    comment: str | None = None
    fragments: list[str] = field(default_factory=list)
    discarded: str = ""
    unterminated_quote: bool = False

    @property
    def is_comment_only(self) -> bool:
        return not self.remaining and self.comment is not None


class _QuoteState:
    """Tracks whether the scan is inside a quoted span."""

    def __init__(self):
        self.mark: str | None = None

    @property
    def active(self) -> bool:
        return self.mark is not None

    def feed(self, char: str) -> None:
        if char not in QUOTE_CHARS:
            return
        if self.mark is None:
            self.mark = char
        elif char == self.mark:
            self.mark = None


def has_open_quote(text: str) -> bool:
    """True if a quoted span in ``text`` is still open at its end."""
    quotes = _QuoteState()
    for char in text:
        quotes.feed(char)
    return quotes.active


def extract_comment(text: str) -> tuple[str, str | None]:
    """
    Separate directive text from a trailing comment.

    The first ``#`` outside quotes starts the comment. Both parts are
    whitespace-trimmed.

    Returns:
        Tuple of (remaining text, comment text or None if the line has no comment)
    """
    quotes = _QuoteState()
    for index, char in enumerate(text):
        if char == "#" and not quotes.active:
            return text[:index].strip(), text[index + 1 :].strip()
        quotes.feed(char)
    return text.strip(), None


def _scan_fragments(text: str) -> tuple[list[str], str, bool]:
    fragments: list[str] = []
    current: list[str] = []
    quotes = _QuoteState()

    def flush() -> None:
        fragment = "".join(current).strip()
        if fragment:
            fragments.append(fragment)
        current.clear()

    for index, char in enumerate(text):
        if quotes.active or char in QUOTE_CHARS:
            current.append(char)
            quotes.feed(char)
        elif char == ";":
            flush()
        elif char == "{":
            current.append(char)
            flush()
            return fragments, text[index + 1 :].strip(), False
        else:
            current.append(char)

    flush()
    return fragments, "", quotes.active


def split_directives(text: str) -> list[str]:
    """
    Split comment-free line text into directive fragments.

    Fragments end at an unquoted ``;`` (excluded) or at an unquoted ``{``
    (kept, and nothing after it on the line is read). A trailing fragment
    without a terminator is still returned. Whitespace-only fragments are
    dropped.
    """
    fragments, _, _ = _scan_fragments(text)
    return fragments


def split_line(text: str) -> SplitLine:
    """Extract the comment from a line and split what is left into fragments."""
    remaining, comment = extract_comment(text)
    if not remaining:
        return SplitLine(remaining="", comment=comment)

    fragments, discarded, unterminated = _scan_fragments(remaining)
    return SplitLine(
        remaining=remaining,
        comment=comment,
        fragments=fragments,
        discarded=discarded,
        unterminated_quote=unterminated,
    )
