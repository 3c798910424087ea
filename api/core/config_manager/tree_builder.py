"""
Builds a ConfigDocument one physical line at a time.

Open blocks are tracked on an explicit stack whose bottom is always the
root. Malformed nesting never raises: stray closing braces are ignored,
blocks left open at the end stay in the tree as built, and each case is
recorded as a ParseWarning.
"""

from .splitter import split_line
from .tree import (
    INCLUDE_DIRECTIVE,
    ROOT_BLOCK_NAME,
    ConfigBlock,
    ConfigDocument,
    ConfigLine,
    LineKind,
    ParseWarning,
)

BLOCK_CLOSE = "}"
BLOCK_OPEN = "{"


class TreeBuilder:
    """
    Incremental tree construction for a single parse.

    Usage:
        builder = TreeBuilder(source="nginx.conf")
        for number, text in enumerate(lines, 1):
            builder.feed(text.strip(), number)
        document = builder.finish()
    """

    def __init__(self, source: str):
        self.source = source
        self.root = ConfigBlock(ROOT_BLOCK_NAME)
        self.warnings: list[ParseWarning] = []
        self._stack: list[ConfigBlock] = [self.root]

    @property
    def current(self) -> ConfigBlock:
        """Innermost open block."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack) - 1

    def feed(self, text: str, line_number: int = 0) -> None:
        """
        Process one trimmed, non-empty physical line.

        Args:
            text: Line text with surrounding whitespace removed
            line_number: 1-based position in the source, for warnings and output
        """
        split = split_line(text)

        if split.is_comment_only:
            self.current.lines.append(
                ConfigLine(kind=LineKind.COMMENT, comments=[split.comment], line_number=line_number)
            )
            return

        if not split.remaining:
            return

        if split.remaining == BLOCK_CLOSE:
            self._close_block(line_number)
            return

        if split.unterminated_quote:
            self._warn("unterminated_quote", "Quoted string runs to end of line", line_number)
        if split.discarded:
            self._warn(
                "discarded_text",
                f"Ignored text after '{BLOCK_OPEN}': {split.discarded}",
                line_number,
            )

        comment = split.comment
        for fragment in split.fragments:
            words = fragment.split()
            if not words:
                continue

            comments = [comment] if comment is not None else []
            comment = None

            if fragment.endswith(BLOCK_OPEN):
                self._open_block(words, comments, line_number)
            elif words[0] == INCLUDE_DIRECTIVE:
                self.current.lines.append(
                    ConfigLine(
                        kind=LineKind.INCLUDE,
                        name=words[0],
                        args=words[1:],
                        comments=comments,
                        line_number=line_number,
                    )
                )
            else:
                self.current.lines.append(
                    ConfigLine(
                        kind=LineKind.DIRECTIVE,
                        name=words[0],
                        args=words[1:],
                        comments=comments,
                        line_number=line_number,
                    )
                )

    def finish(self) -> ConfigDocument:
        """Close out the parse and hand back the document."""
        for block in reversed(self._stack[1:]):
            self._warn(
                "unclosed_block",
                f"Block '{block.name}' opened on line {block.line_number} is never closed",
                block.line_number,
            )
        self._stack = [self.root]
        return ConfigDocument(source=self.source, root=self.root, warnings=self.warnings)

    def _open_block(self, words: list[str], comments: list[str], line_number: int) -> None:
        words = list(words)
        last = words[-1]
        if last == BLOCK_OPEN:
            words.pop()
        else:
            words[-1] = last[: -len(BLOCK_OPEN)]

        name = words[0] if words else ""
        args = words[1:]
        parent = self.current

        block = ConfigBlock(name, args=args, comments=comments, parent=parent, line_number=line_number)
        parent.children.append(block)
        parent.lines.append(
            ConfigLine(
                kind=LineKind.BLOCK_START,
                name=name,
                args=list(args),
                comments=list(comments),
                line_number=line_number,
            )
        )
        self._stack.append(block)

    def _close_block(self, line_number: int) -> None:
        if len(self._stack) > 1:
            self._stack.pop()
            return
        self._warn("stray_close", f"Ignored '{BLOCK_CLOSE}' with no open block", line_number)

    def _warn(self, code: str, message: str, line_number: int | None) -> None:
        self.warnings.append(ParseWarning(code=code, message=message, line_number=line_number))
