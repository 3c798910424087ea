"""
In-memory tree for parsed NGINX configuration files.

A document is a root block holding lines and child blocks. Blocks keep a
weak back-reference to their parent; ownership lives only in the parent's
``children`` list.
"""

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# An unquoted '#' always starts a comment, so no directive can carry this name
ROOT_BLOCK_NAME = "#root"

INCLUDE_DIRECTIVE = "include"


class LineKind(str, Enum):
    """Kind of a single line inside a block."""

    COMMENT = "comment"
    INCLUDE = "include"
    DIRECTIVE = "directive"
    BLOCK_START = "block"


@dataclass
class ConfigLine:
    """A single logical statement inside a block."""

    kind: LineKind
    name: str = ""
    args: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    line_number: int = 0

    def to_dict(self) -> dict[str, Any]:
        result = {
            "kind": self.kind.value,
            "name": self.name,
            "args": list(self.args),
            "line_number": self.line_number,
        }
        if self.comments:
            result["comments"] = list(self.comments)
        return result


class ConfigBlock:
    """
    A nestable named container delimited by braces.

    The root block of a document uses ``ROOT_BLOCK_NAME`` and has no parent.
    Every BlockStart entry in ``lines`` matches, in order, one entry in
    ``children``.
    """

    def __init__(
        self,
        name: str,
        args: list[str] | None = None,
        comments: list[str] | None = None,
        parent: "ConfigBlock | None" = None,
        line_number: int = 0,
    ):
        self.name = name
        self.args: list[str] = args or []
        self.comments: list[str] = comments or []
        self.line_number = line_number
        self.lines: list[ConfigLine] = []
        self.children: list[ConfigBlock] = []
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    def __repr__(self) -> str:
        return f"ConfigBlock(name={self.name!r}, args={self.args!r}, lines={len(self.lines)}, children={len(self.children)})"

    @property
    def parent(self) -> "ConfigBlock | None":
        """Enclosing block, or None for the root (or once the owner is gone)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_root(self) -> bool:
        return self._parent_ref is None

    @property
    def depth(self) -> int:
        """Number of enclosing blocks; 0 for the root."""
        return sum(1 for _ in self.ancestors())

    def ancestors(self) -> Iterator["ConfigBlock"]:
        """Yield enclosing blocks from the nearest outwards, ending at the root."""
        block = self.parent
        while block is not None:
            yield block
            block = block.parent

    def iter_blocks(self) -> Iterator["ConfigBlock"]:
        """Yield every descendant block depth-first in source order."""
        for child in self.children:
            yield child
            yield from child.iter_blocks()

    def find_blocks(self, name: str) -> list["ConfigBlock"]:
        """Return all descendant blocks with the given name."""
        return [block for block in self.iter_blocks() if block.name == name]

    def directives(self, name: str | None = None) -> list[ConfigLine]:
        """Directive and include lines directly in this block, optionally filtered by name."""
        return [
            line
            for line in self.lines
            if line.kind in (LineKind.DIRECTIVE, LineKind.INCLUDE) and (name is None or line.name == name)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "args": list(self.args),
            "comments": list(self.comments),
            "line_number": self.line_number,
            "lines": [line.to_dict() for line in self.lines],
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class ParseWarning:
    """A non-fatal structural problem noticed while building the tree."""

    code: str
    message: str
    line_number: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {"code": self.code, "message": self.message}
        if self.line_number is not None:
            result["line_number"] = self.line_number
        return result


@dataclass
class ConfigDocument:
    """Root block plus the identifier of the source it was parsed from."""

    source: str
    root: ConfigBlock
    warnings: list[ParseWarning] = field(default_factory=list)

    def iter_blocks(self) -> Iterator[ConfigBlock]:
        return self.root.iter_blocks()

    def find_blocks(self, name: str) -> list[ConfigBlock]:
        return self.root.find_blocks(name)

    def includes(self) -> list[str]:
        """
        Collect include targets, walking blocks depth-first.

        Targets are recorded, not resolved. Duplicates are reported once.
        """
        targets: list[str] = []
        for block in (self.root, *self.root.iter_blocks()):
            for line in block.lines:
                if line.kind == LineKind.INCLUDE and line.args and line.args[0] not in targets:
                    targets.append(line.args[0])
        return targets
