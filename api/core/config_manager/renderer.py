"""
Text renderers for parsed configuration documents.

``render_flat`` writes the tree back out as configuration text with two
spaces per nesting level. ``render_tree`` draws a hierarchical view of
blocks and lines for inspection.
"""

from .splitter import has_open_quote
from .tree import ConfigBlock, ConfigDocument, ConfigLine, LineKind

INDENT = "  "

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "


def _statement(name: str, args: list[str]) -> str:
    return " ".join([name, *args]) if args else name


def _with_comments(text: str, comments: list[str]) -> str:
    if not comments:
        return text
    return f"{text} # {' '.join(comments)}"


def render_flat(document: ConfigDocument) -> str:
    """
    Serialize a document back to configuration text.

    Child blocks are written where their BlockStart line sits, so re-parsing
    the output gives the same sequence of blocks and lines.
    """
    output: list[str] = []
    _render_block_body(document.root, 0, output)
    return "\n".join(output) + "\n" if output else ""


def _render_block_body(block: ConfigBlock, level: int, output: list[str]) -> None:
    indent = INDENT * level
    children = iter(block.children)

    for line in block.lines:
        if line.kind == LineKind.BLOCK_START:
            child = next(children, None)
            if child is not None:
                _render_block(child, level, output)
        elif line.kind == LineKind.COMMENT:
            output.append(f"{indent}# {' '.join(line.comments)}".rstrip())
        else:
            statement = _statement(line.name, line.args)
            if has_open_quote(statement):
                # Anything appended here would land inside the quoted text on re-parse
                output.append(indent + statement)
            else:
                output.append(indent + _with_comments(statement + ";", line.comments))

    # Blocks built outside the parser may lack matching BlockStart lines
    for child in children:
        _render_block(child, level, output)


def _render_block(block: ConfigBlock, level: int, output: list[str]) -> None:
    indent = INDENT * level
    header = _statement(block.name, block.args)
    output.append(indent + _with_comments(f"{header} {{".lstrip(), block.comments))
    _render_block_body(block, level + 1, output)
    output.append(f"{indent}}}")


def _line_label(line: ConfigLine) -> str:
    if line.kind == LineKind.COMMENT:
        return f"Comment: {' '.join(line.comments)}"
    labels = {
        LineKind.INCLUDE: "Include",
        LineKind.DIRECTIVE: "Directive",
        LineKind.BLOCK_START: "BlockStart",
    }
    return f"{labels[line.kind]}: {_statement(line.name, line.args)}"


def _block_label(block: ConfigBlock) -> str:
    label = f"Block: {_statement(block.name, block.args)} {{}}"
    if block.comments:
        label += f" (Comments: {len(block.comments)})"
    return label


def render_tree(document: ConfigDocument) -> str:
    """
    Draw the document as a tree.

    Each block lists its lines in source order followed by its child
    blocks. Comments attached to directives and blocks appear as nested
    ``Comment:`` entries.
    """
    output = [f"Configuration File: {document.source}", f"{LAST_BRANCH}Root"]
    _render_tree_block(document.root, SPACE_PREFIX, output)
    return "\n".join(output) + "\n"


def _render_tree_block(block: ConfigBlock, prefix: str, output: list[str]) -> None:
    for index, line in enumerate(block.lines):
        is_last = index == len(block.lines) - 1 and not block.children
        output.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{_line_label(line)}")

        if line.kind != LineKind.COMMENT and line.comments:
            comment_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
            for position, comment in enumerate(line.comments):
                branch = LAST_BRANCH if position == len(line.comments) - 1 else BRANCH
                output.append(f"{comment_prefix}{branch}Comment: {comment}")

    for index, child in enumerate(block.children):
        is_last = index == len(block.children) - 1
        output.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{_block_label(child)}")

        next_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
        for position, comment in enumerate(child.comments):
            is_final = position == len(child.comments) - 1 and not child.lines and not child.children
            output.append(f"{next_prefix}{LAST_BRANCH if is_final else BRANCH}Comment: {comment}")

        _render_tree_block(child, next_prefix, output)
