"""
Adapter to convert a parsed ConfigDocument into API response models.
"""

from models.parse import (
    OutputFormat,
    ParsedBlock,
    ParsedLine,
    ParseResponse,
    ParseStats,
    ParseWarningModel,
)

from .renderer import render_flat, render_tree
from .tree import ConfigBlock, ConfigDocument, ConfigLine, LineKind


class ConfigAdapter:
    """Converts between parser output and API response formats."""

    @staticmethod
    def to_response(document: ConfigDocument, output: OutputFormat = OutputFormat.JSON) -> ParseResponse:
        """
        Build the API response for a parsed document.

        Args:
            document: Parsed configuration
            output: Rendering to attach in ``rendered``; JSON attaches none

        Returns:
            ParseResponse with the full tree, warnings and stats
        """
        rendered = None
        if output == OutputFormat.FLAT:
            rendered = render_flat(document)
        elif output == OutputFormat.TREE:
            rendered = render_tree(document)

        return ParseResponse(
            source=document.source,
            root=ConfigAdapter.block_to_model(document.root),
            warnings=[ParseWarningModel(**w.to_dict()) for w in document.warnings],
            includes=document.includes(),
            stats=ConfigAdapter.collect_stats(document),
            rendered=rendered,
        )

    @staticmethod
    def block_to_model(block: ConfigBlock) -> ParsedBlock:
        """Convert a block and its descendants."""
        return ParsedBlock(
            name=block.name,
            args=list(block.args),
            comments=list(block.comments),
            line_number=block.line_number,
            lines=[ConfigAdapter.line_to_model(line) for line in block.lines],
            children=[ConfigAdapter.block_to_model(child) for child in block.children],
        )

    @staticmethod
    def line_to_model(line: ConfigLine) -> ParsedLine:
        return ParsedLine(
            kind=line.kind.value,
            name=line.name,
            args=list(line.args),
            comments=list(line.comments),
            line_number=line.line_number,
        )

    @staticmethod
    def collect_stats(document: ConfigDocument) -> ParseStats:
        """Count blocks and line kinds across the whole tree."""
        counts = {kind: 0 for kind in LineKind}
        blocks = 0
        max_depth = 0

        for block in (document.root, *document.iter_blocks()):
            if not block.is_root:
                blocks += 1
                max_depth = max(max_depth, block.depth)
            for line in block.lines:
                counts[line.kind] += 1

        return ParseStats(
            blocks=blocks,
            directives=counts[LineKind.DIRECTIVE],
            includes=counts[LineKind.INCLUDE],
            comments=counts[LineKind.COMMENT],
            max_depth=max_depth,
        )
