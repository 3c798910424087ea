"""
Pydantic models for the configuration parsing API.

These models mirror the in-memory document tree so it can be returned as
JSON, and describe the request/response bodies of the /parse endpoints.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    """Extra text rendering to include in a parse response."""
    JSON = "json"
    FLAT = "flat"
    TREE = "tree"


class ParsedLine(BaseModel):
    """A single line inside a block."""

    kind: str = Field(..., description="Line kind: comment, include, directive or block")
    name: str = Field(default="", description="Directive name; empty for comment lines")
    args: List[str] = Field(default_factory=list, description="Arguments following the name")
    comments: List[str] = Field(default_factory=list, description="Comments attached to this line")
    line_number: int = Field(default=0, description="1-based source line number")


class ParsedBlock(BaseModel):
    """A block and everything nested inside it."""

    name: str = Field(..., description="Block name, '#root' for the document root")
    args: List[str] = Field(default_factory=list, description="Arguments before the opening brace")
    comments: List[str] = Field(default_factory=list, description="Comments on the opening line")
    line_number: int = Field(default=0, description="Source line of the opening brace")
    lines: List[ParsedLine] = Field(
        default_factory=list,
        description="Lines in source order, including a block line per child"
    )
    children: List["ParsedBlock"] = Field(default_factory=list, description="Child blocks in source order")


ParsedBlock.model_rebuild()


class ParseWarningModel(BaseModel):
    """Non-fatal structural problem found while parsing."""

    code: str = Field(..., description="stray_close, unclosed_block, unterminated_quote or discarded_text")
    message: str = Field(..., description="Human-readable description")
    line_number: Optional[int] = Field(None, description="Source line the warning refers to")


class ParseStats(BaseModel):
    """Counts over the parsed tree."""

    blocks: int = Field(..., description="Number of blocks, excluding the root")
    directives: int = Field(..., description="Number of directive lines")
    includes: int = Field(..., description="Number of include lines")
    comments: int = Field(..., description="Number of comment-only lines")
    max_depth: int = Field(..., description="Deepest block nesting level")


class ParseRequest(BaseModel):
    """Configuration text to parse."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "http {\n  server {\n    listen 80; # default port\n  }\n}\n",
                "source": "nginx.conf",
                "output": "tree",
            }
        }
    )

    content: str = Field(..., description="Raw configuration text")
    source: str = Field(default="<inline>", description="Name recorded as the document source")
    output: OutputFormat = Field(
        default=OutputFormat.JSON,
        description="Also render the document as flat config text or a tree view"
    )


class ParseResponse(BaseModel):
    """Parsed document with warnings and optional rendering."""

    source: str = Field(..., description="Path or name the document was parsed from")
    root: ParsedBlock = Field(..., description="Root block of the document")
    warnings: List[ParseWarningModel] = Field(default_factory=list, description="Structural warnings")
    includes: List[str] = Field(default_factory=list, description="Include targets, unresolved")
    stats: ParseStats = Field(..., description="Counts over the tree")
    rendered: Optional[str] = Field(None, description="Flat or tree rendering when requested")
