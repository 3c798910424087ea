"""
Configuration parsing endpoints.

Parse NGINX configuration text, either posted inline or read from a
file below the configured NGINX directory, and return the block/line tree.
Malformed nesting never fails a request; it shows up in ``warnings``.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from config import resolve_config_path, settings
from core.config_manager import (
    ConfigAdapter,
    ConfigNotFoundError,
    ConfigParserError,
    nginx_parser,
)
from models.parse import OutputFormat, ParseRequest, ParseResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parse", tags=["Config Parsing"])


def _handle_parser_error(e: ConfigParserError) -> HTTPException:
    """Convert parser I/O errors to appropriate HTTP exceptions."""
    status_code = 404 if isinstance(e, ConfigNotFoundError) else 422
    return HTTPException(
        status_code=status_code,
        detail={
            "error": e.error_type,
            "message": e.message,
            "suggestion": e.suggestion
        }
    )


def _too_large(size: int) -> HTTPException:
    return HTTPException(
        status_code=413,
        detail={
            "error": "config_too_large",
            "message": f"Config is {size} bytes, limit is {settings.max_config_bytes}",
            "suggestion": "Split the configuration or raise MAX_CONFIG_BYTES",
        }
    )


@router.post(
    "/",
    response_model=ParseResponse,
    summary="Parse Configuration Text",
    description="""
Parse NGINX configuration text into a tree of blocks and lines.

Every block lists its lines in source order (including one `block` line per
child block) and its child blocks. Comments are attached to the line they
share a physical line with.

**Output formats:**
- `json` returns only the tree
- `flat` also returns the tree re-serialized as configuration text
- `tree` also returns a hierarchical text view

`include` directives are recorded, not resolved.
""",
    responses={
        200: {"description": "Parsed document, possibly with structural warnings"},
        413: {"description": "Configuration text exceeds MAX_CONFIG_BYTES"}
    }
)
async def parse_config(request: ParseRequest) -> ParseResponse:
    """Parse configuration text posted in the request body."""
    size = len(request.content.encode("utf-8"))
    if size > settings.max_config_bytes:
        raise _too_large(size)

    document = nginx_parser.parse_string(request.content, source=request.source)
    return ConfigAdapter.to_response(document, request.output)


@router.get(
    "/file",
    response_model=ParseResponse,
    summary="Parse Configuration File",
    description="""
Parse a configuration file located below `NGINX_CONF_DIR`.

The path is relative to that directory; paths that resolve outside it are
rejected.
""",
    responses={
        200: {"description": "Parsed document"},
        400: {"description": "Path escapes the configuration directory"},
        404: {"description": "File not found"},
        413: {"description": "File exceeds MAX_CONFIG_BYTES"},
        422: {"description": "File could not be read or decoded"}
    }
)
async def parse_config_file(
    path: str = Query(..., description="File path relative to NGINX_CONF_DIR", examples=["nginx.conf"]),
    output: OutputFormat = Query(default=OutputFormat.JSON, description="Extra rendering to include"),
) -> ParseResponse:
    """Parse a configuration file from disk."""
    file_path = resolve_config_path(path)
    if file_path is None:
        logger.warning(f"Rejected config path outside {settings.nginx_conf_dir}: {path}")
        raise HTTPException(
            status_code=400,
            detail={
                "error": "invalid_path",
                "message": f"Path '{path}' is outside the configuration directory",
                "suggestion": "Use a path relative to NGINX_CONF_DIR without '..' segments",
            }
        )

    if file_path.is_file() and file_path.stat().st_size > settings.max_config_bytes:
        raise _too_large(file_path.stat().st_size)

    try:
        document = nginx_parser.parse_file(file_path)
    except ConfigParserError as e:
        logger.error(f"Failed to read config {file_path}: {e.message}")
        raise _handle_parser_error(e)

    return ConfigAdapter.to_response(document, output)
