# NGINX configuration parsing module

from .adapter import ConfigAdapter
from .parser import ConfigNotFoundError, ConfigParser, ConfigParserError, ConfigReadError, nginx_parser
from .renderer import render_flat, render_tree
from .tree import ConfigBlock, ConfigDocument, ConfigLine, LineKind, ParseWarning

__all__ = [
    "ConfigAdapter",
    "ConfigBlock",
    "ConfigDocument",
    "ConfigLine",
    "ConfigNotFoundError",
    "ConfigParser",
    "ConfigParserError",
    "ConfigReadError",
    "LineKind",
    "ParseWarning",
    "nginx_parser",
    "render_flat",
    "render_tree",
]
