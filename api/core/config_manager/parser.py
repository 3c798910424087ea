"""
NGINX configuration parser.

Feeds source lines to the TreeBuilder and returns the resulting
ConfigDocument. Only I/O problems are raised; structural problems in the
configuration text are reported as warnings on the document.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from config import settings

from .tree import ConfigDocument
from .tree_builder import TreeBuilder

logger = logging.getLogger(__name__)


class ConfigParserError(Exception):
    """Base exception for configuration reading errors."""

    def __init__(self, message: str, error_type: str, suggestion: str | None = None):
        self.message = message
        self.error_type = error_type
        self.suggestion = suggestion
        super().__init__(message)


class ConfigNotFoundError(ConfigParserError):
    """Configuration file does not exist."""

    pass


class ConfigReadError(ConfigParserError):
    """Configuration file exists but cannot be read."""

    pass


class ConfigParser:
    """Line-oriented parser producing a ConfigDocument tree."""

    def __init__(self, encoding: str | None = None):
        self.encoding = encoding or settings.parse_encoding

    def parse_lines(self, lines: Iterable[str], source: str = "<string>") -> ConfigDocument:
        """
        Parse a sequence of raw lines.

        Blank lines are skipped; line numbers still count them.

        Args:
            lines: Physical lines, with or without trailing newlines
            source: Identifier recorded on the document (path or name)

        Returns:
            The best-effort document tree
        """
        builder = TreeBuilder(source)
        for line_number, raw in enumerate(lines, 1):
            text = raw.strip()
            if not text:
                continue
            builder.feed(text, line_number)

        document = builder.finish()

        for warning in document.warnings:
            logger.warning(f"{source}:{warning.line_number}: {warning.message}")
        logger.debug(
            f"Parsed {source}: {sum(1 for _ in document.iter_blocks())} blocks, "
            f"{len(document.warnings)} warnings"
        )
        return document

    def parse_string(self, content: str, source: str = "<string>") -> ConfigDocument:
        """Parse configuration text held in memory."""
        return self.parse_lines(content.splitlines(), source=source)

    def parse_file(self, file_path: Path) -> ConfigDocument:
        """
        Read and parse a configuration file.

        The file is read completely before parsing starts, so a read failure
        never leaves a partial document behind.

        Raises:
            ConfigNotFoundError: The path does not exist
            ConfigReadError: The path is not a readable text file
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise ConfigNotFoundError(
                f"Config file not found: {file_path}",
                error_type="config_not_found",
                suggestion="Check the path and that the file has not been moved or disabled",
            )
        if not file_path.is_file():
            raise ConfigReadError(
                f"Not a regular file: {file_path}",
                error_type="config_not_a_file",
                suggestion="Point to a single .conf file rather than a directory",
            )

        try:
            content = file_path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise ConfigReadError(
                f"Cannot decode {file_path} as {self.encoding}: {e}",
                error_type="config_decode_error",
                suggestion="Set PARSE_ENCODING to the file's encoding",
            ) from e
        except OSError as e:
            raise ConfigReadError(
                f"Cannot read {file_path}: {e}",
                error_type="config_read_error",
                suggestion="Check file permissions for the API process",
            ) from e

        logger.info(f"Parsing config file {file_path}")
        return self.parse_string(content, source=str(file_path))


# Global parser instance
nginx_parser = ConfigParser()
