"""
Unit tests for TreeBuilder line classification and scope tracking.
"""

import gc

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "api"))

from core.config_manager.tree import ROOT_BLOCK_NAME, LineKind
from core.config_manager.tree_builder import TreeBuilder


def build(*lines: str):
    """Feed trimmed lines to a fresh builder and return the document."""
    builder = TreeBuilder(source="test.conf")
    for number, line in enumerate(lines, 1):
        builder.feed(line.strip(), number)
    return builder.finish()


class TestLineClassification:
    """Tests for how single lines become ConfigLines."""

    def test_comment_line(self):
        """Test a comment-only line becomes a Comment line in the current block."""
        doc = build("# hello world")
        assert len(doc.root.lines) == 1
        line = doc.root.lines[0]
        assert line.kind == LineKind.COMMENT
        assert line.name == ""
        assert line.args == []
        assert line.comments == ["hello world"]

    def test_directive_line(self):
        """Test a plain directive."""
        doc = build("listen 80 default_server;")
        line = doc.root.lines[0]
        assert line.kind == LineKind.DIRECTIVE
        assert line.name == "listen"
        assert line.args == ["80", "default_server"]
        assert line.comments == []

    def test_directive_without_arguments(self):
        """Test a directive with zero arguments is accepted."""
        doc = build("least_conn;")
        assert doc.root.lines[0].name == "least_conn"
        assert doc.root.lines[0].args == []

    def test_include_line(self):
        """Test include directives are classified as Include lines."""
        doc = build("include /etc/nginx/conf.d/*.conf;")
        line = doc.root.lines[0]
        assert line.kind == LineKind.INCLUDE
        assert line.name == "include"
        assert line.args == ["/etc/nginx/conf.d/*.conf"]
        assert doc.root.children == []

    def test_quote_awareness(self):
        """Test quoted ';' and '#' neither split nor truncate a directive."""
        doc = build('alpha "b;c#d" gamma;')
        assert len(doc.root.lines) == 1
        line = doc.root.lines[0]
        assert line.kind == LineKind.DIRECTIVE
        assert line.name == "alpha"
        assert line.args == ['"b;c#d"', "gamma"]
        assert line.comments == []

    def test_comment_attachment(self):
        """Test a trailing comment attaches to the directive on the same line."""
        doc = build("foo bar; # note")
        line = doc.root.lines[0]
        assert line.name == "foo"
        assert line.args == ["bar"]
        assert line.comments == ["note"]

    def test_comment_goes_to_first_fragment_only(self):
        """Test later fragments on the same physical line get no comment."""
        doc = build("foo bar; baz qux; # note")
        first, second = doc.root.lines
        assert first.comments == ["note"]
        assert second.name == "baz"
        assert second.comments == []

    def test_multi_directive_line(self):
        """Test several directives on one line become siblings in order."""
        doc = build("a 1; b 2; c 3;")
        assert [(l.name, l.args) for l in doc.root.lines] == [("a", ["1"]), ("b", ["2"]), ("c", ["3"])]
        assert all(l.kind == LineKind.DIRECTIVE for l in doc.root.lines)

    def test_empty_fragments_skipped(self):
        """Test a line of only semicolons adds nothing."""
        doc = build(";;", "a 1;;b 2")
        assert [l.name for l in doc.root.lines] == ["a", "b"]

    def test_line_numbers_recorded(self):
        """Test the physical line number is kept on each line."""
        builder = TreeBuilder(source="test.conf")
        builder.feed("a 1;", 4)
        builder.feed("# c", 7)
        doc = builder.finish()
        assert [l.line_number for l in doc.root.lines] == [4, 7]

    def test_comments_are_not_carried_across_lines(self):
        """Test a comment-only line does not attach to the next directive."""
        doc = build("# about listen", "listen 80;")
        assert doc.root.lines[0].kind == LineKind.COMMENT
        assert doc.root.lines[1].comments == []


class TestBlocks:
    """Tests for block opening, closing and nesting."""

    def test_nesting(self, nested_config):
        """Test http > server > listen nesting and closing."""
        builder = TreeBuilder(source="nested.conf")
        for number, line in enumerate(nested_config.splitlines(), 1):
            builder.feed(line.strip(), number)
            if number == 2:
                assert builder.depth == 2
        assert builder.depth == 0

        doc = builder.finish()
        assert doc.warnings == []
        assert len(doc.root.children) == 1

        http = doc.root.children[0]
        assert http.name == "http"
        assert http.args == []
        assert len(http.children) == 1

        server = http.children[0]
        assert server.name == "server"
        assert server.args == []
        assert len(server.lines) == 1
        assert server.lines[0].kind == LineKind.DIRECTIVE
        assert server.lines[0].name == "listen"
        assert server.lines[0].args == ["80"]

    def test_block_start_line_in_parent(self):
        """Test opening a block adds a BlockStart line to the parent."""
        doc = build("server example.com {", "}")
        block_line = doc.root.lines[0]
        assert block_line.kind == LineKind.BLOCK_START
        assert block_line.name == "server"
        assert block_line.args == ["example.com"]
        assert doc.root.children[0].args == ["example.com"]

    def test_parent_reference(self):
        """Test child blocks point back at their parent."""
        doc = build("http {", "server {", "}", "}")
        http = doc.root.children[0]
        server = http.children[0]
        assert server.parent is http
        assert http.parent is doc.root
        assert doc.root.parent is None
        assert doc.root.name == ROOT_BLOCK_NAME
        assert doc.root.is_root
        assert server.depth == 2
        assert list(server.ancestors()) == [http, doc.root]

    def test_parent_reference_is_not_owning(self):
        """Test a block does not keep its parent alive."""
        doc = build("http {", "server {", "}", "}")
        server = doc.root.children[0].children[0]
        del doc
        gc.collect()
        assert server.parent is None

    def test_attached_brace(self):
        """Test 'name arg{' opens a block named 'name' with one argument."""
        doc = build("name arg{", "}")
        block = doc.root.children[0]
        assert block.name == "name"
        assert block.args == ["arg"]

    def test_brace_attached_to_name(self):
        """Test 'http{' opens a block named 'http'."""
        doc = build("http{", "}")
        assert doc.root.children[0].name == "http"
        assert doc.root.children[0].args == []

    def test_block_comment(self):
        """Test a comment on the opening line attaches to block and BlockStart line."""
        doc = build("server { # main site", "}")
        assert doc.root.children[0].comments == ["main site"]
        assert doc.root.lines[0].comments == ["main site"]

    def test_directive_then_block_on_one_line(self):
        """Test the comment goes to the directive when it precedes a block opening."""
        doc = build("a 1; server { # note", "listen 80;", "}")
        assert doc.root.lines[0].name == "a"
        assert doc.root.lines[0].comments == ["note"]
        assert doc.root.lines[1].kind == LineKind.BLOCK_START
        assert doc.root.children[0].comments == []
        assert doc.root.children[0].lines[0].name == "listen"

    def test_text_after_brace_discarded(self):
        """Test text after '{' on the same line is ignored and warned about."""
        doc = build("location / { return 200; }", "}")
        location = doc.root.children[0]
        assert location.lines == []
        assert [w.code for w in doc.warnings] == ["discarded_text"]

    def test_block_start_matches_children(self):
        """Test BlockStart lines correspond 1:1 and in order with children."""
        doc = build("a {", "}", "x 1;", "b {", "c {", "}", "}", "d {", "}")
        starts = [l for l in doc.root.lines if l.kind == LineKind.BLOCK_START]
        assert [(l.name, l.args) for l in starts] == [(c.name, c.args) for c in doc.root.children]
        assert [c.name for c in doc.root.children] == ["a", "b", "d"]

    def test_closing_brace_with_comment(self):
        """Test '} # end' still closes the block."""
        doc = build("http {", "} # end http", "after 1;")
        assert doc.root.lines[-1].name == "after"
        assert doc.root.children[0].lines == []


class TestLeniency:
    """Tests for malformed input that must not raise."""

    def test_stray_close_at_root(self):
        """Test a lone '}' is ignored and leaves the root empty."""
        doc = build("}")
        assert doc.root.lines == []
        assert doc.root.children == []
        assert [w.code for w in doc.warnings] == ["stray_close"]
        assert doc.warnings[0].line_number == 1

    def test_extra_close_after_block(self):
        """Test an extra '}' after a closed block does not pop the root."""
        doc = build("http {", "}", "}", "after 1;")
        assert doc.root.lines[-1].name == "after"

    def test_unclosed_blocks_kept(self):
        """Test blocks left open at end of input stay in the tree."""
        doc = build("http {", "server {", "listen 80;")
        server = doc.root.children[0].children[0]
        assert server.lines[0].name == "listen"
        codes = [w.code for w in doc.warnings]
        assert codes == ["unclosed_block", "unclosed_block"]
        assert "server" in doc.warnings[0].message
        assert "http" in doc.warnings[1].message

    def test_unterminated_quote(self):
        """Test an unterminated quote consumes the rest of the line."""
        doc = build('set $x "abc; def', "next 1;")
        assert doc.root.lines[0].name == "set"
        assert doc.root.lines[0].args == ["$x", '"abc;', "def"]
        assert doc.root.lines[1].name == "next"
        assert [w.code for w in doc.warnings] == ["unterminated_quote"]

    def test_warnings_do_not_change_shape(self):
        """Test the same tree is built with or without stray braces."""
        clean = build("http {", "a 1;", "}")
        messy = build("}", "http {", "a 1;", "}", "}")
        assert [l.name for l in clean.root.lines] == [l.name for l in messy.root.lines]
        assert [l.name for l in clean.root.children[0].lines] == [l.name for l in messy.root.children[0].lines]
