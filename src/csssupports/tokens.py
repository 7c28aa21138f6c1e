"""Backtracking cursor over tinycss2 component values."""

from __future__ import annotations

import re
from typing import Callable, Sequence, TypeVar

import tinycss2
from tinycss2.ast import Node

from csssupports.errors import ParseError

__all__ = ["SourceText", "TokenCursor", "tokenize"]

T = TypeVar("T")

_BLOCK_TYPES = frozenset({"() block", "[] block", "{} block", "function"})
_CLOSERS = {"() block": ")", "[] block": "]", "{} block": "}", "function": ")"}


def tokenize(source: str) -> TokenCursor:
    """Tokenize *source* into a cursor positioned at its first token."""
    text = SourceText(source)
    return TokenCursor(
        tinycss2.parse_component_value_list(text.text, skip_comments=True), source=text
    )


class SourceText:
    """The text a node list was parsed from, addressable by node position.

    tinycss2 records a line and column for every node but not where it ends.
    The end of a node is found by tokenizing again from its start: the next
    token that starts later, comments included, starts right after it.
    """

    def __init__(self, text: str) -> None:
        # Same newline normalization as the tinycss2 tokenizer.
        self.text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", self.text)]

    def offset(self, node: Node) -> int:
        """Offset of the first character of *node*."""
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def end(self, node: Node, limit: int | None = None) -> int:
        """Offset just past *node*, which must end at or before *limit*."""
        start = self.offset(node)
        stop = len(self.text) if limit is None else limit
        # Error tokens may share the position of the token they follow.
        for after in tinycss2.parse_component_value_list(self.text[start:stop])[1:]:
            if after.source_line > 1:
                line = node.source_line + after.source_line - 1
                return self._line_starts[line - 1] + after.source_column - 1
            if after.source_column > 1:
                return start + after.source_column - 1
        return stop


def _children(node: Node) -> list[Node]:
    if node.type == "function":
        return node.arguments
    return node.content


def _find_error(nodes: Sequence[Node]) -> Node | None:
    for node in nodes:
        if node.type == "error":
            return node
        if node.type in _BLOCK_TYPES:
            found = _find_error(_children(node))
            if found is not None:
                return found
    return None


class TokenCursor:
    """A position over a flat list of component values.

    Blocks (parentheses, functions) are single tokens whose contents are
    entered with :meth:`parse_nested_block`. Failed tentative parses rewind
    with :meth:`try_parse`, so they leave no trace.
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        *,
        end: Node | None = None,
        source: SourceText | None = None,
        limit: int | None = None,
    ) -> None:
        self._nodes = list(nodes)
        self._index = 0
        self._last: Node | None = None
        # Block token that owns this cursor, used to locate end-of-input errors.
        self._end = end
        # Without a source, slices are re-serialized from the tokens.
        self._source = source
        # Offset at or before which the owning block ends.
        self._limit = limit

    # --- positions ------------------------------------------------------------

    @property
    def position(self) -> int:
        return self._index

    def reset(self, position: int) -> None:
        self._index = position
        self._last = self._nodes[position - 1] if position else None

    def try_parse(self, fn: Callable[[TokenCursor], T]) -> T | None:
        """Run *fn*; on :class:`ParseError` rewind and return None."""
        start = self._index
        try:
            return fn(self)
        except ParseError:
            self.reset(start)
            return None

    def slice_from(self, position: int) -> str:
        """Source text of the tokens between *position* and the current position."""
        if position >= self._index:
            return ""
        if self._source is None:
            return tinycss2.serialize(self._nodes[position:self._index])
        start = self._source.offset(self._nodes[position])
        last = self._index - 1
        end = self._source.end(self._nodes[last], self._bound(last))
        return self._source.text[start:end]

    def slice_rest(self, position: int) -> str:
        """Source text from *position* to the end of the owning block's content.

        Comments before the closing delimiter are kept. From position 0 this is
        the whole block content, leading comments included.
        """
        if self._source is None or self._end is None or self._end.type not in _CLOSERS:
            return tinycss2.serialize(self._nodes[position:])
        end = self._content_end()
        if position == 0:
            start = self._content_start()
        elif position < len(self._nodes):
            start = self._source.offset(self._nodes[position])
        else:
            return ""
        return self._source.text[start:end]

    def _bound(self, index: int) -> int | None:
        if index + 1 < len(self._nodes):
            return self._source.offset(self._nodes[index + 1])
        return self._limit

    def _content_start(self) -> int:
        start = self._source.offset(self._end)
        if self._end.type == "function":
            return self._source.text.index("(", start) + 1
        return start + 1

    def _content_end(self) -> int:
        # A block left open at the end of the text has no closing delimiter;
        # its last character then belongs to the last inner token.
        block_end = self._source.end(self._end, self._limit)
        closed = self._source.text[block_end - 1] == _CLOSERS[self._end.type]
        if closed and self._nodes:
            closed = self._source.end(self._nodes[-1], block_end) != block_end
        return block_end - 1 if closed else block_end

    def is_exhausted(self) -> bool:
        return self._index >= len(self._nodes)

    # --- errors ---------------------------------------------------------------

    def error(self, message: str, node: Node | None = None) -> ParseError:
        """Build a :class:`ParseError` located at *node* or the cursor."""
        anchor = node
        if anchor is None:
            anchor = next(
                (n for n in (self._peek(), self._last, self._end) if n is not None), None
            )
        if anchor is None:
            return ParseError(message)
        return ParseError(message, anchor.source_line, anchor.source_column)

    def _peek(self) -> Node | None:
        if self._index < len(self._nodes):
            return self._nodes[self._index]
        return None

    # --- reading --------------------------------------------------------------

    def skip_whitespace(self) -> None:
        while self._index < len(self._nodes) and self._nodes[self._index].type == "whitespace":
            self._index += 1

    def next(self) -> Node:
        """Return the next non-whitespace token."""
        self.skip_whitespace()
        node = self._peek()
        if node is None:
            raise self.error("Unexpected end of input")
        self._index += 1
        self._last = node
        return node

    def expect_ident(self) -> str:
        node = self.next()
        if node.type != "ident":
            raise self.error(f"Expected identifier, found {node.type}", node)
        return node.value

    def expect_ident_matching(self, expected: str) -> str:
        """Consume an identifier equal to *expected*, ignoring ASCII case."""
        node = self.next()
        if node.type != "ident" or node.lower_value != expected:
            raise self.error(f"Expected {expected!r}", node)
        return node.value

    def expect_colon(self) -> None:
        node = self.next()
        if node.type != "literal" or node.value != ":":
            raise self.error("Expected ':'", node)

    def expect_no_error_token(self) -> None:
        """Consume the rest of the input, failing on any error token."""
        remaining = self._nodes[self._index:]
        found = _find_error(remaining)
        if found is not None:
            raise self.error(f"Invalid token: {found.message}", found)
        self._index = len(self._nodes)
        if remaining:
            self._last = remaining[-1]

    def expect_exhausted(self) -> None:
        self.skip_whitespace()
        node = self._peek()
        if node is not None:
            raise self.error(f"Unexpected token: {tinycss2.serialize([node])!r}", node)

    def parse_nested_block(self, fn: Callable[[TokenCursor], T]) -> T:
        """Parse the contents of the block just returned by :meth:`next`.

        *fn* must consume the whole block, trailing whitespace aside.
        """
        block = self._last
        if block is None or block.type not in _BLOCK_TYPES:
            raise self.error("Expected a block")
        limit = None if self._source is None else self._bound(self._index - 1)
        nested = TokenCursor(_children(block), end=block, source=self._source, limit=limit)
        result = fn(nested)
        nested.expect_exhausted()
        return result
