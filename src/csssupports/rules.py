"""CSS rules: the ``@supports`` rule and the rule list it nests."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, Sequence

import tinycss2
from tinycss2.ast import AtRule, Node, QualifiedRule
from tinycss2.serializer import serialize_identifier

from csssupports.condition import SupportsCondition
from csssupports.config import MinifyOptions
from csssupports.errors import ParseError
from csssupports.printer import Location, Printer
from csssupports.tokens import SourceText, TokenCursor

__all__ = [
    "CssRule",
    "CssRuleList",
    "Declaration",
    "StyleRule",
    "SupportsRule",
    "UnknownAtRule",
    "build_rule_list",
    "parse_rule_list",
]

logger = logging.getLogger(__name__)


class CssRule(Protocol):
    """A rule that can be minified and printed inside a rule list."""

    def minify(self, context: MinifyOptions, parent_is_unused: bool) -> None: ...

    def is_empty(self) -> bool: ...

    def to_css(self, dest: Printer) -> None: ...


@dataclass
class CssRuleList:
    """An ordered list of rules, at the top level or nested in a block."""

    rules: list[CssRule] = field(default_factory=list)

    def minify(self, context: MinifyOptions, parent_is_unused: bool) -> None:
        """Minify every rule, then drop the ones left empty.

        Errors raised by a rule propagate unchanged.
        """
        for rule in self.rules:
            rule.minify(context, parent_is_unused)
        before = len(self.rules)
        self.rules = [rule for rule in self.rules if not rule.is_empty()]
        if len(self.rules) != before:
            logger.debug("Removed %d empty rule(s)", before - len(self.rules))

    def to_css(self, dest: Printer) -> None:
        for i, rule in enumerate(self.rules):
            if i:
                dest.newline()
            rule.to_css(dest)

    def __len__(self) -> int:
        return len(self.rules)


# ---------------------------------------------------------------------------
# @supports
# ---------------------------------------------------------------------------


@dataclass
class SupportsRule:
    """An ``@supports`` rule: a condition gating a nested rule list."""

    condition: SupportsCondition
    rules: CssRuleList
    loc: Location

    @classmethod
    def parse(
        cls, rule: AtRule, source_index: int = 0, source: SourceText | None = None
    ) -> SupportsRule:
        """Build a rule from a tinycss2 ``@supports`` at-rule.

        With *source*, the text the rule was parsed from, raw condition text is
        taken from it verbatim.
        """
        loc = Location(source_index, rule.source_line, rule.source_column)
        cursor = TokenCursor(rule.prelude, end=rule, source=source)
        condition = SupportsCondition.parse(cursor)
        cursor.expect_exhausted()
        if rule.content is None:
            raise ParseError("Expected a block after @supports", loc.line, loc.column)
        return cls(
            condition=condition,
            rules=parse_rule_list(rule.content, source_index, source),
            loc=loc,
        )

    def minify(self, context: MinifyOptions, parent_is_unused: bool) -> None:
        if context.targets is not None:
            self.condition.set_prefixes_for_targets(context.targets)
        self.rules.minify(context, parent_is_unused)

    def is_empty(self) -> bool:
        return not self.rules.rules

    def to_css(self, dest: Printer) -> None:
        dest.add_mapping(self.loc)
        dest.write_str("@supports ")
        self.condition.to_css(dest)
        dest.whitespace()
        dest.write_char("{")
        dest.indent()
        dest.newline()
        self.rules.to_css(dest)
        dest.dedent()
        dest.newline()
        dest.write_char("}")


# ---------------------------------------------------------------------------
# Style rules and other at-rules (kept as raw text)
# ---------------------------------------------------------------------------


@dataclass
class Declaration:
    name: str
    value: str
    important: bool = False

    def to_css(self, dest: Printer) -> None:
        dest.write_str(serialize_identifier(self.name))
        dest.delim(":", False)
        dest.write_str(self.value)
        if self.important:
            dest.whitespace()
            dest.write_str("!important")


@dataclass
class StyleRule:
    """A qualified rule; its selector and values are not interpreted."""

    selector: str
    declarations: list[Declaration]
    loc: Location

    @classmethod
    def parse(cls, rule: QualifiedRule, source_index: int = 0) -> StyleRule:
        declarations: list[Declaration] = []
        items = tinycss2.parse_blocks_contents(
            rule.content, skip_comments=True, skip_whitespace=True
        )
        for item in items:
            if item.type == "declaration":
                declarations.append(
                    Declaration(
                        name=item.name,
                        value=tinycss2.serialize(item.value).strip(),
                        important=item.important,
                    )
                )
            else:
                # Invalid declarations are dropped, as CSS error recovery does.
                logger.warning(
                    "Skipping invalid content at line %s, column %s",
                    item.source_line,
                    item.source_column,
                )
        return cls(
            selector=tinycss2.serialize(rule.prelude).strip(),
            declarations=declarations,
            loc=Location(source_index, rule.source_line, rule.source_column),
        )

    def minify(self, context: MinifyOptions, parent_is_unused: bool) -> None:
        pass

    def is_empty(self) -> bool:
        return not self.declarations

    def to_css(self, dest: Printer) -> None:
        dest.add_mapping(self.loc)
        dest.write_str(self.selector)
        dest.whitespace()
        dest.write_char("{")
        dest.indent()
        for i, declaration in enumerate(self.declarations):
            dest.newline()
            declaration.to_css(dest)
            if i < len(self.declarations) - 1 or not dest.minify:
                dest.write_char(";")
        dest.dedent()
        dest.newline()
        dest.write_char("}")


@dataclass
class UnknownAtRule:
    """Any other at-rule, reprinted verbatim."""

    name: str
    prelude: str
    block: str | None
    loc: Location

    @classmethod
    def parse(cls, rule: AtRule, source_index: int = 0) -> UnknownAtRule:
        return cls(
            name=rule.at_keyword,
            prelude=tinycss2.serialize(rule.prelude).strip(),
            block=None if rule.content is None else tinycss2.serialize(rule.content).strip(),
            loc=Location(source_index, rule.source_line, rule.source_column),
        )

    def minify(self, context: MinifyOptions, parent_is_unused: bool) -> None:
        pass

    def is_empty(self) -> bool:
        return False

    def to_css(self, dest: Printer) -> None:
        dest.add_mapping(self.loc)
        dest.write_char("@")
        dest.write_str(serialize_identifier(self.name))
        if self.prelude:
            dest.write_char(" ")
            dest.write_str(self.prelude)
        if self.block is None:
            dest.write_char(";")
            return
        dest.whitespace()
        dest.write_char("{")
        dest.write_str(self.block)
        dest.write_char("}")


def parse_rule_list(
    content: Sequence[Node], source_index: int = 0, source: SourceText | None = None
) -> CssRuleList:
    """Parse the content of a block into a :class:`CssRuleList`."""
    nodes = tinycss2.parse_rule_list(content, skip_comments=True, skip_whitespace=True)
    return build_rule_list(nodes, source_index, source)


def build_rule_list(
    nodes: Sequence[Node], source_index: int = 0, source: SourceText | None = None
) -> CssRuleList:
    """Build a :class:`CssRuleList` from parsed tinycss2 rule nodes."""
    rules: list[CssRule] = []
    for node in nodes:
        if node.type == "error":
            raise ParseError(node.message, node.source_line, node.source_column)
        if node.type == "at-rule" and node.lower_at_keyword == "supports":
            rules.append(SupportsRule.parse(node, source_index, source))
        elif node.type == "at-rule":
            rules.append(UnknownAtRule.parse(node, source_index))
        else:
            rules.append(StyleRule.parse(node, source_index))
    return CssRuleList(rules)
