"""The ``<supports-condition>`` tree: parsing, combining, prefixing and printing.

Grammar:
    SupportsCondition = 'not' InParens
                      | InParens ( 'and' InParens )*
                      | InParens ( 'or' InParens )*
    InParens          = '(' SupportsCondition ')'
                      | '(' Declaration ')'
                      | 'selector(' any-value ')'
                      | GeneralEnclosed
    Declaration       = ident ':' any-value

``and`` and ``or`` may not be mixed at one level without parentheses. A
well-formed block that matches nothing else is kept verbatim as ``unknown``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from csssupports.config import PrinterOptions
from csssupports.printer import Printer
from csssupports.properties import PropertyId
from csssupports.targets import Browsers
from csssupports.tokens import TokenCursor, tokenize
from csssupports.vendor_prefix import VendorPrefix

__all__ = ["ConditionKind", "SupportsCondition", "parse_supports_condition"]

logger = logging.getLogger(__name__)


class ConditionKind(StrEnum):
    """Discriminator for supports condition variants."""

    NOT = "not"
    AND = "and"
    OR = "or"
    DECLARATION = "declaration"
    SELECTOR = "selector"
    UNKNOWN = "unknown"


_OPERATORS = {"and": ConditionKind.AND, "or": ConditionKind.OR}


@dataclass
class SupportsCondition:
    """A supports condition (tagged union).

    Payload by kind:
        not:          ``condition``
        and / or:     ``conditions`` (two or more members)
        declaration:  ``property_id`` and the raw ``value``
        selector:     raw selector text in ``value``
        unknown:      raw source text in ``value``

    Equality is structural. Conditions are mutable: the combinators and
    :meth:`set_prefixes_for_targets` rewrite them in place, so callers must
    not hold references into a tree while it is being changed.
    """

    kind: ConditionKind
    condition: SupportsCondition | None = None
    conditions: list[SupportsCondition] = field(default_factory=list)
    property_id: PropertyId | None = None
    value: str | None = None

    # --- factories ------------------------------------------------------------

    @classmethod
    def negation(cls, condition: SupportsCondition) -> SupportsCondition:
        return cls(kind=ConditionKind.NOT, condition=condition)

    @classmethod
    def conjunction(cls, conditions: list[SupportsCondition]) -> SupportsCondition:
        return cls(kind=ConditionKind.AND, conditions=conditions)

    @classmethod
    def disjunction(cls, conditions: list[SupportsCondition]) -> SupportsCondition:
        return cls(kind=ConditionKind.OR, conditions=conditions)

    @classmethod
    def declaration(cls, property_id: PropertyId | str, value: str) -> SupportsCondition:
        if isinstance(property_id, str):
            property_id = PropertyId.from_name(property_id)
        return cls(kind=ConditionKind.DECLARATION, property_id=property_id, value=value)

    @classmethod
    def selector(cls, text: str) -> SupportsCondition:
        return cls(kind=ConditionKind.SELECTOR, value=text)

    @classmethod
    def unknown(cls, text: str) -> SupportsCondition:
        return cls(kind=ConditionKind.UNKNOWN, value=text)

    # --- combinators ----------------------------------------------------------

    def and_(self, other: SupportsCondition) -> SupportsCondition:
        """Combine *other* into this condition with ``and``, in place."""
        return self._combine(ConditionKind.AND, other)

    def or_(self, other: SupportsCondition) -> SupportsCondition:
        """Combine *other* into this condition with ``or``, in place."""
        return self._combine(ConditionKind.OR, other)

    def _combine(self, kind: ConditionKind, other: SupportsCondition) -> SupportsCondition:
        if self.kind is kind:
            if other not in self.conditions:
                self.conditions.append(copy.deepcopy(other))
        elif self != other:
            previous = copy.deepcopy(self)
            self._replace(
                SupportsCondition(kind=kind, conditions=[previous, copy.deepcopy(other)])
            )
        return self

    def _replace(self, new: SupportsCondition) -> None:
        self.kind = new.kind
        self.condition = new.condition
        self.conditions = new.conditions
        self.property_id = new.property_id
        self.value = new.value

    # --- vendor prefixes ------------------------------------------------------

    def set_prefixes_for_targets(self, targets: Browsers) -> None:
        """Resolve the prefixes each unprefixed declaration needs for *targets*."""
        if self.kind is ConditionKind.NOT:
            assert self.condition is not None
            self.condition.set_prefixes_for_targets(targets)
        elif self.kind in (ConditionKind.AND, ConditionKind.OR):
            for item in self.conditions:
                item.set_prefixes_for_targets(targets)
        elif self.kind is ConditionKind.DECLARATION:
            assert self.property_id is not None
            prefix = self.property_id.prefix
            if not prefix or VendorPrefix.NONE in prefix:
                self.property_id.set_prefixes_for_targets(targets)

    # --- parsing --------------------------------------------------------------

    @classmethod
    def parse(cls, cursor: TokenCursor) -> SupportsCondition:
        """Parse a condition at the cursor, stopping before any mixed operator."""
        if cursor.try_parse(lambda i: i.expect_ident_matching("not")) is not None:
            return cls.negation(cls.parse_in_parens(cursor))

        first = cls.parse_in_parens(cursor)
        kind: ConditionKind | None = None
        conditions: list[SupportsCondition] = []

        while True:
            found = cursor.try_parse(lambda i, k=kind: cls._parse_operand(i, k))
            if found is None:
                break
            kind, condition = found
            if not conditions:
                conditions.append(first)
            conditions.append(condition)

        if kind is None:
            return first
        return cls(kind=kind, conditions=conditions)

    @classmethod
    def _parse_operand(
        cls, cursor: TokenCursor, expected: ConditionKind | None
    ) -> tuple[ConditionKind, SupportsCondition]:
        node = cursor.next()
        found = _OPERATORS.get(node.lower_value) if node.type == "ident" else None
        if found is None or (expected is not None and found is not expected):
            raise cursor.error("Expected 'and' or 'or'", node)
        return found, cls.parse_in_parens(cursor)

    @classmethod
    def parse_in_parens(cls, cursor: TokenCursor) -> SupportsCondition:
        """Parse a parenthesized or function-form unit."""
        cursor.skip_whitespace()
        pos = cursor.position
        token = cursor.next()

        if token.type == "function":
            if token.lower_name == "selector":
                result = cursor.try_parse(lambda i: i.parse_nested_block(cls._parse_selector))
                if result is not None:
                    return result
        elif token.type == "() block":
            result = cursor.try_parse(lambda i: i.parse_nested_block(cls._parse_block))
            if result is not None:
                return result
        else:
            raise cursor.error(f"Unexpected {token.type} in supports condition", token)

        cursor.parse_nested_block(lambda i: i.expect_no_error_token())
        text = cursor.slice_from(pos)
        logger.debug("Keeping unrecognized supports condition %r verbatim", text)
        return cls.unknown(text)

    @classmethod
    def _parse_selector(cls, cursor: TokenCursor) -> SupportsCondition:
        pos = cursor.position
        cursor.expect_no_error_token()
        return cls.selector(cursor.slice_rest(pos))

    @classmethod
    def _parse_block(cls, cursor: TokenCursor) -> SupportsCondition:
        condition = cursor.try_parse(cls._parse_entire)
        if condition is not None:
            return condition
        return cls.parse_declaration(cursor)

    @classmethod
    def _parse_entire(cls, cursor: TokenCursor) -> SupportsCondition:
        condition = cls.parse(cursor)
        cursor.expect_exhausted()
        return condition

    @classmethod
    def parse_declaration(cls, cursor: TokenCursor) -> SupportsCondition:
        """Parse ``property: value`` up to the end of the current block."""
        property_id = PropertyId.from_name(cursor.expect_ident())
        cursor.expect_colon()
        cursor.skip_whitespace()
        pos = cursor.position
        cursor.expect_no_error_token()
        return cls.declaration(property_id, cursor.slice_rest(pos).rstrip())

    # --- printing -------------------------------------------------------------

    def needs_parens(self, parent: SupportsCondition) -> bool:
        if self.kind is ConditionKind.NOT:
            return True
        if self.kind is ConditionKind.AND:
            return parent.kind is not ConditionKind.AND
        if self.kind is ConditionKind.OR:
            return parent.kind is not ConditionKind.OR
        return False

    def _to_css_with_parens_if_needed(self, dest: Printer, needs_parens: bool) -> None:
        if needs_parens:
            dest.write_char("(")
        self.to_css(dest)
        if needs_parens:
            dest.write_char(")")

    def to_css(self, dest: Printer) -> None:
        """Write the condition with the fewest parentheses that keep its meaning."""
        if self.kind is ConditionKind.NOT:
            assert self.condition is not None
            dest.write_str("not ")
            self.condition._to_css_with_parens_if_needed(
                dest, self.condition.needs_parens(self)
            )
        elif self.kind in (ConditionKind.AND, ConditionKind.OR):
            separator = f" {self.kind.value} "
            for i, condition in enumerate(self.conditions):
                if i:
                    dest.write_str(separator)
                condition._to_css_with_parens_if_needed(dest, condition.needs_parens(self))
        elif self.kind is ConditionKind.DECLARATION:
            self._declaration_to_css(dest)
        elif self.kind is ConditionKind.SELECTOR:
            dest.write_str("selector(")
            dest.write_str(self.value or "")
            dest.write_char(")")
        else:
            dest.write_str(self.value or "")

    def _declaration_to_css(self, dest: Printer) -> None:
        assert self.property_id is not None
        dest.write_char("(")

        # Several prefixes print as a nested disjunction, one clause per spelling.
        prefixed = self.property_id.prefix.or_none() != VendorPrefix.NONE
        if prefixed:
            dest.write_char("(")

        for i, name in enumerate(self.property_id.spellings()):
            if i:
                dest.write_str(") or (")
            dest.write_str(name)
            dest.delim(":", False)
            dest.write_str(self.value or "")

        if prefixed:
            dest.write_char(")")
        dest.write_char(")")

    def to_css_string(self, options: PrinterOptions | None = None) -> str:
        printer = Printer(options=options)
        self.to_css(printer)
        return printer.getvalue()

    def __str__(self) -> str:
        return self.to_css_string()

    # --- interchange ----------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict tagged by ``type``."""
        data: dict[str, Any] = {"type": self.kind.value}
        if self.kind is ConditionKind.NOT:
            assert self.condition is not None
            data["value"] = self.condition.to_dict()
        elif self.kind in (ConditionKind.AND, ConditionKind.OR):
            data["value"] = [c.to_dict() for c in self.conditions]
        elif self.kind is ConditionKind.DECLARATION:
            assert self.property_id is not None
            data["propertyId"] = self.property_id.to_dict()
            data["value"] = self.value
        else:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SupportsCondition:
        """Inverse of :meth:`to_dict`.

        Raises ValueError for an unknown ``type`` or an ``and`` / ``or`` record
        with fewer than two members.
        """
        kind = ConditionKind(data["type"])
        if kind is ConditionKind.NOT:
            return cls.negation(cls.from_dict(data["value"]))
        if kind in (ConditionKind.AND, ConditionKind.OR):
            if len(data["value"]) < 2:
                raise ValueError(f"{kind.value!r} needs at least two conditions")
            return cls(kind=kind, conditions=[cls.from_dict(c) for c in data["value"]])
        if kind is ConditionKind.DECLARATION:
            return cls.declaration(PropertyId.from_dict(data["propertyId"]), data["value"])
        return cls(kind=kind, value=data["value"])


def parse_supports_condition(source: str) -> SupportsCondition:
    """Parse a complete condition, such as an ``@supports`` prelude.

    Raises :class:`ParseError` if anything other than whitespace follows the
    condition, including an operator mixed in without parentheses.
    """
    cursor = tokenize(source)
    condition = SupportsCondition.parse(cursor)
    cursor.expect_exhausted()
    return condition

