"""Tests for the supports condition parser."""

import pytest

from csssupports.condition import ConditionKind, SupportsCondition, parse_supports_condition
from csssupports.errors import ParseError
from csssupports.properties import PropertyId
from csssupports.tokens import tokenize
from csssupports.vendor_prefix import VendorPrefix


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _decl(name: str, value: str) -> SupportsCondition:
    return SupportsCondition.declaration(name, value)


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


class TestDeclaration:
    def test_simple_declaration(self):
        cond = parse_supports_condition("(display: flex)")
        assert cond.kind is ConditionKind.DECLARATION
        assert cond.property_id == PropertyId("display", VendorPrefix.NONE)
        assert cond.value == "flex"

    def test_whitespace_around_parts(self):
        cond = parse_supports_condition("(  display :   flex   )")
        assert cond == _decl("display", "flex")

    def test_value_is_kept_raw(self):
        cond = parse_supports_condition("(transform: translate(10px, 20px) rotate(3deg))")
        assert cond.value == "translate(10px, 20px) rotate(3deg)"

    def test_property_name_is_lowercased(self):
        cond = parse_supports_condition("(DISPLAY: grid)")
        assert cond.property_id.name == "display"

    def test_prefixed_property(self):
        cond = parse_supports_condition("(-webkit-backdrop-filter: blur(2px))")
        assert cond.property_id == PropertyId("backdrop-filter", VendorPrefix.WEBKIT)

    def test_custom_property(self):
        cond = parse_supports_condition("(--Accent: red)")
        assert cond.property_id == PropertyId("--Accent", VendorPrefix.empty())
        assert cond.value == "red"

    def test_redundant_parens(self):
        assert parse_supports_condition("((display: flex))") == _decl("display", "flex")


class TestSelector:
    def test_selector_function(self):
        cond = parse_supports_condition("selector(:has(a))")
        assert cond == SupportsCondition.selector(":has(a)")

    def test_selector_name_ignores_case(self):
        cond = parse_supports_condition("SELECTOR(a > b)")
        assert cond.kind is ConditionKind.SELECTOR
        assert cond.value == "a > b"

    def test_selector_inside_parens(self):
        cond = parse_supports_condition("(selector(div))")
        assert cond == SupportsCondition.selector("div")


class TestUnknown:
    def test_unrecognized_block_is_kept_verbatim(self):
        cond = parse_supports_condition("(100px: 100px)")
        assert cond == SupportsCondition.unknown("(100px: 100px)")

    def test_other_function_is_kept_verbatim(self):
        cond = parse_supports_condition("font-tech(color-COLRv1)")
        assert cond == SupportsCondition.unknown("font-tech(color-COLRv1)")

    def test_block_without_colon(self):
        cond = parse_supports_condition("(display flex)")
        assert cond.kind is ConditionKind.UNKNOWN
        assert cond.value == "(display flex)"

    def test_unknown_combines_with_known(self):
        cond = parse_supports_condition("(display: grid) or (foo bar)")
        assert cond == SupportsCondition.disjunction(
            [_decl("display", "grid"), SupportsCondition.unknown("(foo bar)")]
        )

    def test_mixed_operators_inside_block_fall_back(self):
        cond = parse_supports_condition("((a: 1) and (b: 2) or (c: 3))")
        assert cond == SupportsCondition.unknown("((a: 1) and (b: 2) or (c: 3))")


class TestRawText:
    def test_unknown_keeps_quotes(self):
        cond = parse_supports_condition("(foo 'bar')")
        assert cond == SupportsCondition.unknown("(foo 'bar')")

    def test_unknown_keeps_comments(self):
        cond = parse_supports_condition("(foo /* keep */ bar)")
        assert cond.value == "(foo /* keep */ bar)"

    def test_unknown_followed_by_operator(self):
        cond = parse_supports_condition("(foo 'a')/* x */ and (b: 1)")
        assert cond == SupportsCondition.conjunction(
            [SupportsCondition.unknown("(foo 'a')"), _decl("b", "1")]
        )

    def test_unknown_spanning_lines(self):
        cond = parse_supports_condition("(display: grid)\nor\n(foo\n  'x')")
        assert cond.conditions[1] == SupportsCondition.unknown("(foo\n  'x')")

    def test_declaration_value_keeps_quotes(self):
        cond = parse_supports_condition("(content: 'x')")
        assert cond.value == "'x'"
        assert str(cond) == "(content: 'x')"

    def test_declaration_value_keeps_trailing_comment(self):
        cond = parse_supports_condition("(a: 1 /* note */)")
        assert cond.value == "1 /* note */"

    def test_selector_keeps_quotes(self):
        cond = parse_supports_condition("selector([data-x='y'])")
        assert cond == SupportsCondition.selector("[data-x='y']")

    def test_selector_keeps_surrounding_text(self):
        cond = parse_supports_condition("selector( /* lead */ a )")
        assert cond.value == " /* lead */ a "
        assert str(cond) == "selector( /* lead */ a )"

    def test_unclosed_block_at_end_of_input(self):
        assert parse_supports_condition("(display: grid") == _decl("display", "grid")


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class TestNot:
    def test_not_declaration(self):
        cond = parse_supports_condition("not (display: flex)")
        assert cond == SupportsCondition.negation(_decl("display", "flex"))

    def test_not_ignores_case(self):
        cond = parse_supports_condition("NOT (display: flex)")
        assert cond.kind is ConditionKind.NOT

    def test_nested_not(self):
        cond = parse_supports_condition("not (not (a: 1))")
        assert cond == SupportsCondition.negation(
            SupportsCondition.negation(_decl("a", "1"))
        )

    def test_not_does_not_take_siblings(self):
        cursor = tokenize("not (a: 1) and (b: 2)")
        cond = SupportsCondition.parse(cursor)
        assert cond == SupportsCondition.negation(_decl("a", "1"))
        assert not cursor.is_exhausted()

    def test_property_named_not(self):
        assert parse_supports_condition("(not: 1)") == _decl("not", "1")


class TestAndOr:
    def test_and(self):
        cond = parse_supports_condition("(a: 1) and (b: 2)")
        assert cond == SupportsCondition.conjunction([_decl("a", "1"), _decl("b", "2")])

    def test_or_keeps_source_order(self):
        cond = parse_supports_condition("(c: 3) or (a: 1) or (b: 2)")
        assert cond.kind is ConditionKind.OR
        assert [c.property_id.name for c in cond.conditions] == ["c", "a", "b"]

    def test_operator_ignores_case(self):
        cond = parse_supports_condition("(a: 1) AnD (b: 2)")
        assert cond.kind is ConditionKind.AND

    def test_single_operand_is_not_a_list(self):
        cond = parse_supports_condition("(a: 1)")
        assert cond.kind is ConditionKind.DECLARATION

    def test_grouping(self):
        cond = parse_supports_condition("((a: 1) or (b: 2)) and (c: 3)")
        assert cond == SupportsCondition.conjunction(
            [
                SupportsCondition.disjunction([_decl("a", "1"), _decl("b", "2")]),
                _decl("c", "3"),
            ]
        )

    def test_not_inside_and(self):
        cond = parse_supports_condition("(a: 1) and (not (b: 2))")
        assert cond.conditions[1] == SupportsCondition.negation(_decl("b", "2"))

    def test_mixed_operators_stop_the_list(self):
        cursor = tokenize("(a: 1) and (b: 2) or (c: 3)")
        cond = SupportsCondition.parse(cursor)
        assert cond == SupportsCondition.conjunction([_decl("a", "1"), _decl("b", "2")])
        assert not cursor.is_exhausted()
        cursor.expect_ident_matching("or")

    def test_dangling_operator_is_left_unconsumed(self):
        cursor = tokenize("(a: 1) and")
        cond = SupportsCondition.parse(cursor)
        assert cond == _decl("a", "1")
        assert not cursor.is_exhausted()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_mixed_operators_rejected_at_top_level(self):
        with pytest.raises(ParseError) as exc_info:
            parse_supports_condition("(a: 1) and (b: 2) or (c: 3)")
        assert exc_info.value.line == 1
        assert exc_info.value.column is not None

    def test_bare_declaration(self):
        with pytest.raises(ParseError):
            parse_supports_condition("display: flex")

    def test_empty_input(self):
        with pytest.raises(ParseError, match="end of input"):
            parse_supports_condition("")

    def test_not_without_operand(self):
        with pytest.raises(ParseError):
            parse_supports_condition("not")

    def test_unmatched_close_paren(self):
        with pytest.raises(ParseError):
            parse_supports_condition("(a: 1))")

    def test_error_token_in_block(self):
        with pytest.raises(ParseError):
            parse_supports_condition('(content: "a\n)')

    def test_error_token_in_selector(self):
        with pytest.raises(ParseError):
            parse_supports_condition("selector(a ])")

    def test_error_str_includes_location(self):
        with pytest.raises(ParseError) as exc_info:
            parse_supports_condition("display")
        assert "line 1" in str(exc_info.value)
