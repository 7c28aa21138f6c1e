"""Tests for browser targets, prefix data and the prefix expansion pass."""

import pytest

from csssupports.compat import prefixes_for
from csssupports.condition import SupportsCondition, parse_supports_condition
from csssupports.properties import PropertyId
from csssupports.targets import Browsers, encode_version, format_version
from csssupports.vendor_prefix import VendorPrefix


# ---------------------------------------------------------------------------
# Browsers
# ---------------------------------------------------------------------------


class TestVersions:
    def test_encode(self):
        assert encode_version("15.4") == (15 << 16) | (4 << 8)
        assert encode_version("100") == 100 << 16

    def test_format(self):
        assert format_version(encode_version("15.4.1")) == "15.4.1"
        assert format_version(encode_version("12")) == "12"


class TestBrowsersParse:
    def test_query(self):
        targets = Browsers.parse("safari 15.4, chrome 100")
        assert targets.safari == encode_version("15.4")
        assert targets.chrome == encode_version("100")
        assert targets.firefox is None

    def test_alias(self):
        assert Browsers.parse("ios 14").ios_saf == encode_version("14")

    def test_lowest_version_wins(self):
        assert Browsers.parse("firefox 90, firefox 70").firefox == encode_version("70")

    def test_str(self):
        assert str(Browsers.parse("safari 15.4, chrome 100")) == "chrome 100, safari 15.4"

    @pytest.mark.parametrize("query", ["safari", "netscape 4", "chrome latest"])
    def test_invalid(self, query):
        with pytest.raises(ValueError):
            Browsers.parse(query)


# ---------------------------------------------------------------------------
# Compat table and property ids
# ---------------------------------------------------------------------------


class TestPrefixesFor:
    def test_old_safari_needs_webkit(self):
        prefix = prefixes_for("backdrop-filter", Browsers.parse("safari 15"))
        assert prefix == VendorPrefix.WEBKIT | VendorPrefix.NONE

    def test_new_safari_does_not(self):
        assert prefixes_for("backdrop-filter", Browsers.parse("safari 18")) == VendorPrefix.NONE

    def test_untargeted_browser_is_ignored(self):
        assert prefixes_for("backdrop-filter", Browsers.parse("chrome 90")) == VendorPrefix.NONE

    def test_several_prefixes(self):
        prefix = prefixes_for("user-select", Browsers.parse("safari 15, firefox 60"))
        assert list(prefix) == [VendorPrefix.WEBKIT, VendorPrefix.MOZ, VendorPrefix.NONE]

    def test_unknown_property(self):
        assert prefixes_for("display", Browsers.parse("ie 11")) == VendorPrefix.NONE


class TestPropertyId:
    def test_unprefixed(self):
        assert PropertyId.from_name("Display") == PropertyId("display", VendorPrefix.NONE)

    def test_known_prefix_is_split(self):
        assert PropertyId.from_name("-moz-appearance") == PropertyId("appearance", VendorPrefix.MOZ)

    def test_unknown_prefixed_name_is_kept(self):
        prop = PropertyId.from_name("-webkit-tap-highlight-color")
        assert prop == PropertyId("-webkit-tap-highlight-color", VendorPrefix.empty())

    def test_spellings(self):
        prop = PropertyId("hyphens", VendorPrefix.NONE | VendorPrefix.MS | VendorPrefix.WEBKIT)
        assert prop.spellings() == ["-webkit-hyphens", "-ms-hyphens", "hyphens"]

    def test_set_prefixes_for_targets(self):
        prop = PropertyId.from_name("mask-image")
        prop.set_prefixes_for_targets(Browsers.parse("chrome 100"))
        assert prop.prefix == VendorPrefix.WEBKIT | VendorPrefix.NONE

    def test_set_prefixes_skips_unknown_property(self):
        prop = PropertyId.from_name("--x")
        prop.set_prefixes_for_targets(Browsers.parse("chrome 10"))
        assert prop.prefix == VendorPrefix.empty()


# ---------------------------------------------------------------------------
# Expansion pass
# ---------------------------------------------------------------------------


SAFARI_15 = Browsers.parse("safari 15")


class TestExpansion:
    def test_two_prefixes_print_as_disjunction(self):
        cond = parse_supports_condition("(backdrop-filter: blur(10px))")
        cond.set_prefixes_for_targets(SAFARI_15)
        assert str(cond) == (
            "((-webkit-backdrop-filter: blur(10px)) or (backdrop-filter: blur(10px)))"
        )

    def test_tree_shape_is_unchanged(self):
        cond = parse_supports_condition("(backdrop-filter: blur(10px))")
        cond.set_prefixes_for_targets(SAFARI_15)
        assert cond.property_id.prefix == VendorPrefix.WEBKIT | VendorPrefix.NONE
        assert cond.value == "blur(10px)"

    def test_single_prefix_is_untouched(self):
        cond = parse_supports_condition("(backdrop-filter: blur(10px))")
        cond.set_prefixes_for_targets(Browsers.parse("safari 18"))
        assert str(cond) == "(backdrop-filter: blur(10px))"

    def test_recurses_through_not_and_lists(self):
        cond = parse_supports_condition(
            "not ((display: grid) and ((appearance: none) or selector(a)))"
        )
        cond.set_prefixes_for_targets(Browsers.parse("firefox 70"))
        assert str(cond) == (
            "not ((display: grid) and "
            "(((-moz-appearance: none) or (appearance: none)) or selector(a)))"
        )

    def test_explicit_prefix_is_kept(self):
        cond = parse_supports_condition("(-webkit-backdrop-filter: blur(1px))")
        cond.set_prefixes_for_targets(SAFARI_15)
        assert cond.property_id.prefix == VendorPrefix.WEBKIT

    def test_other_leaves_are_noops(self):
        cond = SupportsCondition.disjunction(
            [SupportsCondition.selector("a"), SupportsCondition.unknown("(x y)")]
        )
        cond.set_prefixes_for_targets(SAFARI_15)
        assert str(cond) == "selector(a) or (x y)"
