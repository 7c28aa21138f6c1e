"""Vendor prefix compatibility data for prefixable properties.

Each entry maps a prefix to the browsers that need it, with the first
version (encoded) that no longer requires the prefix. ``None`` means every
version still requires it.
"""

from __future__ import annotations

from csssupports.targets import Browsers, encode_version
from csssupports.vendor_prefix import VendorPrefix

__all__ = ["PREFIXES", "is_prefixable", "prefixes_for"]


def _v(version: str) -> int:
    return encode_version(version)


_Table = dict[str, dict[VendorPrefix, dict[str, int | None]]]

PREFIXES: _Table = {
    "appearance": {
        VendorPrefix.WEBKIT: {
            "android": _v("84"),
            "chrome": _v("84"),
            "edge": _v("84"),
            "ios_saf": _v("15.4"),
            "opera": _v("70"),
            "safari": _v("15.4"),
            "samsung": _v("14"),
        },
        VendorPrefix.MOZ: {"firefox": _v("80")},
    },
    "backdrop-filter": {
        VendorPrefix.WEBKIT: {"ios_saf": _v("18"), "safari": _v("18")},
    },
    "box-decoration-break": {
        VendorPrefix.WEBKIT: {
            "android": _v("130"),
            "chrome": _v("130"),
            "edge": _v("130"),
            "ios_saf": None,
            "opera": _v("116"),
            "safari": None,
            "samsung": None,
        },
    },
    "clip-path": {
        VendorPrefix.WEBKIT: {
            "android": _v("55"),
            "chrome": _v("55"),
            "ios_saf": _v("13"),
            "opera": _v("42"),
            "safari": _v("13.1"),
            "samsung": _v("6"),
        },
    },
    "hyphens": {
        VendorPrefix.WEBKIT: {"ios_saf": _v("17"), "safari": _v("17")},
        VendorPrefix.MOZ: {"firefox": _v("43")},
        VendorPrefix.MS: {"edge": _v("79"), "ie": None},
    },
    "mask-image": {
        VendorPrefix.WEBKIT: {
            "android": _v("120"),
            "chrome": _v("120"),
            "edge": _v("120"),
            "ios_saf": _v("15.4"),
            "opera": _v("106"),
            "safari": _v("15.4"),
            "samsung": _v("25"),
        },
    },
    "text-size-adjust": {
        VendorPrefix.WEBKIT: {"ios_saf": None},
        VendorPrefix.MOZ: {"firefox": None},
        VendorPrefix.MS: {"edge": _v("79")},
    },
    "user-select": {
        VendorPrefix.WEBKIT: {
            "android": _v("54"),
            "chrome": _v("54"),
            "ios_saf": None,
            "opera": _v("41"),
            "safari": None,
            "samsung": _v("6"),
        },
        VendorPrefix.MOZ: {"firefox": _v("69")},
        VendorPrefix.MS: {"edge": _v("79"), "ie": None},
    },
}


def is_prefixable(name: str) -> bool:
    """Return True if *name* (unprefixed, lower-case) has prefix data."""
    return name in PREFIXES


def prefixes_for(name: str, browsers: Browsers) -> VendorPrefix:
    """Return the prefixes *name* needs for *browsers*, always including ``NONE``."""
    result = VendorPrefix.NONE
    for prefix, support in PREFIXES.get(name, {}).items():
        for browser, version in browsers.items():
            if browser not in support:
                continue
            unprefixed_since = support[browser]
            if unprefixed_since is None or version < unprefixed_since:
                result |= prefix
                break
    return result
