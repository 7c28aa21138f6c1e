"""Vendor prefix flags for property names."""

from __future__ import annotations

from enum import Flag


class VendorPrefix(Flag):
    """A set of vendor prefixes.

    ``NONE`` is the unprefixed (standard) spelling. An empty set means the
    prefix is unknown and behaves like ``NONE`` when printed.
    """

    NONE = 1
    WEBKIT = 2
    MOZ = 4
    MS = 8
    O = 16

    @classmethod
    def empty(cls) -> VendorPrefix:
        return cls(0)

    @classmethod
    def from_str(cls, prefix: str) -> VendorPrefix:
        """Return the flag for a prefix string like ``"webkit"``."""
        return _BY_NAME.get(prefix.lower(), cls.NONE)

    def or_none(self) -> VendorPrefix:
        """Return ``NONE`` for an empty set, otherwise ``self``."""
        return self if self else VendorPrefix.NONE

    def __iter__(self):
        # Prefixed spellings come first so the standard one wins in cascade order.
        for member in _CANONICAL_ORDER:
            if member in self:
                yield member

    def to_css(self) -> str:
        """Return the dash-wrapped prefix, or ``""`` for ``NONE``."""
        if self is VendorPrefix.NONE:
            return ""
        return f"-{self.name.lower()}-"

    def names(self) -> list[str]:
        """Return lower-case names in canonical order, for interchange."""
        return [member.name.lower() for member in self]


_CANONICAL_ORDER = (
    VendorPrefix.WEBKIT,
    VendorPrefix.MOZ,
    VendorPrefix.MS,
    VendorPrefix.O,
    VendorPrefix.NONE,
)

_BY_NAME = {member.name.lower(): member for member in _CANONICAL_ORDER}
