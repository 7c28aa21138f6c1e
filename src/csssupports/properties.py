"""Property identifiers with vendor prefix tracking."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from tinycss2.serializer import serialize_identifier

from csssupports.compat import is_prefixable, prefixes_for
from csssupports.targets import Browsers
from csssupports.vendor_prefix import VendorPrefix

__all__ = ["PropertyId"]

logger = logging.getLogger(__name__)

_PREFIXED_RE = re.compile(r"^-(?P<prefix>webkit|moz|ms|o)-(?P<name>.+)$")


@dataclass
class PropertyId:
    """A property name plus the vendor prefixes it is spelled with.

    Prefixable properties are stored unprefixed with the prefix split out
    into ``prefix``. Anything else (custom properties, unknown prefixed
    names) keeps its full name and an empty prefix set.
    """

    name: str
    prefix: VendorPrefix = field(default=VendorPrefix.NONE)

    @classmethod
    def from_name(cls, raw: str) -> PropertyId:
        """Resolve raw property name text into a canonical identifier."""
        if raw.startswith("--"):
            return cls(name=raw, prefix=VendorPrefix.empty())

        lowered = raw.lower()
        match = _PREFIXED_RE.match(lowered)
        if match is None:
            return cls(name=lowered, prefix=VendorPrefix.NONE)
        if is_prefixable(match.group("name")):
            return cls(
                name=match.group("name"),
                prefix=VendorPrefix.from_str(match.group("prefix")),
            )
        return cls(name=lowered, prefix=VendorPrefix.empty())

    def set_prefixes_for_targets(self, targets: Browsers) -> None:
        """Recompute the prefix set from the compatibility table."""
        if not is_prefixable(self.name):
            return
        prefix = prefixes_for(self.name, targets)
        if prefix != self.prefix:
            logger.debug(
                "Expanded %s prefixes for %s: %s", self.name, targets, prefix.names()
            )
        self.prefix = prefix

    def spellings(self) -> list[str]:
        """Return the serialized name for every prefix in canonical order."""
        return [p.to_css() + serialize_identifier(self.name) for p in self.prefix.or_none()]

    def to_dict(self) -> dict[str, object]:
        return {"property": self.name, "vendorPrefix": self.prefix.names()}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> PropertyId:
        prefix = VendorPrefix.empty()
        for name in data.get("vendorPrefix", []):  # type: ignore[union-attr]
            prefix |= VendorPrefix.from_str(str(name))
        return cls(name=str(data["property"]), prefix=prefix)
