"""Browser targets used to decide which vendor prefixes are required."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

__all__ = ["Browsers", "encode_version", "format_version"]

_ALIASES = {
    "and_chr": "android",
    "ios": "ios_saf",
    "ios_safari": "ios_saf",
    "explorer": "ie",
    "ff": "firefox",
}

_QUERY_RE = re.compile(
    r"""
    ^\s*
    (?P<browser>[a-z_]+)             # browser name
    \s+
    (?P<version>\d+(?:\.\d+){0,2})   # major[.minor[.patch]]
    \s*$
    """,
    re.VERBOSE | re.IGNORECASE,
)


def encode_version(version: str) -> int:
    """Encode ``"major.minor.patch"`` as ``major << 16 | minor << 8 | patch``."""
    parts = [int(p) for p in version.split(".")]
    parts += [0] * (3 - len(parts))
    major, minor, patch = parts[:3]
    return (major << 16) | (minor << 8) | patch


def format_version(encoded: int) -> str:
    """Inverse of :func:`encode_version`, dropping trailing zero parts."""
    major, minor, patch = encoded >> 16, (encoded >> 8) & 0xFF, encoded & 0xFF
    if patch:
        return f"{major}.{minor}.{patch}"
    if minor:
        return f"{major}.{minor}"
    return str(major)


@dataclass(frozen=True)
class Browsers:
    """Minimum supported version per browser, encoded with :func:`encode_version`.

    ``None`` means the browser is not targeted.
    """

    android: int | None = None
    chrome: int | None = None
    edge: int | None = None
    firefox: int | None = None
    ie: int | None = None
    ios_saf: int | None = None
    opera: int | None = None
    safari: int | None = None
    samsung: int | None = None

    @classmethod
    def parse(cls, query: str) -> Browsers:
        """Build targets from a query like ``"safari 15.4, chrome 100"``.

        When a browser is listed more than once the lowest version wins.
        """
        known = {f.name for f in fields(cls)}
        versions: dict[str, int] = {}
        for entry in query.split(","):
            if not entry.strip():
                continue
            match = _QUERY_RE.match(entry)
            if match is None:
                raise ValueError(f"Invalid browser target: {entry.strip()!r}")
            name = match.group("browser").lower()
            name = _ALIASES.get(name, name)
            if name not in known:
                raise ValueError(f"Unknown browser: {name!r}")
            version = encode_version(match.group("version"))
            versions[name] = min(version, versions.get(name, version))
        return cls(**versions)

    def items(self) -> list[tuple[str, int]]:
        """Return ``(browser, version)`` pairs for every targeted browser."""
        return [
            (f.name, getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        ]

    def __str__(self) -> str:
        return ", ".join(f"{name} {format_version(v)}" for name, v in self.items())
