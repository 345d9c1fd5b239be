from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Iterable, Optional, Tuple

_VERSION_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)


class BumpType(str, Enum):
    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return _RANK[self]

    @classmethod
    def parse(cls, value) -> "BumpType":
        if isinstance(value, cls):
            return value
        if value is None:
            raise ValueError("missing bump type (expected major, minor, patch or none)")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"invalid bump type {value!r} (expected major, minor, patch or none)") from None


_RANK = {BumpType.NONE: 0, BumpType.PATCH: 1, BumpType.MINOR: 2, BumpType.MAJOR: 3}


def max_bump(bumps: Iterable[BumpType]) -> BumpType:
    best = BumpType.NONE
    for b in bumps:
        if b.rank > best.rank:
            best = b
    return best


def _prerelease_key(prerelease: Optional[str]) -> Tuple:
    # a release sorts above every prerelease of the same core version
    if not prerelease:
        return (1,)
    parts = []
    for ident in prerelease.split("."):
        if ident.isdigit():
            parts.append((0, int(ident), ""))
        else:
            parts.append((1, 0, ident))
    return (0, tuple(parts))


@total_ordering
@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.prerelease}" if self.prerelease else base

    def _key(self) -> Tuple:
        return (self.major, self.minor, self.patch, _prerelease_key(self.prerelease))

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()


def parse_version(value: str) -> Version:
    m = _VERSION_RE.match(str(value).strip())
    if not m:
        raise ValueError(f"not a semantic version: {value!r}")
    return Version(int(m["major"]), int(m["minor"]), int(m["patch"]), m["pre"])


def bump_version(value: str, bump: BumpType) -> str:
    bump = BumpType.parse(bump)
    if bump == BumpType.NONE:
        return value

    v = parse_version(value)
    if v.prerelease:
        # releasing a prerelease: 1.3.0-beta.1 + patch -> 1.3.0
        if bump == BumpType.PATCH:
            return str(Version(v.major, v.minor, v.patch))
        if bump == BumpType.MINOR and v.patch == 0:
            return str(Version(v.major, v.minor, 0))
        if bump == BumpType.MAJOR and v.minor == 0 and v.patch == 0:
            return str(Version(v.major, 0, 0))

    if bump == BumpType.MAJOR:
        return str(Version(v.major + 1, 0, 0))
    if bump == BumpType.MINOR:
        return str(Version(v.major, v.minor + 1, 0))
    return str(Version(v.major, v.minor, v.patch + 1))
