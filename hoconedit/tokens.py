"""Line tokens for the lossless config editor.

Every token keeps the exact source line in ``raw``; the structural attributes
(section name, key, value) are derived from it on demand so they can never
drift from what gets written back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SECTION_NAME = re.compile(r'\s*"?([A-Za-z0-9_-]+)"?')
_SEPARATOR = re.compile(r"[=:]")


@dataclass(frozen=True, slots=True)
class OpaqueToken:
    """Blank lines, comments, array contents and anything else left as-is."""

    raw: str


@dataclass(frozen=True, slots=True)
class SectionStartToken:
    raw: str

    @property
    def name(self) -> str:
        match = _SECTION_NAME.match(self.raw)
        if match is None:
            return self.raw.strip().replace('"', "")
        return match.group(1)

    @classmethod
    def build(cls, name: str, indent: str = "") -> "SectionStartToken":
        return cls(f"{indent}{name} {{")


@dataclass(frozen=True, slots=True)
class SectionEndToken:
    raw: str

    @classmethod
    def build(cls, indent: str = "") -> "SectionEndToken":
        return cls(f"{indent}}}")


@dataclass(frozen=True, slots=True)
class KeyValueToken:
    raw: str

    def _split(self) -> tuple[str, str]:
        match = _SEPARATOR.search(self.raw)
        if match is None:
            return self.raw, ""
        return self.raw[: match.end()], self.raw[match.end() :]

    @property
    def key(self) -> str:
        prefix, _ = self._split()
        return prefix.rstrip("=:").strip()

    @property
    def value(self) -> str:
        _, value = self._split()
        return value.strip()

    def with_value(self, value: str) -> "KeyValueToken":
        """Swap the value, keeping indentation, key, separator and a CRLF ``\\r`` verbatim."""
        prefix, old_value = self._split()
        terminator = "\r" if old_value.endswith("\r") else ""
        return KeyValueToken(prefix + value + terminator)

    @classmethod
    def build(cls, key: str, value: str, indent: str = "") -> "KeyValueToken":
        return cls(f"{indent}{key} = {value}")


Token = OpaqueToken | SectionStartToken | SectionEndToken | KeyValueToken


__all__ = ["OpaqueToken", "SectionStartToken", "SectionEndToken", "KeyValueToken", "Token"]
