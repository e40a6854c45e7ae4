"""Exceptions raised by the config editor."""

from __future__ import annotations


class ConfigEditError(Exception):
    """Base class for every error raised by :mod:`hoconedit`."""


class UnterminatedSectionError(ConfigEditError):
    def __init__(self, section: str, line: int):
        super().__init__(f"Unterminated section '{section}' opened at line {line}")
        self.section = section
        self.line = line


__all__ = ["ConfigEditError", "UnterminatedSectionError"]
