"""Line classifier and tokenizer for HOCON-like config files."""

from __future__ import annotations

import logging
import re
from enum import Enum, auto
from typing import Iterable, Iterator, NotRequired, Optional, TypedDict

from hoconedit.errors import UnterminatedSectionError
from hoconedit.logger import Logger
from hoconedit.tokens import KeyValueToken, OpaqueToken, SectionEndToken, SectionStartToken, Token
from hoconedit.utils import resolve_config


class LineKind(Enum):
    SECTION_START = auto()
    SECTION_END = auto()
    KEY_VALUE = auto()
    OPAQUE = auto()


SECTION_START = re.compile(r'\s*(?:"[A-Za-z0-9_-]+"|[A-Za-z0-9_-]+)[\s=]+\{\s*')
SECTION_END = re.compile(r"\s*\}\s*,?\s*")
KEY_VALUE = re.compile(r"\s*[A-Za-z0-9_-]+\s*[=:].*")


def classify_line(line: str) -> LineKind:
    # order matters: "key = {" is a section, not a key/value pair
    if SECTION_START.fullmatch(line):
        return LineKind.SECTION_START
    if SECTION_END.fullmatch(line):
        return LineKind.SECTION_END
    if KEY_VALUE.fullmatch(line):
        return LineKind.KEY_VALUE
    return LineKind.OPAQUE


class TokenizerConfig(TypedDict):
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]


class TokenizerConfigRequired(TypedDict):
    enable_logger: bool
    log_level: int


DEFAULT_CONFIG: TokenizerConfigRequired = {
    "enable_logger": True,
    "log_level": logging.INFO,
}


class ConfigTokenizer:
    """Single forward pass over the lines, keeping a stack of the sections still open."""

    def __init__(self, lines: Iterable[str], config: Optional[TokenizerConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger.for_component("hoconedit.tokenizer", self.config)
        self._lines: Iterator[str] = iter(lines)
        self._line_number = 0
        self.tokens: list[Token] = []

    def _next_line(self) -> Optional[str]:
        line = next(self._lines, None)
        if line is not None:
            self._line_number += 1
        return line

    def tokenize(self) -> list[Token]:
        open_sections: list[tuple[SectionStartToken, int]] = []
        while (line := self._next_line()) is not None:
            match classify_line(line):
                case LineKind.SECTION_START:
                    start = SectionStartToken(line)
                    open_sections.append((start, self._line_number))
                    self.tokens.append(start)
                case LineKind.SECTION_END if open_sections:
                    open_sections.pop()
                    self.tokens.append(SectionEndToken(line))
                case LineKind.KEY_VALUE:
                    self.tokens.append(KeyValueToken(line))
                case LineKind.SECTION_END | LineKind.OPAQUE:
                    # a closing brace at root level has nothing to close
                    self.tokens.append(OpaqueToken(line))

        if open_sections:
            start, opened_at = open_sections[-1]
            self.logger.error(f"Section '{start.name}' opened at line {opened_at} is never closed")
            raise UnterminatedSectionError(start.name, opened_at)
        self.logger.debug(f"Tokenized {self._line_number} line(s) into {len(self.tokens)} token(s)")
        return self.tokens


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only so carriage returns survive in the raw text."""
    return text.split("\n")


def tokenize_text(text: str, config: Optional[TokenizerConfig] = None) -> list[Token]:
    return ConfigTokenizer(split_lines(text), config=config).tokenize()


__all__ = [
    "LineKind",
    "SECTION_START",
    "SECTION_END",
    "KEY_VALUE",
    "classify_line",
    "ConfigTokenizer",
    "TokenizerConfig",
    "split_lines",
    "tokenize_text",
]
