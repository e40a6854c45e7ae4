"""In-place key/value rewriting for HOCON-like config documents.

The editor never rebuilds lines it does not have to touch. Updating a value
keeps the original indentation, key spelling and separator of the line and
only replaces what follows the separator; lines that have to be added are
appended (root keys), inserted before the closing brace of their section, or
emitted as a new section at the end of the document.

Every operation takes a :class:`ConfigDocument` and returns a new one, the
input document is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Mapping, NotRequired, Optional, Sequence, TextIO, TypedDict

from hoconedit.document import ConfigDocument
from hoconedit.lexer import ConfigTokenizer, TokenizerConfig, split_lines
from hoconedit.logger import Logger
from hoconedit.serializer import ConfigSerializer
from hoconedit.tokens import KeyValueToken, SectionEndToken, SectionStartToken, Token
from hoconedit.utils import resolve_config

SectionPath = str | Sequence[str]


class EditorConfig(TypedDict):
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]
    indent: NotRequired[str]
    encoding: NotRequired[str]
    tokenizer_config: NotRequired[TokenizerConfig]


class EditorConfigRequired(TypedDict):
    enable_logger: bool
    log_level: int
    indent: str
    encoding: str
    tokenizer_config: TokenizerConfig


DEFAULT_CONFIG: EditorConfigRequired = {
    "enable_logger": True,
    "log_level": logging.INFO,
    "indent": "  ",
    "encoding": "utf-8",
    "tokenizer_config": {},
}


class ConfigEditor:
    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger.for_component("hoconedit.editor", self.config)
        self.indent = self.config["indent"]
        self.serializer = ConfigSerializer(encoding=self.config["encoding"])

    # Loading / saving --------------------------------------------------------
    def parse(self, text: str) -> ConfigDocument:
        tokenizer = ConfigTokenizer(split_lines(text), config=self._tokenizer_config())
        return ConfigDocument.from_tokens(tokenizer.tokenize())

    def load(self, path: str | Path) -> ConfigDocument:
        # newline="" so CRLF files round-trip byte for byte
        with open(path, "r", encoding=self.config["encoding"], newline="") as handle:
            text = handle.read()
        self.logger.info(f"Loaded {path}")
        return self.parse(text)

    def render(self, document: ConfigDocument) -> str:
        return self.serializer.serialize(document)

    def save(self, document: ConfigDocument, output: str | Path | TextIO) -> None:
        """Overwrite ``output`` when it is a path, otherwise append to the text buffer."""
        if isinstance(output, (str, Path)):
            self.serializer.write(document, output)
            self.logger.info(f"Wrote {output}")
        else:
            self.serializer.write_to(document, output)

    # Operations --------------------------------------------------------------
    def update_key(
        self, document: ConfigDocument, key: str, value: str, add_if_missing: bool = True
    ) -> ConfigDocument:
        """Update every root level ``key``; append ``key = value`` when there is none."""
        terminator = self._line_terminator(document)
        rewritten: list[Token] = []
        nesting = 0
        matched = 0
        for token in document:
            match token:
                case SectionStartToken():
                    nesting += 1
                case SectionEndToken():
                    nesting -= 1
                case KeyValueToken() if nesting == 0 and token.key == key:
                    token = token.with_value(value)
                    matched += 1
                case _:
                    pass
            rewritten.append(token)

        if matched:
            self.logger.debug(f"Updated {matched} occurrence(s) of root key '{key}'")
        elif add_if_missing:
            self._append_lines(rewritten, [KeyValueToken.build(key, value)], terminator)
            self.logger.debug(f"Appended root key '{key}'")
        else:
            self.logger.debug(f"Root key '{key}' not found, nothing to do")
        return ConfigDocument.from_tokens(rewritten)

    def update_key_value_section(
        self,
        document: ConfigDocument,
        section_path: SectionPath,
        data: Mapping[str, str],
        add_if_missing: bool = True,
    ) -> ConfigDocument:
        """Update the keys of ``data`` directly inside the section at ``section_path``.

        The path is resolved greedily: the first section called ``path[0]``
        anywhere in the document, then the first section called ``path[1]``
        after it, and so on. Only the first section resolved this way is
        edited, sections nested inside it are left alone.

        With ``add_if_missing`` the keys not found are inserted just before the
        section's closing brace. When the path cannot be resolved a new section
        named after the last path element is appended to the document; missing
        parent sections are not created.
        """
        names = [section_path] if isinstance(section_path, str) else list(section_path)
        if not names:
            raise ValueError("section_path must name at least one section")

        remaining = list(names)
        wanted = remaining.pop(0)
        terminator = self._line_terminator(document)
        rewritten: list[Token] = []
        applied: set[str] = set()
        in_target = False
        resolved = False
        nesting = 0

        for token in document:
            if resolved and not in_target:
                rewritten.append(token)
                continue

            match token:
                case SectionStartToken() if not in_target and token.name == wanted:
                    if remaining:
                        wanted = remaining.pop(0)
                    else:
                        in_target = resolved = True
                case SectionStartToken() if in_target:
                    nesting += 1
                case SectionEndToken() if in_target and nesting > 0:
                    nesting -= 1
                case SectionEndToken() if in_target:
                    in_target = False
                    if add_if_missing:
                        rewritten.extend(self._terminated(self._missing_entries(data, applied), terminator))
                case KeyValueToken() if in_target and nesting == 0 and token.key in data:
                    applied.add(token.key)
                    token = token.with_value(data[token.key])
                case _:
                    pass
            rewritten.append(token)

        if not resolved:
            if add_if_missing and data:
                section = [
                    SectionStartToken.build(names[-1]),
                    *self._missing_entries(data, applied),
                    SectionEndToken.build(),
                ]
                self._append_lines(rewritten, section, terminator)
                self.logger.debug(f"Section {'.'.join(names)} not found, appended section '{names[-1]}'")
            else:
                self.logger.debug(f"Section {'.'.join(names)} not found, nothing to do")
        else:
            self.logger.debug(f"Updated section {'.'.join(names)}: {len(applied)} key(s) applied")
        return ConfigDocument.from_tokens(rewritten)

    def update_section_key(
        self,
        document: ConfigDocument,
        section_path: SectionPath,
        key: str,
        value: str,
        add_if_missing: bool = True,
    ) -> ConfigDocument:
        return self.update_key_value_section(document, section_path, {key: value}, add_if_missing)

    # Helpers -----------------------------------------------------------------
    def _line_terminator(self, document: ConfigDocument) -> str:
        """``"\\r"`` for CRLF documents; lines are joined with ``"\\n"`` either way."""
        if len(document) > 1 and document.tokens[0].raw.endswith("\r"):
            return "\r"
        return ""

    def _terminated(self, tokens: list[Token], terminator: str) -> list[Token]:
        return [replace(token, raw=token.raw + terminator) for token in tokens]

    def _append_lines(self, rewritten: list[Token], lines: list[Token], terminator: str) -> None:
        # the old last line gains a terminator, the new last line goes without one
        if terminator and rewritten and not rewritten[-1].raw.endswith(terminator):
            rewritten[-1] = replace(rewritten[-1], raw=rewritten[-1].raw + terminator)
        rewritten.extend(self._terminated(lines[:-1], terminator))
        rewritten.extend(lines[-1:])

    def _missing_entries(self, data: Mapping[str, str], applied: set[str]) -> list[Token]:
        entries: list[Token] = []
        for key, value in data.items():
            if key not in applied:
                entries.append(KeyValueToken.build(key, value, indent=self.indent))
                applied.add(key)
        return entries

    def _tokenizer_config(self) -> TokenizerConfig:
        config: TokenizerConfig = {
            "enable_logger": self.config["enable_logger"],
            "log_level": self.config["log_level"],
        }
        config.update(self.config["tokenizer_config"])
        return config


__all__ = ["ConfigEditor", "EditorConfig", "SectionPath"]
