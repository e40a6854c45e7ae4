"""Writes documents back out exactly as they were tokenized."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .document import ConfigDocument


@dataclass
class ConfigSerializer:
    line_separator: str = "\n"
    encoding: str = "utf-8"

    def serialize(self, document: ConfigDocument) -> str:
        return self.line_separator.join(token.raw for token in document)

    def write(self, document: ConfigDocument, path: str | Path) -> Path:
        path = Path(path)
        # newline="" keeps any "\r" carried in the raw text untouched
        with open(path, "w", encoding=self.encoding, newline="") as handle:
            handle.write(self.serialize(document))
        return path

    def write_to(self, document: ConfigDocument, buffer: TextIO) -> None:
        buffer.write(self.serialize(document))


__all__ = ["ConfigSerializer"]
