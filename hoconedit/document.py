"""Immutable token container handed between editor operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .tokens import Token


@dataclass(frozen=True, slots=True)
class ConfigDocument:
    tokens: tuple[Token, ...] = field(default_factory=tuple)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> "ConfigDocument":
        return cls(tuple(tokens))

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


__all__ = ["ConfigDocument"]
