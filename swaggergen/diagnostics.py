"""Errors and the diagnostics accumulator shared by every build phase.

Fatal input problems raise SchemaError / LoaderError. Everything else is
recorded here and reported once, after generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

INFO = "info"
WARNING = "warning"


class SchemaError(ValueError):
    """The document has a shape the generator cannot work with."""


class LoaderError(ValueError):
    """The document could not be read or fetched."""


@dataclass(frozen=True)
class Diagnostic:
    level: str
    message: str

    def __str__(self) -> str:
        return f"[{self.level}] {self.message}"


@dataclass
class Diagnostics:
    """Collects recoverable conditions in the order they were found."""

    entries: list[Diagnostic] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.entries.append(Diagnostic(INFO, message))

    def warning(self, message: str) -> None:
        self.entries.append(Diagnostic(WARNING, message))

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.entries if d.level == WARNING]

    def messages(self, level: str | None = None) -> list[str]:
        return [d.message for d in self.entries if level is None or d.level == level]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
