"""Operator-facing warnings collected during a render, kept out of the HTML output"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional


logger = logging.getLogger("nyble")


@dataclass(frozen=True)
class Diagnostic:
    source:  Optional[str]
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}" if self.source else self.message


@dataclass
class Diagnostics:
    """Explicit warning collector passed through every render call.

    Each warning is recorded and forwarded to the `nyble` logger. Views created by
    for_source() share the same message list.
    """
    messages: list[Diagnostic] = field(default_factory=list)
    source:   Optional[str] = None
    log:      logging.Logger = logger

    def warn(self, message: str) -> None:
        diag = Diagnostic(self.source, message)
        self.messages.append(diag)
        self.log.warning("%s", diag)

    def for_source(self, source) -> "Diagnostics":
        return Diagnostics(messages=self.messages, source=str(source), log=self.log)

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.messages)
