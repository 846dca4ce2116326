from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one command in a session."""

    ok: bool
    result: str = ""
    diagnostic: str = ""
    error_line: int = 0


class Session(Protocol):
    def set_variable(self, name: str, value: str) -> None: ...
    def evaluate(self, script: str) -> Evaluation: ...
    def close(self) -> None: ...


class Engine(Protocol):
    def create_session(self) -> Session: ...
    def is_complete(self, fragment: str) -> bool: ...


class Reporter(Protocol):
    def result(self, text: str) -> None: ...
    def evaluation_error(self, position: int, evaluation: Evaluation) -> None: ...
    def fatal(self, message: str) -> None: ...
    def usage(self) -> None: ...
    def examples(self) -> None: ...
