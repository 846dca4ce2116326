"""Shared fixtures: an in-memory engine standing in for Tcl."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from tol.core.errors import EvaluationFailure, ScriptExit
from tol.core.protocols import Evaluation


def _no_such_variable(name: str) -> Evaluation:
    message = f'can\'t read "{name}": no such variable'
    return Evaluation(
        ok=False,
        result=message,
        diagnostic=f"{message}\n    while executing\n\"get {name}\"",
        error_line=1,
    )


class FakeSession:
    """
    Understands a handful of commands:

    set NAME VALUE, get NAME, echo WORDS..., fail MESSAGE, exit STATUS.
    Anything else succeeds with an empty result.
    """

    def __init__(self, engine: FakeEngine) -> None:
        self.engine = engine
        self.variables: dict[str, str] = {}
        self.closed = False
        self.close_calls = 0

    def set_variable(self, name: str, value: str) -> None:
        if "(" in name and not name.endswith(")"):
            raise EvaluationFailure(
                message=f"Cannot set variable '{name}'",
                detail="bad variable name",
            )
        self.variables[name] = value

    def evaluate(self, script: str) -> Evaluation:
        assert not self.closed
        self.engine.evaluated.append(script)
        words = script.split()
        if not words:
            return Evaluation(ok=True)
        command, rest = words[0], words[1:]
        if command == "set" and len(rest) == 2:
            self.variables[rest[0]] = rest[1]
            return Evaluation(ok=True, result=rest[1])
        if command == "get" and len(rest) == 1:
            if rest[0] not in self.variables:
                return _no_such_variable(rest[0])
            return Evaluation(ok=True, result=self.variables[rest[0]])
        if command == "exit":
            raise ScriptExit(exit_code=int(rest[0]) if rest else 0)
        if command == "echo":
            return Evaluation(ok=True, result=" ".join(rest))
        if command == "fail":
            message = " ".join(rest) or "failed"
            return Evaluation(
                ok=False,
                result=message,
                diagnostic=f"{message}\n    while executing\n\"{script}\"",
                error_line=1,
            )
        return Evaluation(ok=True)

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True


@dataclass
class FakeEngine:
    sessions: list[FakeSession] = field(default_factory=list)
    evaluated: list[str] = field(default_factory=list)

    def create_session(self) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)
        return session

    def is_complete(self, fragment: str) -> bool:
        depth = 0
        for char in fragment:
            if char in "{[":
                depth += 1
            elif char in "}]":
                depth -= 1
        return depth <= 0


@dataclass
class RecordingReporter:
    results: list[str] = field(default_factory=list)
    errors: list[tuple[int, Evaluation]] = field(default_factory=list)
    fatals: list[str] = field(default_factory=list)
    usage_calls: int = 0
    example_calls: int = 0

    def result(self, text: str) -> None:
        self.results.append(text)

    def evaluation_error(self, position: int, evaluation: Evaluation) -> None:
        self.errors.append((position, evaluation))

    def fatal(self, message: str) -> None:
        self.fatals.append(message)

    def usage(self) -> None:
        self.usage_calls += 1

    def examples(self) -> None:
        self.example_calls += 1


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
