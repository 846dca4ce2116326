from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tol.core.protocols import Evaluation


@dataclass
class TolError(Exception):
    code: str
    message: str
    detail: str | None = None
    exit_code: int = 1

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


@dataclass
class InsufficientArguments(TolError):
    """An option ran out of operands."""

    code: str = "insufficient_arguments"
    message: str = "Not enough arguments given."


@dataclass
class EvaluationFailure(TolError):
    """The engine rejected a command and the failure was not ignored."""

    code: str = "evaluation_failed"
    message: str = "Evaluation failed"
    position: int = 0
    evaluation: Evaluation | None = field(default=None, repr=False)


@dataclass
class ScriptExit(TolError):
    """A script called [exit]; the run stops with its status."""

    code: str = "script_exit"
    message: str = "Script requested exit"
    exit_code: int = 0


@dataclass
class ConfigurationError(TolError):
    code: str = "invalid_config"
    message: str = "Invalid configuration"
    exit_code: int = 2


def format_error(error: BaseException) -> str:
    if isinstance(error, TolError):
        prefix = f"[{error.code}] " if error.code else ""
        return f"{prefix}{error}"
    return f"{error}"


def wrap_error(
    error: BaseException,
    *,
    code: str,
    message: str,
) -> TolError:
    if isinstance(error, TolError):
        return error
    detail = str(error)
    return TolError(code=code, message=message, detail=detail)
