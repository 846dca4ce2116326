from __future__ import annotations

from typing import Optional, Sequence

from tol.core.errors import (
    EvaluationFailure,
    InsufficientArguments,
    ScriptExit,
    TolError,
)
from tol.core.logging import get_logger, log_event
from tol.core.protocols import Engine, Reporter, Session
from tol.runtime.buffer import CommandBuffer
from tol.runtime.flags import NO_FLAGS, CommandFlags
from tol.runtime.state import ProcessorState

logger = get_logger(__name__)

FLAG_OPTIONS: dict[str, CommandFlags] = {
    "-c": CommandFlags.CONTINUE,
    "-i": CommandFlags.IGNORE_ERRORS,
    "-p": CommandFlags.PRINT_RESULT,
}

OPTIONS = frozenset(FLAG_OPTIONS) | {"-e", "-r", "-s", "-v", "-h"}


class ArgumentProcessor:
    """
    Scans arguments left to right, evaluating script text in a Tcl session.

    Options only take effect when spelled exactly; anything else, including
    unknown dash tokens, is script text.
    """

    def __init__(
        self,
        args: Sequence[str],
        engine: Engine,
        reporter: Reporter,
    ) -> None:
        self.args: tuple[str, ...] = tuple(args)
        self.engine = engine
        self.reporter = reporter
        self.state: ProcessorState = ProcessorState.IDLE
        self.session: Optional[Session] = None
        self.buffer = CommandBuffer()
        self._last_text_position = 0

    def run(self) -> int:
        """
        Process every argument and return the exit code.
        """
        if not self.args:
            return 0

        exit_code = 0
        try:
            self._open_session()
            self._scan()
            self.state = ProcessorState.EXITING

        except ScriptExit as exc:
            self.state = ProcessorState.EXITING
            exit_code = exc.exit_code
            log_event(logger, "script_exit", status=exc.exit_code)

        except TolError as exc:
            self.state = ProcessorState.FAILED
            exit_code = exc.exit_code
            self._emit_failure(exc)

        finally:
            self._close_session()
            log_event(
                logger,
                "run_finished",
                exit_code=exit_code,
                state=self.state.name,
            )

        return exit_code

    # -------------------------
    # Scanning
    # -------------------------

    def _scan(self) -> None:
        flags = NO_FLAGS
        index = 0
        while index < len(self.args):
            token = self.args[index]
            position = index + 1
            index += 1

            if not token:
                continue

            if token in OPTIONS:
                flags = self._handle_option(token, flags)
                if token == "-s":
                    self._bind_variable(index, position)
                    index += 2
                continue

            flags = self._handle_text(token, position, flags)

        # Whatever an unfinished -c sequence left behind is still run.
        if not self.buffer.empty:
            self._evaluate(self._last_text_position, flags)

    def _handle_option(self, token: str, flags: CommandFlags) -> CommandFlags:
        if token in FLAG_OPTIONS:
            return flags | FLAG_OPTIONS[token]
        if token == "-e":
            self.reporter.examples()
        elif token == "-r":
            self._close_session()
            self._open_session()
        elif token in {"-v", "-h"}:
            self.reporter.usage()
        return flags

    def _bind_variable(self, index: int, position: int) -> None:
        if index + 2 > len(self.args):
            raise InsufficientArguments(detail=f"-s at argument {position}")

        name, value = self.args[index], self.args[index + 1]
        try:
            self._session().set_variable(name, value)
        except EvaluationFailure as exc:
            exc.position = position
            raise
        log_event(logger, "variable_bound", name=name, position=position)

    def _handle_text(
        self,
        token: str,
        position: int,
        flags: CommandFlags,
    ) -> CommandFlags:
        self.buffer.append(token)
        self._last_text_position = position

        if CommandFlags.CONTINUE in flags and not self.engine.is_complete(
            self.buffer.text
        ):
            # Every flag is dropped here, not just CONTINUE.
            self.buffer.separate()
            self.state = ProcessorState.ACCUMULATING
            log_event(logger, "continuation_pending", position=position)
            return NO_FLAGS

        self._evaluate(position, flags)
        return NO_FLAGS

    # -------------------------
    # Evaluation
    # -------------------------

    def _evaluate(self, position: int, flags: CommandFlags) -> None:
        evaluation = self._session().evaluate(self.buffer.text)

        if evaluation.ok:
            # Empty results would only print blank lines.
            if CommandFlags.PRINT_RESULT in flags and evaluation.result:
                self.reporter.result(evaluation.result)
            log_event(logger, "evaluated", position=position, ok=True)
        elif CommandFlags.IGNORE_ERRORS in flags:
            log_event(
                logger,
                "evaluation_ignored",
                position=position,
                error=evaluation.result,
            )
        else:
            raise EvaluationFailure(
                detail=evaluation.result,
                position=position,
                evaluation=evaluation,
            )

        self.buffer.clear()
        self.state = ProcessorState.IDLE

    # -------------------------
    # Session lifecycle
    # -------------------------

    def _session(self) -> Session:
        if self.session is None:
            raise RuntimeError("No active session")
        return self.session

    def _open_session(self) -> None:
        self.session = self.engine.create_session()
        log_event(logger, "session_created")

    def _close_session(self) -> None:
        session, self.session = self.session, None
        if session is not None:
            session.close()
            log_event(logger, "session_closed")

    # -------------------------
    # Emit helpers
    # -------------------------

    def _emit_failure(self, exc: TolError) -> None:
        if isinstance(exc, EvaluationFailure) and exc.evaluation is not None:
            self.reporter.evaluation_error(exc.position, exc.evaluation)
        elif isinstance(exc, InsufficientArguments):
            self.reporter.fatal(exc.message)
        else:
            self.reporter.fatal(str(exc))
