from __future__ import annotations

import tkinter
from functools import lru_cache

from tol.core.errors import EvaluationFailure, ScriptExit
from tol.core.protocols import Evaluation

# Tcl completion codes as reported by [catch].
TCL_OK = 0
TCL_ERROR = 1
TCL_RETURN = 2
TCL_BREAK = 3
TCL_CONTINUE = 4

_RESULT_VAR = "::tol::result"
_OPTIONS_VAR = "::tol::options"


class _Interpreter(tkinter.Tk):
    """A bare Tcl interpreter: no Tk, no ~/.Tk.tcl or ~/.Tk.py profiles."""

    def readprofile(self, baseName, className):
        pass


def _new_interpreter() -> tkinter.Tk:
    return _Interpreter(useTk=False)


def _option(tk, key: str, default):
    if tk.getboolean(tk.eval(f"dict exists ${_OPTIONS_VAR} {key}")):
        return tk.eval(f"dict get ${_OPTIONS_VAR} {key}")
    return default


@lru_cache(maxsize=1)
def _syntax_interpreter() -> tkinter.Tk:
    """Interpreter used only for [info complete]; never evaluates scripts."""
    return _new_interpreter()


class TclSession:
    """One embedded Tcl interpreter, alive until close()."""

    def __init__(self) -> None:
        self._interp: tkinter.Tk | None = _new_interpreter()
        self._exit_status: int | None = None
        self._interp.tk.eval("namespace eval ::tol {}")
        # _tkinter removes [exit]; it ends the whole run instead.
        self._interp.tk.createcommand("exit", self._request_exit)

    def _request_exit(self, status: str = "0") -> None:
        self._exit_status = self._tk().getint(status)
        # Unwinds the running script; evaluate() turns it into ScriptExit.
        raise tkinter.TclError(f"exit {self._exit_status}")

    def _tk(self):
        if self._interp is None:
            raise RuntimeError("Tcl session is closed")
        return self._interp.tk

    def set_variable(self, name: str, value: str) -> None:
        tk = self._tk()
        try:
            tk.globalsetvar(name, value)
        except tkinter.TclError as exc:
            raise EvaluationFailure(
                message=f"Cannot set variable '{name}'",
                detail=str(exc),
            ) from exc

    def evaluate(self, script: str) -> Evaluation:
        tk = self._tk()
        try:
            code = int(tk.call("catch", script, _RESULT_VAR, _OPTIONS_VAR))
            if self._exit_status is not None:
                raise ScriptExit(exit_code=self._exit_status)
            result = tk.eval(f"set {_RESULT_VAR}")
            if code == TCL_RETURN:
                # A top-level [return] completes with its own -code.
                code = int(_option(tk, "-code", TCL_OK))
                if code == TCL_RETURN:
                    code = TCL_OK
            if code == TCL_OK:
                return Evaluation(ok=True, result=result)
            if code == TCL_ERROR:
                return Evaluation(
                    ok=False,
                    result=result,
                    diagnostic=_option(tk, "-errorinfo", result),
                    error_line=int(_option(tk, "-errorline", 1)),
                )
            if code == TCL_BREAK:
                message = 'invoked "break" outside of a loop'
            elif code == TCL_CONTINUE:
                message = 'invoked "continue" outside of a loop'
            else:
                message = f"command returned bad code: {code}"
            return Evaluation(ok=False, result=message, diagnostic=message, error_line=1)
        finally:
            tk.eval(f"unset -nocomplain {_RESULT_VAR} {_OPTIONS_VAR}")
            tk.eval("catch {flush stdout}")

    def close(self) -> None:
        # The interpreter is deleted when the last reference to it goes away;
        # the [exit] command holds one until it is removed.
        interp, self._interp = self._interp, None
        if interp is not None and interp.tk.call("info", "commands", "exit"):
            interp.tk.deletecommand("exit")


class TclEngine:
    """Creates Tcl sessions and answers syntax-only completeness checks."""

    def create_session(self) -> TclSession:
        return TclSession()

    def is_complete(self, fragment: str) -> bool:
        tk = _syntax_interpreter().tk
        return tk.getboolean(tk.call("info", "complete", fragment))
