from __future__ import annotations

from typing import Literal

from rich.console import Console

from tol import __version__
from tol.core.protocols import Evaluation

ColorMode = Literal["auto", "always", "never"]

USAGE = f"""\
tol version {__version__}

Copyright (C) 2014 Pietro Cerutti <gahr@gahr.ch>

Redistribution and use in source and binary forms, with or without
modification, are permitted under the 2-clause BSD License.

Usage: tol ?arg ...?

  arg         Evaluate the Tcl command inside 'arg'.
  -c          Evaluate the following argument if it is a complete
              Tcl command, or concatenate subsequent arguments up
              to the first one not preceded by -c until they form
              a complete Tcl command.
  -e          Display some examples of usage
  -i          Ignore any errors from the following argument.
  -p          Print the result of the command in the following argument.
  -r          Reset the interpreter.
  -s var val  Assign the value 'val' to the variable 'var'.
  -v          Display this message
"""

EXAMPLES = """\
Examples:

tol 'puts Hello'
Hello

tol -p 'expr {1+2}'
3

tol 'set a 2' 'puts $a'
2

tol 'set a 2' -r 'puts $a'
can't read "a": no such variable
    while executing
"puts $a"

tol 'puts before' 'set a 2' -r -i 'puts $a' 'puts after'
before
after

tol -s home $HOME 'puts "we are living in $home"'
we are living in /home/user

tol -c 'set vars [dict create' \\
    -c editor -c $EDITOR \\
    -c pager -c $PAGER ']' \\
    'foreach {k v} $vars {puts "$k => $v"}'
editor => vim
pager => less
"""


def _console(*, stderr: bool, color: ColorMode) -> Console:
    force_terminal = {"always": True, "never": False}.get(color)
    return Console(
        stderr=stderr,
        force_terminal=force_terminal,
        no_color=True if color == "never" else None,
        highlight=False,
        soft_wrap=True,
    )


class Reporter:
    """Writes results, diagnostics and help text to the terminal."""

    def __init__(self, *, color: ColorMode = "auto") -> None:
        self._out = _console(stderr=False, color=color)
        self._err = _console(stderr=True, color=color)

    def result(self, text: str) -> None:
        # Verbatim, bypassing rich rendering.
        print(text, flush=True)

    def evaluation_error(self, position: int, evaluation: Evaluation) -> None:
        header = f"Arg {position}, line {evaluation.error_line}: {evaluation.result}"
        self._err.out(header, style="bold red", highlight=False)
        if evaluation.diagnostic and evaluation.diagnostic != evaluation.result:
            self._err.out(evaluation.diagnostic, highlight=False)

    def fatal(self, message: str) -> None:
        self._err.out(message, style="red", highlight=False)

    def usage(self) -> None:
        self._out.out(USAGE, highlight=False)

    def examples(self) -> None:
        self._out.out(EXAMPLES, highlight=False)
