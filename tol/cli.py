from __future__ import annotations

import sys
import traceback
from typing import Sequence

from tol.core.config import RuntimeConfig, load_runtime_config
from tol.core.errors import TolError, format_error, wrap_error
from tol.core.logging import configure_logging, default_log_dir, get_logger
from tol.engine import TclEngine
from tol.reporter import Reporter
from tol.runtime import ArgumentProcessor

logger = get_logger(__name__)


def _setup_logging(config: RuntimeConfig) -> None:
    log_dir = config.log_dir
    if log_dir is None and config.log_file:
        log_dir = default_log_dir()
    configure_logging(
        level=config.log_level,
        format_name=config.log_format,
        log_dir=log_dir,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run every argument through a Tcl session and return the exit code.

    Arguments are not handed to argparse: unknown dash tokens are script
    text, not errors.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = load_runtime_config()
    except TolError as exc:
        print(f"tol: {format_error(exc)}", file=sys.stderr)
        return exc.exit_code

    _setup_logging(config)
    processor = ArgumentProcessor(
        args,
        engine=TclEngine(),
        reporter=Reporter(color=config.color),
    )

    try:
        return processor.run()
    except Exception as exc:
        logger.exception("Unexpected failure")
        error = wrap_error(exc, code="internal_error", message="Unexpected failure")
        print(f"tol: {format_error(error)}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return 3


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
