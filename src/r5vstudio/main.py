from __future__ import annotations

"""
Process Entry Point.

Makes the package importable when this file is run directly, installs a
supervisor hook that logs any crash escaping the CLI before exiting with
status 1, and hands control to the CLI controller.
"""

import logging
import os
import sys
import traceback
from types import TracebackType
from typing import List, Optional, Type

if not getattr(sys, 'frozen', False):
    _SRC_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _SRC_DIR not in sys.path:
        sys.path.insert(0, _SRC_DIR)

CRASH_BANNER = "=" * 80


# -----------------------------------------------------------------------------
# SUPERVISOR
# -----------------------------------------------------------------------------

def report_crash(
        exctype: Type[BaseException],
        value: BaseException,
        tb: Optional[TracebackType],
) -> None:
    """
    Log an unhandled exception and print its trace to stderr.

    Installed as `sys.excepthook`; also called directly by `main` so that
    crashes inside the CLI end the same way.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("r5vstudio.supervisor").critical(
        f"Unhandled {exctype.__name__}: {value}\n{stack_trace}"
    )

    print(f"\n{CRASH_BANNER}\nCRITICAL ERROR (R5VSTUDIO)\n{CRASH_BANNER}", file=sys.stderr)
    print(stack_trace, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI under the crash supervisor.

    Returns:
        int: Exit code from the CLI, or 1 after an unhandled crash.
    """
    sys.excepthook = report_crash
    try:
        from r5vstudio.interface.cli.app import main as cli_main
        return cli_main(argv)
    except Exception:
        report_crash(*sys.exc_info())
        return 1


if __name__ == "__main__":
    sys.exit(main())
