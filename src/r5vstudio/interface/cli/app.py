from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration resolution
(defaults, persistent storage and CLI overrides), logging bootstrap, command
dispatch and result rendering. Every command goes through the command layer,
so failures arrive here as result objects rather than exceptions.
"""

import json
import os
import sys
from typing import Any, Callable, Dict, List, Optional

from r5vstudio.core.analysis.tree_renderer import render_tree
from r5vstudio.core.services import commands
from r5vstudio.domain.command_models import (
    CommandResult,
    DirectoryListResult,
    FileReadResult,
    ModCreateResult,
    ProjectReadResult,
    ProjectWriteResult,
    WorkspaceTreeResult,
)
from r5vstudio.domain.config import get_config_path, get_default_config, load_config, save_config
from r5vstudio.domain.project_models import ModData
from r5vstudio.domain.validator import validate_config
from r5vstudio.infra.fs import normalize_path
from r5vstudio.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from r5vstudio.interface.cli import args as cli_args
from r5vstudio.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 operation failure, 2 usage error).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration hierarchy (defaults < saved < CLI)
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    log_file = args.log_file or (get_default_log_path() if conf["save_log_file"] else None)
    configure_logging(LoggingConfig.from_settings(conf, log_file=log_file))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if conf["locale"] != i18n.locale:
        i18n.load_locale(conf["locale"])

    if args.save_config:
        if not save_config(conf):
            print(i18n.t("cli.errors.config_save"), file=sys.stderr)
            return EXIT_FAILURE
        print(i18n.t("cli.status.config_saved", path=get_config_path()), file=sys.stderr)
        if not args.command and not args.dump_config:
            return EXIT_OK

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    # 4. Command dispatch phase
    args.path = normalize_path(args.path, fallback=os.getcwd())
    logger.debug(f"Dispatching command '{args.command}' on {args.path}")
    try:
        handler = _HANDLERS[args.command]
        result = handler(args, conf)
    except _UsageError as e:
        print(i18n.t("cli.errors.failed", error=str(e)), file=sys.stderr)
        return EXIT_USAGE
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(
            result,
            path=args.path,
            show_skipped=bool(getattr(args, "show_skipped", False)),
        )

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

class _UsageError(Exception):
    """Invalid invocation detected after argument parsing."""


def _cmd_read(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.read_file(args.path)


def _cmd_write(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.write_file(args.path, _resolve_text(args))


def _cmd_read_project(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.read_project_file(args.path)


def _cmd_write_project(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.write_project_file(
        args.path, _resolve_text(args), level=conf["compression_level"]
    )


def _cmd_ls(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.list_directory(args.path)


def _cmd_mkdir(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.create_directory(args.path)


def _cmd_rmdir(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.delete_directory(args.path)


def _cmd_tree(args: Any, conf: Dict[str, Any]) -> CommandResult:
    return commands.open_mod_folder(args.path, max_depth=conf["tree_max_depth"])


def _cmd_new_mod(args: Any, conf: Dict[str, Any]) -> CommandResult:
    mod = ModData(
        name=args.name,
        description=args.description,
        author=args.author,
        version=args.mod_version,
        mod_id=args.mod_id,
        path=args.path,
    )
    return commands.create_mod(mod)


_HANDLERS: Dict[str, Callable[[Any, Dict[str, Any]], CommandResult]] = {
    "read": _cmd_read,
    "write": _cmd_write,
    "read-project": _cmd_read_project,
    "write-project": _cmd_write_project,
    "ls": _cmd_ls,
    "mkdir": _cmd_mkdir,
    "rmdir": _cmd_rmdir,
    "tree": _cmd_tree,
    "new-mod": _cmd_new_mod,
}


def _resolve_text(args: Any) -> str:
    """Pick the document text from --text, --from, or piped stdin."""
    if args.text is not None:
        return args.text

    if args.from_file:
        if args.from_file == "-":
            return sys.stdin.read()
        try:
            with open(args.from_file, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise _UsageError(i18n.t("cli.errors.input_read", error=e)) from e

    if sys.stdin is not None and not sys.stdin.isatty():
        return sys.stdin.read()

    raise _UsageError(i18n.t("cli.errors.no_text"))

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(
        result: CommandResult,
        path: str = "",
        show_skipped: bool = False,
) -> None:
    """
    Format and print a command result to the terminal.

    Args:
        result: The result to render.
        path: Target path of the command.
        show_skipped: List unreadable entries after a tree.
    """
    if not result.ok:
        print(i18n.t("cli.errors.failed", error=result.error), file=sys.stderr)
        return

    if isinstance(result, (FileReadResult, ProjectReadResult)):
        sys.stdout.write(result.content or "")
        if isinstance(result, ProjectReadResult):
            key = "format_compressed" if result.compressed else "format_plain"
            print(i18n.t(f"cli.status.{key}"), file=sys.stderr)
        return

    if isinstance(result, ProjectWriteResult):
        print(i18n.t(
            "cli.status.saved",
            path=path,
            original=result.original_size,
            compressed=result.compressed_size,
        ))
        return

    if isinstance(result, DirectoryListResult):
        for item in result.items or []:
            suffix = "/" if item.is_directory else ""
            print(f"{item.name}{suffix}")
        return

    if isinstance(result, WorkspaceTreeResult):
        for line in render_tree(result.tree or [], root_label=result.root_path):
            print(line)
        if show_skipped and result.skipped:
            print(i18n.t("cli.status.skipped", count=len(result.skipped)), file=sys.stderr)
            for entry in result.skipped:
                print(f"  - {entry.path}: {entry.reason}", file=sys.stderr)
        return

    if isinstance(result, ModCreateResult):
        print(i18n.t("cli.status.mod_created", path=result.path))
        return

    print(i18n.t("cli.status.ok"))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
