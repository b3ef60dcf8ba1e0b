from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global flags and one subcommand per core
operation) and translates parsed namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

from r5vstudio.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the r5vstudio CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="r5vstudio",
        description=i18n.t("app.description"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    p.add_argument("--log-file", dest="log_file", default=None, help=i18n.t("cli.args.log_file"))
    p.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.defaults"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--save-config", action="store_true", help=i18n.t("cli.args.save_config"))

    # --- Format Selection ---
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))

    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    # --- Plain files ---
    sp = sub.add_parser("read", help=i18n.t("cli.commands.read"))
    _add_path(sp)

    sp = sub.add_parser("write", help=i18n.t("cli.commands.write"))
    _add_path(sp)
    _add_text_source(sp)

    # --- Project containers ---
    sp = sub.add_parser("read-project", help=i18n.t("cli.commands.read_project"))
    _add_path(sp)

    sp = sub.add_parser("write-project", help=i18n.t("cli.commands.write_project"))
    _add_path(sp)
    _add_text_source(sp)
    sp.add_argument("--level", dest="compression_level", type=int, default=None,
                    help=i18n.t("cli.args.level"))

    # --- Directories ---
    for name, key in (("ls", "ls"), ("mkdir", "mkdir"), ("rmdir", "rmdir")):
        sp = sub.add_parser(name, help=i18n.t(f"cli.commands.{key}"))
        _add_path(sp)

    # --- Workspace ---
    sp = sub.add_parser("tree", help=i18n.t("cli.commands.tree"))
    _add_path(sp)
    sp.add_argument("--depth", dest="tree_max_depth", type=int, default=None,
                    help=i18n.t("cli.args.depth"))
    sp.add_argument("--show-skipped", action="store_true", help=i18n.t("cli.args.show_skipped"))

    sp = sub.add_parser("new-mod", help=i18n.t("cli.commands.new_mod"))
    sp.add_argument("--name", required=True, help=i18n.t("cli.args.mod_name"))
    sp.add_argument("--id", dest="mod_id", required=True, help=i18n.t("cli.args.mod_id"))
    sp.add_argument("--path", required=True, help=i18n.t("cli.args.mod_parent"))
    sp.add_argument("--description", default="", help=i18n.t("cli.args.mod_description"))
    sp.add_argument("--author", default="", help=i18n.t("cli.args.mod_author"))
    sp.add_argument("--version", dest="mod_version", default="1.0.0",
                    help=i18n.t("cli.args.mod_version"))

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options that were actually given produce an override.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file:
        overrides["save_log_file"] = True

    depth = getattr(args, "tree_max_depth", None)
    if depth is not None:
        overrides["tree_max_depth"] = depth

    level = getattr(args, "compression_level", None)
    if level is not None:
        overrides["compression_level"] = level

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _add_path(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help=i18n.t("cli.args.path"))


def _add_text_source(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--text", default=None, help=i18n.t("cli.args.text"))
    group.add_argument("--from", dest="from_file", default=None, help=i18n.t("cli.args.from_file"))
