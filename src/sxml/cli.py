# src/sxml/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from tqdm import tqdm

from sxml.convert import CONVERTERS
from sxml.exceptions import SXMLError
from sxml.managers.config_manager import config_manager
from sxml.node import XMLNode
from sxml.utils.configure_logging import configure_logger
from sxml.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

USAGE = """
Usage:
  sxml format <file>                          Print the normalized markup.
  sxml get <file> <path> [--attr NAME]        Print a child node (or one of its attributes).
  sxml array <file> <path> <name> [--attr NAME] [--json]
                                              Print every <name> child of the node at <path>.
  sxml children <file> [<path>]               List the direct child tag names.
  sxml config                                 Print the effective settings as JSON.

  <file> may be '-' to read from stdin. <path> is a chain of child names
  joined by the configured separator (cli.path_separator, default '.').
  Any setting can be overridden for one run: sxml --set key.path=value ...
""".strip()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sxml", description="Lenient XML tag scanner.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
                        help="Override a setting for this run, e.g. cli.path_separator=/.")
    subs = parser.add_subparsers(dest="subcommand", help="Sub-command help")

    p_format = subs.add_parser("format", help="Print the normalized markup.")
    p_format.add_argument("file")

    p_get = subs.add_parser("get", help="Look up a child node by path.")
    p_get.add_argument("file")
    p_get.add_argument("path", nargs="?", default="")
    p_get.add_argument("--attr", help="Print this attribute instead of the node.")
    p_get.add_argument("--type", choices=sorted(CONVERTERS), default="str",
                       help="Convert the attribute value (default: str).")

    p_array = subs.add_parser("array", help="List repeated children.")
    p_array.add_argument("file")
    p_array.add_argument("path")
    p_array.add_argument("name")
    p_array.add_argument("--attr", help="Print this attribute of each child.")
    p_array.add_argument("--json", action="store_true", help="Print a JSON list.")

    p_children = subs.add_parser("children", help="List direct child tag names.")
    p_children.add_argument("file")
    p_children.add_argument("path", nargs="?", default="")

    subs.add_parser("config", help="Print the effective settings as JSON.")
    return parser


def _read_input(file_arg: str) -> str:
    if file_arg == "-":
        return sys.stdin.read()
    return PathUtils.resolve_input(file_arg).read_text(encoding="utf-8")


def resolve_path(root: XMLNode, path: str, separator: Optional[str] = None) -> XMLNode:
    """
    Follows a chain of child names from ``root``.

    An empty path returns ``root`` itself.
    """
    sep = separator or config_manager.get_nested("cli.path_separator", ".")
    node = root
    for part in [p for p in path.split(sep) if p]:
        node = node.get_child(part)
    return node


def _cmd_get(root: XMLNode, pargs: argparse.Namespace) -> int:
    node = resolve_path(root, pargs.path)
    if pargs.attr:
        value = CONVERTERS[pargs.type](node.get_attribute(pargs.attr), pargs.attr)
        print(json.dumps(value) if pargs.type == "bool" else value)
    else:
        print(node.to_text())
    return 0


def _cmd_array(root: XMLNode, pargs: argparse.Namespace) -> int:
    parent = resolve_path(root, pargs.path)
    nodes = parent.get_child_array(pargs.name)
    threshold = config_manager.get_nested("cli.progress_threshold", 50)

    values = []
    for node in tqdm(nodes, desc=f"<{pargs.name}>", unit="tag", disable=len(nodes) < threshold):
        values.append(node.get_attribute(pargs.attr) if pargs.attr else node.to_text())

    if pargs.json:
        print(json.dumps(values, indent=2, ensure_ascii=False))
    else:
        for value in values:
            print(value)
    return 0


def _cmd_children(root: XMLNode, pargs: argparse.Namespace) -> int:
    for name in resolve_path(root, pargs.path).child_names():
        print(name)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    parser = _build_parser()

    if not args:
        print(USAGE)
        return 2

    try:
        pargs = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code == 0 else 2

    if pargs.subcommand is None:
        print(USAGE)
        return 2

    config_manager.reset()
    try:
        config_manager.apply_overrides(pargs.overrides)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 2

    if pargs.subcommand == "config":
        print(json.dumps(config_manager.get_all(), indent=2))
        return 0

    level = "DEBUG" if pargs.verbose else config_manager.get_nested("debug.level", "WARNING")
    configure_logger(
        level,
        module_specific_levels=config_manager.get_nested("debug.module_levels"),
        silenced_loggers=config_manager.get_nested("debug.silenced"),
    )

    try:
        root = XMLNode.from_text(_read_input(pargs.file))
        if pargs.subcommand == "format":
            print(root.to_text())
            return 0
        if pargs.subcommand == "get":
            return _cmd_get(root, pargs)
        if pargs.subcommand == "array":
            return _cmd_array(root, pargs)
        return _cmd_children(root, pargs)
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Error: could not read '{pargs.file}': {e}")
        return 1
    except SXMLError as e:
        logger.debug("Lookup failed.", exc_info=True)
        print(f"❌ Error [{e.code}]: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
