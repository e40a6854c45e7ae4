"""CLI for editing HOCON-like node configuration files in place."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from hoconedit import ConfigDocument, ConfigEditError, ConfigEditor, NodeConfigManager


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Update keys of a HOCON-like config file (e.g. a Corda node.conf) while keeping "
            "every other line, comment and blank exactly as it was."
        )
    )
    parser.add_argument("input", help="Path to the config file to edit.")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File to write the result to (defaults to stdout).",
    )
    parser.add_argument(
        "--set",
        dest="edits",
        action="append",
        nargs=2,
        metavar=("KEY", "VALUE"),
        default=[],
        help="Set a root level key. May be repeated.",
    )
    parser.add_argument(
        "--section-set",
        dest="edits",
        action="append",
        nargs=3,
        metavar=("SECTION", "KEY", "VALUE"),
        help="Set a key inside a section; nested sections are separated by dots (rpcSettings.ssl).",
    )
    parser.add_argument(
        "--add-missing",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Add keys and sections that are not present yet (default: enabled).",
    )
    parser.add_argument(
        "--endpoints",
        action="store_true",
        help="Print the RPC/P2P/SSH endpoints of the node as JSON instead of editing.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def apply_edits(
    editor: ConfigEditor, document: ConfigDocument, edits: Sequence[Sequence[str]], add_if_missing: bool
) -> ConfigDocument:
    for edit in edits:
        if len(edit) == 2:
            key, value = edit
            document = editor.update_key(document, key, value, add_if_missing)
        else:
            section, key, value = edit
            document = editor.update_section_key(document, section.split("."), key, value, add_if_missing)
    return document


def logging_config(verbose: bool) -> dict:
    return {"enable_logger": verbose, "log_level": logging.DEBUG if verbose else logging.INFO}


def print_endpoints(source: Path, verbose: bool) -> None:
    manager = NodeConfigManager(source, config=logging_config(verbose))
    endpoints = manager.extract_endpoints()
    payload = {kind.value: endpoint.model_dump(mode="json") for kind, endpoint in endpoints.items()}
    print(json.dumps(payload, indent=2))


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    source = Path(args.input)
    if args.endpoints:
        print_endpoints(source, args.verbose)
        return

    editor = ConfigEditor(config=logging_config(args.verbose))
    try:
        document = editor.load(source)
    except ConfigEditError as exc:
        raise RuntimeError(f"Failed to parse {source}") from exc
    document = apply_edits(editor, document, args.edits, args.add_missing)

    if args.output is None:
        editor.save(document, sys.stdout)
        return
    destination = Path(args.output)
    editor.save(document, destination)
    try:
        display_path = destination.relative_to(Path.cwd())
    except ValueError:
        display_path = destination
    print(f"Wrote {display_path}")


if __name__ == "__main__":
    main()
