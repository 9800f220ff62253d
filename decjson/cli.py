# decjson/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .api import stringify
from .constants import CLI_INDENT_DEFAULT
from .marker import mark_fields_recursive
from .utils.iohelpers import read_text, write_text_atomic

# ------------------------------ utils -------------------------------------


def _load_json_from_path(path: str) -> Any:
    return json.loads(read_text(path))


def _indent_arg(args) -> Any:
    if getattr(args, "indent_str", None) is not None:
        return args.indent_str
    if getattr(args, "indent", None) is not None:
        return args.indent
    return CLI_INDENT_DEFAULT


def _emit(text: str, out: Optional[str]) -> None:
    if out:
        write_text_atomic(out, text + "\n")
    else:
        sys.stdout.write(text + "\n")


def _render(args, space: Any) -> int:
    try:
        data = _load_json_from_path(args.path)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.double:
        mark_fields_recursive(data, *args.double)

    text = stringify(data, None, space)
    if text is None:
        print("error: input has no JSON representation", file=sys.stderr)
        return 1

    try:
        _emit(text, args.out)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


# ------------------------------ subcommands --------------------------------


def _cmd_fmt(args) -> int:
    return _render(args, _indent_arg(args))


def _cmd_minify(args) -> int:
    return _render(args, None)


# ------------------------------ main ---------------------------------------


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("path", help="JSON file to read, or '-' for stdin")
    p.add_argument("--double", action="append", metavar="KEY",
                   help="Render numbers under KEY (in every object) with a decimal point (repeatable)")
    p.add_argument("--out", help="Write output atomically to this file instead of stdout")


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(prog="decjson", description="JSON formatting with decimal-point control")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    pf = sub.add_parser("fmt", help="Pretty-print JSON")
    _add_common(pf)
    grp = pf.add_mutually_exclusive_group()
    grp.add_argument("--indent", type=int, help=f"Spaces per level, capped at 10 (default {CLI_INDENT_DEFAULT})")
    grp.add_argument("--indent-str", help="Literal indent unit, e.g. $'\\t' (first 10 chars)")
    pf.set_defaults(func=_cmd_fmt)

    pm = sub.add_parser("minify", help="Emit minified JSON")
    _add_common(pm)
    pm.set_defaults(func=_cmd_minify)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
