import argparse
import json
import sys
from typing import TextIO

import structlog

from kumiki.constants import EXAMPLE_ABBREVIATIONS
from kumiki.errors import AbbreviationError
from kumiki.expander import Expansion, try_expand
from kumiki.log import VALID_LEVELS, configure_logging
from kumiki.node import print_tree
from kumiki.preview import build_preview_document
from kumiki.renderer import OutputOptions, RenderMode

logger = structlog.get_logger()


def build_argparser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        prog="kumiki",
        description="Expand an abbreviation such as 'ul>li.item$*3' into HTML.",
    )
    argparser.add_argument(
        "abbreviation",
        nargs="?",
        help="abbreviation to expand; read line by line from stdin when omitted",
    )
    argparser.add_argument("--indent", type=int, default=2,
                           help="spaces per indentation level")
    argparser.add_argument("--tabs", action="store_true",
                           help="indent with tabs instead of spaces")
    argparser.add_argument("--base-indent", default="",
                           help="prefix added to every output line")
    argparser.add_argument("--compact", action="store_true",
                           help="emit everything on a single line")

    output = argparser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true",
                        help="print html and the parsed nodes as JSON")
    output.add_argument("--tree", action="store_true",
                        help="print the parsed node tree")
    output.add_argument("--preview", action="store_true",
                        help="print a standalone preview document")
    output.add_argument("--examples", action="store_true",
                        help="list example abbreviations and their expansions")

    argparser.add_argument("--log-level", choices=VALID_LEVELS)
    return argparser


def options_from_args(args: argparse.Namespace) -> OutputOptions:
    if args.indent < 0:
        raise ValueError("--indent must not be negative")
    return OutputOptions(
        indent="\t" if args.tabs else " " * args.indent,
        base_indent=args.base_indent,
        mode=RenderMode.COMPACT if args.compact else RenderMode.FORMATTED,
    )


def print_error(
    error: AbbreviationError, abbreviation: str, file: TextIO
) -> None:
    print(f"error: {error}", file=file)
    if error.position is not None and abbreviation.strip():
        print(f"  {abbreviation}", file=file)
        print("  " + " " * error.position + "^", file=file)


def print_expansion(
    expansion: Expansion, args: argparse.Namespace, file: TextIO
) -> None:
    if args.json:
        print(json.dumps(expansion.to_dict(), indent=2), file=file)
    elif args.tree:
        print_tree(expansion.nodes, file=file)
    elif args.preview:
        print(build_preview_document(expansion.html), file=file)
    else:
        print(expansion.html, file=file)


def run_one(
    abbreviation: str, args: argparse.Namespace, options: OutputOptions
) -> bool:
    result = try_expand(abbreviation, options)
    if isinstance(result, AbbreviationError):
        if args.json:
            print(json.dumps({"error": result.to_dict()}, indent=2))
        else:
            print_error(result, abbreviation, sys.stderr)
        return False

    print_expansion(result, args, sys.stdout)
    return True


def run_examples(options: OutputOptions) -> None:
    for abbreviation in EXAMPLE_ABBREVIATIONS:
        result = try_expand(abbreviation, options)
        print(f"# {abbreviation}")
        print(result.html if isinstance(result, Expansion) else f"error: {result}")
        print()


def main(argv: list[str] | None = None) -> int:
    argparser = build_argparser()
    args = argparser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        options = options_from_args(args)
    except ValueError as e:
        argparser.error(str(e))

    if args.examples:
        run_examples(options)
        return 0

    if args.abbreviation is not None:
        return 0 if run_one(args.abbreviation, args, options) else 1

    # interactive: one abbreviation per line until EOF
    failed = False
    for line in sys.stdin:
        abbreviation = line.rstrip("\r\n")
        if not abbreviation.strip():
            continue
        logger.debug("stdin_abbreviation", abbreviation=abbreviation)
        if not run_one(abbreviation, args, options):
            failed = True
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
