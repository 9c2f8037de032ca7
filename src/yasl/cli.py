"""Command-line entry point for the YASL front end."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .errors import YaslError
from .lexer import Lexer
from .parser import Parser
from .printer import (
    dump_tree,
    format_expression,
    format_program,
    format_token,
    node_to_dict,
    token_to_dict,
)

logger = logging.getLogger(__name__)


#reads a source path, `-` meaning standard input
def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


#handles the `yasl tokens` subcommand
def cmd_tokens(args: argparse.Namespace) -> int:
    source = read_source(args.source)
    tokens = Lexer(source).lex()
    if args.json:
        print(json.dumps([token_to_dict(token) for token in tokens], indent=2))
    else:
        for token in tokens:
            print(format_token(token))
    return 0


#handles `yasl parse` for whole programs or a single `--expression`
def cmd_parse(args: argparse.Namespace) -> int:
    if args.expression is not None:
        tree = Parser(Lexer(args.expression)).parse_expression()
    else:
        tree = Parser(Lexer(read_source(args.source))).parse()

    if args.format == "json":
        print(json.dumps(node_to_dict(tree, include_spans=not args.no_spans), indent=2))
    elif args.format == "canonical":
        if args.expression is not None:
            print(format_expression(tree))
        else:
            print(format_program(tree))
    else:
        print(dump_tree(tree))
    return 0


#configures the CLI surface across tokens/parse
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="yasl", description="YASL front-end tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_tokens = subparsers.add_parser("tokens", help="list the tokens of a source file")
    p_tokens.add_argument("source", help="path to source file, or - for stdin")
    p_tokens.add_argument("--json", action="store_true", help="emit tokens as JSON")
    p_tokens.set_defaults(func=cmd_tokens)

    p_parse = subparsers.add_parser("parse", help="parse a program and print its syntax tree")
    p_parse.add_argument("source", nargs="?", help="path to source file, or - for stdin")
    p_parse.add_argument("-e", "--expression", help="parse a single expression instead of a file")
    p_parse.add_argument(
        "-f",
        "--format",
        choices=("tree", "json", "canonical"),
        default="tree",
        help="output format (default: tree)",
    )
    p_parse.add_argument("--no-spans", action="store_true", help="omit source spans from JSON output")
    p_parse.set_defaults(func=cmd_parse)

    return parser


#entry point used by both console script and module execution
def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "parse" and (args.source is None) == (args.expression is None):
        parser.error("parse takes exactly one of SOURCE or --expression")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except YaslError as exc:
        if getattr(args, "expression", None) is not None:
            origin = "<expression>"
        else:
            origin = "<stdin>" if args.source == "-" else args.source
        print(f"{origin}:{exc.location}: error: {exc.message}", file=sys.stderr)
        logger.debug("aborted on %s", type(exc).__name__)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        message = getattr(exc, "strerror", None) or str(exc)
        print(f"{args.source}: error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
