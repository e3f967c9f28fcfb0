"""Command-line interface for esquery."""

import argparse
import json
import logging
import sys

from .config import settings
from .placeholders import ArgumentAccessor, EsqueryError, PlaceholderResolver


def parse_value(text: str):
    """Parse a command-line value as JSON, falling back to the raw text."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def parse_param(text: str) -> tuple[str, object]:
    """Parse a NAME=VALUE named parameter argument."""
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    return name, parse_value(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esquery",
        description="esquery - Resolve placeholders in search query templates",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser(
        "render", help="Print a query template with its placeholders substituted"
    )
    render_parser.add_argument("template", help="Query template with ?N or :name placeholders")
    render_parser.add_argument(
        "values", nargs="*", help="Positional values (parsed as JSON when possible)"
    )
    render_parser.add_argument(
        "--param",
        "-p",
        action="append",
        type=parse_param,
        default=[],
        metavar="NAME=VALUE",
        help="Named parameter (repeatable)",
    )
    render_parser.add_argument(
        "--named",
        action=argparse.BooleanOptionalAction,
        default=settings.use_named_parameters,
        help="Substitute :name placeholders instead of ?N",
    )
    render_parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=settings.strict_named_parameters,
        help="Fail on undeclared :name placeholders",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())

    if args.command == "render":
        if args.named and args.values:
            parser.error("positional values are not used with --named; pass --param NAME=VALUE")
        if not args.named and args.param:
            parser.error("--param is only used with --named")
        run_render(args)
    else:
        parser.print_help()
        sys.exit(1)


def run_render(args):
    """Resolve and print a template."""
    resolver = PlaceholderResolver(
        use_named_parameters=args.named,
        strict_named_parameters=args.strict,
        allow_fallback_conversion=settings.allow_fallback_conversion,
        named_parameter_prefix=settings.named_parameter_prefix,
    )

    if args.named:
        accessor = ArgumentAccessor.from_mapping(
            dict(args.param), prefix=settings.named_parameter_prefix
        )
    else:
        accessor = ArgumentAccessor([parse_value(v) for v in args.values])

    try:
        print(resolver.resolve(args.template, accessor))
    except EsqueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
