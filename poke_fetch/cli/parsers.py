"""
Argument parsing for the poke-fetch command line tool.
"""

import argparse
from pathlib import Path

from .._version import __version__


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Add configuration and verbosity arguments shared by all commands."""
    parser.add_argument(
        "--config", type=Path, help="Configuration file (YAML or JSON)"
    )

    parser.add_argument(
        "--base-url", help="API root URL (default: https://pokeapi.co/api/v2/)"
    )

    parser.add_argument(
        "--timeout", type=float, help="Total request timeout in seconds"
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v for INFO, -vv for DEBUG)",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )


def add_get_parser(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    parser = subparsers.add_parser(
        "get", help="Fetch a single resource by id or name"
    )
    parser.add_argument("kind", help="Resource kind, e.g. pokemon or pokemon-species")
    parser.add_argument(
        "identifier", help="Numeric id, or a name such as 'Mr. Mime'"
    )


def add_page_parser(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    parser = subparsers.add_parser("page", help="Fetch one page of a collection")
    parser.add_argument("kind", help="Resource kind, e.g. berry")
    parser.add_argument("--limit", type=int, help="Page size")
    parser.add_argument("--offset", type=int, help="Index of the first result")


def add_resolve_parser(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    parser = subparsers.add_parser(
        "resolve", help="Resolve navigation URLs into resources"
    )
    parser.add_argument("urls", nargs="+", help="Navigation URLs ending in a numeric id")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the poke-fetch command."""
    parser = argparse.ArgumentParser(
        prog="poke-fetch",
        description="Fetch typed resources from the Pokémon catalog API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  poke-fetch get pokemon 25
  poke-fetch get pokemon-species "Mr. Mime"
  poke-fetch page berry --limit 20 --offset 40
  poke-fetch resolve https://pokeapi.co/api/v2/type/13/
  poke-fetch kinds
        """,
    )

    add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    add_get_parser(subparsers)
    add_page_parser(subparsers)
    add_resolve_parser(subparsers)
    subparsers.add_parser("kinds", help="List the known resource kinds")

    return parser
