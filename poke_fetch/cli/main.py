#!/usr/bin/env python3
"""
Command-line interface for the poke_fetch library.

Each subcommand maps onto one resolver operation and prints the decoded
resource as JSON.
"""

import argparse
import asyncio
import sys
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..config import ConfigLoader, GlobalConfig, LogLevel
from ..exceptions import ConfigurationError, PokeFetchError
from ..logging import cleanup_logging, setup_logging
from ..models import ClientConfig, NamedResource
from ..registry import EndpointRegistry, default_registry
from ..resolver import ResourceResolver
from .parsers import create_parser

console = Console()
error_console = Console(stderr=True)

CommandHandler = Callable[[ResourceResolver, argparse.Namespace], Awaitable[Any]]


def lookup_kind(name: str, registry: EndpointRegistry = default_registry) -> type:
    """
    Find a registered kind by endpoint path or class name.

    ``pokemon-species``, ``pokemon_species`` and ``PokemonSpecies`` all name
    the same kind.
    """
    kind = registry.kind_for(name.lower().replace("_", "-"))
    if kind is not None:
        return kind

    for candidate, _ in registry.items():
        if candidate.__name__.lower() == name.lower():
            return candidate

    raise ConfigurationError(f"Unknown resource kind: {name}")


def build_config(args: argparse.Namespace) -> GlobalConfig:
    """Load configuration and apply command line overrides."""
    config = ConfigLoader().load_config(args.config)

    overrides: Dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.timeout is not None:
        overrides["total_timeout"] = args.timeout
    if overrides:
        config.client = ClientConfig(**{**config.client.model_dump(), **overrides})

    if args.verbose:
        config.logging.level = LogLevel.DEBUG if args.verbose > 1 else LogLevel.INFO

    return config


async def get_command(resolver: ResourceResolver, args: argparse.Namespace) -> Any:
    kind = lookup_kind(args.kind, resolver.registry)
    if args.identifier.isdigit():
        resource = await resolver.fetch_by_id(kind, int(args.identifier))
    elif issubclass(kind, NamedResource):
        resource = await resolver.fetch_by_name(kind, args.identifier)
    else:
        raise ConfigurationError(
            f"{kind.__name__} resources can only be fetched by numeric id"
        )
    return resource.model_dump(mode="json")


async def page_command(resolver: ResourceResolver, args: argparse.Namespace) -> Any:
    kind = lookup_kind(args.kind, resolver.registry)
    page = await resolver.fetch_page(kind, limit=args.limit, offset=args.offset)
    return page.model_dump(mode="json")


async def resolve_command(resolver: ResourceResolver, args: argparse.Namespace) -> Any:
    resources = await resolver.resolve_all(args.urls)
    return [resource.model_dump(mode="json") for resource in resources]


COMMANDS: Dict[str, CommandHandler] = {
    "get": get_command,
    "page": page_command,
    "resolve": resolve_command,
}


def print_kinds(registry: EndpointRegistry = default_registry) -> None:
    table = Table(title="Resource kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Endpoint")
    table.add_column("Named")

    for kind, path in registry.items():
        named = "yes" if issubclass(kind, NamedResource) else "no"
        table.add_row(kind.__name__, path, named)

    console.print(table)


async def run_command(
    args: argparse.Namespace,
    config: GlobalConfig,
    resolver: Optional[ResourceResolver] = None,
) -> int:
    """
    Run one resolver-backed subcommand and print its result.

    Args:
        args: Parsed arguments
        config: Effective configuration
        resolver: Resolver to use; one is created and closed when omitted

    Returns:
        Process exit status
    """
    handler = COMMANDS[args.command]
    owns_resolver = resolver is None
    active = resolver or ResourceResolver(config.client)

    try:
        data = await handler(active, args)
    except (PokeFetchError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1
    finally:
        if owns_resolver:
            await active.close()

    console.print_json(data=data)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 2

    if args.command == "kinds":
        print_kinds()
        return 0

    try:
        config = build_config(args)
    except (ConfigurationError, ValidationError) as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(config.logging)
    try:
        return asyncio.run(run_command(args, config))
    except KeyboardInterrupt:
        error_console.print("Interrupted")
        return 130
    finally:
        cleanup_logging()


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
