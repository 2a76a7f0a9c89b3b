#!/usr/bin/env python3
"""Command-line interface for FabricFS.

Inspect how fabric URIs parse and resolve:
- ``parse``: show segments and hierarchy level (no registry needed)
- ``resolve``: validate against the registry and show the cache node
- ``link``: print the browser URL for a URI

Example:
    >>> from fabricfs.cli import parse_arguments
    >>> args = parse_arguments(["parse", "fabric://ws/Notebook/nb"])
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

import yaml

from fabricfs.core.constants import FABRICFS_VERSION, ConfigKey
from fabricfs.errors import FabricUriError, NotFound
from fabricfs.filesystem import FabricFS
from fabricfs.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from fabricfs.infrastructure.logger import Logger
from fabricfs.items.nodes import CacheItem, ItemNode
from fabricfs.uri.address import Address

DESCRIPTION = "FabricFS - resolve fabric:// URIs to workspace items"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="fabricfs",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show how a URI is split
  fabricfs parse fabric://Sales/Notebook/Load/notebook-content.py

  # Resolve names preloaded from a config file
  fabricfs --config fabricfs.yaml resolve fabric://Sales/Notebook/Load

  # Register a workspace name on the fly and print its browser link
  fabricfs --register-workspace Sales=00000000-0000-0000-0000-000000000001 link fabric://Sales
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {FABRICFS_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument(
        "--register-workspace",
        metavar="NAME=ID",
        action="append",
        default=[],
        dest="workspaces",
        help="Register a workspace name (can be specified multiple times)",
    )

    parser.add_argument(
        "--tenant",
        metavar="ID",
        type=str,
        help="Tenant id appended to browser links",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "command",
        choices=["parse", "resolve", "link"],
        help="Operation to perform",
    )

    parser.add_argument("uri", help="fabric:// URI")

    return parser.parse_args(args)


def parse_registrations(pairs: List[str]) -> Dict[str, str]:
    """
    Turn NAME=ID arguments into a name -> id mapping.

    Raises:
        CLIError: If a pair has no '=' or an empty side
    """
    mapping = {}
    for pair in pairs:
        name, sep, workspace_id = pair.partition("=")
        if not sep or not name or not workspace_id:
            raise CLIError(f"Expected NAME=ID, got: {pair}")
        mapping[name] = workspace_id
    return mapping


def build_config(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration manager from file and arguments.

    Raises:
        CLIError: If the config file cannot be loaded
    """
    try:
        config = ConfigManager(args.config)
    except ConfigError as e:
        raise CLIError(e.message)

    if args.debug:
        config.set(f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_LEVEL}", "DEBUG",
                   ConfigSource.CLI_ARGS)

    if args.tenant:
        config.set(f"{ConfigKey.ROOT}.{ConfigKey.BROWSER}.{ConfigKey.BROWSER_TENANT_ID}",
                   args.tenant, ConfigSource.CLI_ARGS)

    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Configure the root ``fabricfs`` logger from configuration.

    Returns:
        Configured logger instance
    """
    logging_key = f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}"
    logger = Logger("fabricfs", level=config.get(f"{logging_key}.{ConfigKey.LOG_LEVEL}", "INFO"))

    log_file = config.get(f"{logging_key}.{ConfigKey.LOG_FILE}")
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    return logger


def describe_address(address: Address) -> Dict[str, Any]:
    return {
        "uri": address.to_uri(),
        "level": address.level.name,
        "workspace": address.workspace,
        "item_type": address.item_type_name,
        "item": address.item,
        "part": address.part,
        "key": address.uri_key,
    }


def describe_node(node: CacheItem) -> Dict[str, Any]:
    description = {
        "node": type(node).__name__,
        "key": node.uri_key,
        "workspace_id": node.workspace_id,
        "item_type": node.item_type.value if node.item_type else None,
        "display_name": node.display_name,
    }
    if isinstance(node, ItemNode):
        description["item_id"] = node.item_id
    return description


def run(args: argparse.Namespace, fs: FabricFS) -> int:
    """Execute one command and print its result as YAML."""
    if args.command == "parse":
        result = describe_address(fs.parse(args.uri))
    elif args.command == "resolve":
        result = describe_node(fs.resolve(args.uri))
    else:
        result = {"url": fs.browser_url(args.uri)}

    print(yaml.safe_dump(result, sort_keys=False), end="")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        config = build_config(args)
        setup_logging(config)

        fs = FabricFS.from_config(config)
        for name, workspace_id in parse_registrations(args.workspaces).items():
            fs.register_workspace(name, workspace_id)

        return run(args, fs)

    except NotFound as e:
        print(f"Not found: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND

    except (CLIError, FabricUriError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
