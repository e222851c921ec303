"""
Command-line interface for the link registry.

Works directly on the configured data file (same settings and environment
variables as the server), so it must not run while a server is writing to
the same file. Results are printed to stdout as JSON, logs go to stderr.

Usage:
    shortlinks shorten <url> [--code CODE]
    shortlinks get <code>
    shortlinks delete <code>
    shortlinks list
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from config import Config, load_config
from .registry import build_registry
from .errors import RegistryError
from .common.logging_config import setup_logging


def _emit(payload: dict, error: bool = False) -> int:
    print(json.dumps(payload, indent=2))
    return 1 if error else 0


class ShortlinksCLI:
    """Command-line interface for the link registry."""

    def __init__(self, config: Config, verbose: bool = False):
        self.logger = setup_logging(
            level="DEBUG" if verbose else "WARNING",
            log_file=config.log_file,
            json_format=config.log_json,
            stream=sys.stderr,
        )
        self.registry = build_registry(config, self.logger)

    async def shorten(self, url: str, code: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            short_code = await self.registry.create(url, code)
        except RegistryError as e:
            return _emit({"success": False, "error": e.message}, error=True)
        return _emit({"success": True, "shortCode": short_code, "url": url})

    async def get(self, code: str) -> int:
        """Get the target URL for a code."""
        try:
            target = await self.registry.lookup(code)
        except RegistryError as e:
            return _emit({"success": False, "error": e.message}, error=True)
        if target is None:
            return _emit({"success": False, "error": f"Short code '{code}' not found"}, error=True)
        return _emit({"success": True, "shortCode": code, "url": target})

    async def delete(self, code: str) -> int:
        """Delete a link."""
        try:
            await self.registry.delete(code)
        except RegistryError as e:
            return _emit({"success": False, "error": e.message}, error=True)
        return _emit({"success": True, "shortCode": code})

    async def list_links(self) -> int:
        """List every link."""
        try:
            entries = await self.registry.list_entries()
        except RegistryError as e:
            return _emit({"success": False, "error": e.message}, error=True)
        return _emit({
            "success": True,
            "count": len(entries),
            "links": [entry.to_dict() for entry in entries],
        })


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortlinks",
        description="Manage short links stored in a JSON data file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with custom code
  %(prog)s shorten https://example.com/long/url --code mylink

  # Look up, delete, list
  %(prog)s get mylink
  %(prog)s delete mylink
  %(prog)s list
        """
    )

    parser.add_argument(
        "--data-file",
        help="Path of the data file (overrides DATA_FILE)"
    )

    parser.add_argument(
        "--no-reset",
        action="store_true",
        help="Fail instead of resetting a corrupt data file (overrides RESET_ON_CORRUPT)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--code", help="Custom short code")

    get_parser = subparsers.add_parser("get", help="Get target URL")
    get_parser.add_argument("code", help="Short code to look up")

    delete_parser = subparsers.add_parser("delete", help="Delete a short code")
    delete_parser.add_argument("code", help="Short code to delete")

    subparsers.add_parser("list", help="List all links")

    return parser


async def run(argv: Optional[list] = None) -> int:
    """Parse arguments and execute one command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_config()
    overrides = {}
    if args.data_file:
        overrides["data_file"] = args.data_file
    if args.no_reset:
        overrides["reset_on_corrupt"] = False
    if overrides:
        config = config.model_copy(update=overrides)

    cli = ShortlinksCLI(config, verbose=args.verbose)

    if args.command == "shorten":
        return await cli.shorten(args.url, args.code)
    elif args.command == "get":
        return await cli.get(args.code)
    elif args.command == "delete":
        return await cli.delete(args.code)
    elif args.command == "list":
        return await cli.list_links()

    parser.print_help()
    return 1


def main() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
