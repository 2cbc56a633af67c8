"""CLI parser construction."""

from __future__ import annotations

import argparse

from hookrail.commands.common import add_common_config_flags


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hookrail filter/action hook registry")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR); overrides logging.level")

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Resolve every configured binding and report failures")
    add_common_config_flags(check)

    listing = sub.add_parser("list", aliases=["ls"], help="Print configured registrations as JSON")
    listing.add_argument("--tag", help="Only show registrations for this tag")
    add_common_config_flags(listing)

    serve = sub.add_parser("serve", help="Serve the hook introspection API")
    serve.add_argument("--host", default=None, help="Bind host (defaults to server.host)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (defaults to server.port)")
    serve.add_argument("--reload", action="store_true", help="Enable uvicorn auto-reload")
    add_common_config_flags(serve)

    return parser
