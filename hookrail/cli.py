"""CLI entrypoint for checking, listing and serving configured hooks."""

from __future__ import annotations

from hookrail.commands import check, listing, serve
from hookrail.commands.common import load_config
from hookrail.commands.parser import build_parser
from hookrail.logging_utils import configure_logging

ALIAS_TO_CANONICAL = {"ls": "list"}
COMMANDS = {
    "check": check.run,
    "list": listing.run,
    "serve": serve.run,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args)
    configure_logging(args.log_level or config.logging.level)

    command = ALIAS_TO_CANONICAL.get(args.command, args.command)
    handler = COMMANDS.get(command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args, config=config)


if __name__ == "__main__":
    raise SystemExit(main())
