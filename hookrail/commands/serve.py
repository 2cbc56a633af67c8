"""Serve the introspection API."""

from __future__ import annotations

import argparse
import logging
import os

from hookrail.config import HookrailConfig

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, config: HookrailConfig) -> int:
    import uvicorn

    host = args.host or config.server.host
    port = args.port or config.server.port
    log_level = (args.log_level or config.logging.level).lower()

    logger.info("Starting hookrail API on http://%s:%s", host, port)
    if args.reload:
        os.environ["HOOKRAIL_PROJECT_PATH"] = str(args.project_path)
        uvicorn.run(
            "hookrail.webapp:create_app_from_env",
            host=host,
            port=port,
            reload=True,
            factory=True,
            log_level=log_level,
        )
    else:
        from hookrail.webapp import create_app

        uvicorn.run(create_app(config), host=host, port=port, reload=False, log_level=log_level)
    return 0
