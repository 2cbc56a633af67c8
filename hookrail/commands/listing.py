"""Print configured registrations."""

from __future__ import annotations

import argparse
import json

from hookrail.bootstrap import build_registry
from hookrail.config import HookrailConfig


def run(args: argparse.Namespace, *, config: HookrailConfig) -> int:
    registry = build_registry(config)
    views = registry.describe(args.tag)
    print(json.dumps([view.model_dump() for view in views], indent=2))
    return 0
