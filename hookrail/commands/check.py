"""Validate configured bindings."""

from __future__ import annotations

import argparse
import logging

from hookrail.bootstrap import register_binding
from hookrail.config import HookrailConfig
from hookrail.errors import DescriptorResolutionError
from hookrail.registry import HookRegistry
from hookrail.resolver import CallbackResolver

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, config: HookrailConfig) -> int:
    _ = args
    registry = HookRegistry()
    resolver = CallbackResolver()
    failures = 0
    for binding in config.bindings:
        try:
            register_binding(registry, binding, resolver, config)
        except DescriptorResolutionError as exc:
            failures += 1
            logger.error("Binding %s -> %s failed: %s", binding.tag, binding.callback, exc.reason)

    logger.info("Checked %s bindings: ok=%s failed=%s", len(config.bindings), len(config.bindings) - failures, failures)
    return 1 if failures else 0
