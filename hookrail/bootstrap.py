"""Build a registry from configured bindings."""

from __future__ import annotations

import logging

from hookrail.config import BindingConfig, HookrailConfig
from hookrail.models import HookKind
from hookrail.registry import HookRegistry
from hookrail.resolver import CallbackResolver

logger = logging.getLogger(__name__)


def register_binding(
    registry: HookRegistry,
    binding: BindingConfig,
    resolver: CallbackResolver,
    config: HookrailConfig,
) -> None:
    callback = resolver.resolve(binding.callback)
    priority = binding.priority if binding.priority is not None else config.defaults.priority
    accepted_args = binding.accepted_args if binding.accepted_args is not None else config.defaults.accepted_args

    if binding.kind == HookKind.ACTION:
        registry.register_action(binding.tag, callback, priority, accepted_args)
    else:
        registry.register_filter(binding.tag, callback, priority, accepted_args)


def build_registry(
    config: HookrailConfig,
    resolver: CallbackResolver | None = None,
    registry: HookRegistry | None = None,
) -> HookRegistry:
    """Register every configured binding; descriptor errors propagate."""
    resolver = resolver or CallbackResolver()
    registry = registry or HookRegistry()
    for binding in config.bindings:
        register_binding(registry, binding, resolver, config)
    logger.info("Registered %s configured bindings across %s tags", len(config.bindings), len(registry.tags()))
    return registry
