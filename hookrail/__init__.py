"""Filter and action hook registry."""

from hookrail.errors import DescriptorResolutionError, HookrailError
from hookrail.registry import ALL_TAG, DEFAULT_ACCEPTED_ARGS, DEFAULT_PRIORITY, HookRegistry
from hookrail.resolver import CallbackResolver

__all__ = [
    "ALL_TAG",
    "CallbackResolver",
    "DEFAULT_ACCEPTED_ARGS",
    "DEFAULT_PRIORITY",
    "DescriptorResolutionError",
    "HookRegistry",
    "HookrailError",
]
