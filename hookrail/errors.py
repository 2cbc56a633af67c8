"""Exception types raised by hookrail collaborators."""

from __future__ import annotations


class HookrailError(Exception):
    """Base class for hookrail errors."""


class DescriptorResolutionError(HookrailError, ValueError):
    """A callback descriptor could not be turned into something callable."""

    def __init__(self, descriptor: object, reason: str) -> None:
        self.descriptor = descriptor
        self.reason = reason
        super().__init__(f"{descriptor!r} is not a callable: {reason}")
