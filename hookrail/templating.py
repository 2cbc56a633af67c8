"""Jinja2 template globals that forward to a hook registry.

    {{ do_action("page_footer", page) }}
    <title>{{ apply_filters("page_title", page.title) }}</title>

``do_action`` renders as an empty string; only its callbacks' side effects matter.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment

from hookrail.registry import HookRegistry


def install_template_globals(env: Environment, registry: HookRegistry) -> Environment:
    def do_action(tag: str, arg: Any = "") -> str:
        registry.trigger_action(tag, arg)
        return ""

    def apply_filters(tag: str, value: Any, *args: Any) -> Any:
        return registry.apply_filters(tag, value, *args)

    env.globals["do_action"] = do_action
    env.globals["apply_filters"] = apply_filters
    env.globals["hooks"] = registry
    return env
