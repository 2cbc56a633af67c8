"""FastAPI wiring: one registry per application plus an introspection API."""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from hookrail.bootstrap import build_registry
from hookrail.config import HookrailConfig, load_effective_config
from hookrail.models import ActionCountView, HookView
from hookrail.registry import HookRegistry
from hookrail.resolver import CallbackResolver
from hookrail.templating import install_template_globals

PAGE_FOOTER_ACTION = "hookrail_page_footer"


def get_registry(request: Request) -> HookRegistry:
    return request.app.state.hooks


def create_app(
    config: HookrailConfig,
    registry: HookRegistry | None = None,
    resolver: CallbackResolver | None = None,
) -> FastAPI:
    app = FastAPI(title="hookrail")
    app.state.hooks = registry if registry is not None else build_registry(config, resolver=resolver)
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    install_template_globals(templates.env, app.state.hooks)

    @app.get("/", response_class=HTMLResponse)
    def ui_index(request: Request, hooks: HookRegistry = Depends(get_registry)) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "registrations": hooks.describe(),
                "counts": hooks.trigger_counts(),
                "footer_action": PAGE_FOOTER_ACTION,
            },
        )

    @app.get("/api/hooks")
    def api_hooks(hooks: HookRegistry = Depends(get_registry)) -> dict[str, list[HookView]]:
        return {"hooks": hooks.describe()}

    @app.get("/api/hooks/{tag}")
    def api_hook_tag(tag: str, hooks: HookRegistry = Depends(get_registry)) -> dict[str, list[HookView]]:
        if not hooks.has(tag):
            raise HTTPException(status_code=404, detail=f"No callbacks registered for tag={tag}")
        return {"hooks": hooks.describe(tag)}

    @app.get("/api/actions/{tag}/count")
    def api_action_count(tag: str, hooks: HookRegistry = Depends(get_registry)) -> ActionCountView:
        return ActionCountView(
            tag=tag,
            times_triggered=hooks.times_triggered(tag),
            dispatching=hooks.is_dispatching_action(tag),
        )

    return app


def create_app_from_env() -> FastAPI:
    """Uvicorn factory entrypoint for --reload mode."""
    project_path = os.environ.get("HOOKRAIL_PROJECT_PATH", ".")
    config = load_effective_config(project_path=project_path)
    return create_app(config)
