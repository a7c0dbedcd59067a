"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from layer_audit.pipeline import AuditResult
from layer_audit.web.api import router
from layer_audit.web.state import state


def create_app(result: AuditResult | None = None) -> FastAPI:
    app = FastAPI(title="layer-audit", version="0.1.0")
    if result is not None:
        state.set_result(result)
    app.include_router(router)
    return app
