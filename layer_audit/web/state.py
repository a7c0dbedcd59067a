"""In-memory state for the web API: the audit result being served."""

from __future__ import annotations

from layer_audit.graph import Package
from layer_audit.pipeline import AuditResult


class AppState:
    """Singleton holding the audit result shared by all API routes."""

    def __init__(self):
        self.result: AuditResult | None = None

    def set_result(self, result: AuditResult) -> None:
        self.result = result

    def find(self, name: str) -> list[Package]:
        if self.result is None:
            return []
        return self.result.registry.find_by_name(name)


# Module-level singleton, imported by all routers
state = AppState()
