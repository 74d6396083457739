"""Application layer - view orchestration and scheduling."""

from storefront.application.debounce import AsyncioScheduler, Debouncer, Scheduler
from storefront.application.orchestrator import ViewOrchestrator, ViewSnapshot

__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "Scheduler",
    "ViewOrchestrator",
    "ViewSnapshot",
]
