from src.services import (
    fetch_orchestrator,
    mutation_coordinator,
    state_container,
    task_reducer,
    task_store,
    task_views,
)


__all__ = [
    "fetch_orchestrator",
    "mutation_coordinator",
    "state_container",
    "task_reducer",
    "task_store",
    "task_views",
]
