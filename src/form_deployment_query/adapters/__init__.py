"""Storage adapters implementing :class:`IQueryExecutor`."""

from .memory import InMemoryDeploymentExecutor

__all__ = ["InMemoryDeploymentExecutor"]
