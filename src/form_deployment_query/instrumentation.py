"""
Instrumentation hooks wrapped around every query execution.

Hooks receive a :class:`QueryEvent` describing the execution and an
awaitable ``next_handler`` that runs the rest of the pipeline, so a hook
can time, trace, count or veto a query::

    async def timing_hook(event, next_handler):
        start = time.perf_counter()
        try:
            return await next_handler()
        finally:
            metrics.observe(event.operation, time.perf_counter() - start)

    get_hook_registry().register(timing_hook, kinds={ResultKind.LIST})
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from .ports import ExecutionMode, ResultKind

logger = logging.getLogger("form_deployment_query.instrumentation")


@dataclass(frozen=True)
class QueryEvent:
    """One execution as seen by hooks."""

    executor: str
    mode: ExecutionMode
    predicate_count: int
    order_count: int

    @property
    def kind(self) -> ResultKind:
        return self.mode.kind

    @property
    def operation(self) -> str:
        """Dotted name used in logs, e.g. ``deployment_query.page``."""
        return f"deployment_query.{self.mode.kind.value}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "executor": self.executor,
            "mode": self.mode.kind.value,
            "offset": self.mode.offset,
            "limit": self.mode.limit,
            "predicate_count": self.predicate_count,
            "order_count": self.order_count,
        }


@runtime_checkable
class InstrumentationHook(Protocol):
    async def __call__(
        self,
        event: QueryEvent,
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any: ...


class HookRegistration:
    """A hook plus the filter deciding which executions it wraps."""

    def __init__(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        kinds: Iterable[ResultKind] | None = None,
        predicate: Callable[[QueryEvent], bool] | None = None,
    ) -> None:
        self.hook = hook
        self.priority = priority
        self.kinds = frozenset(kinds) if kinds is not None else None
        self.predicate = predicate

    def matches(self, event: QueryEvent) -> bool:
        if self.kinds is not None and event.kind not in self.kinds:
            return False
        return self.predicate is None or self.predicate(event)


class HookRegistry:
    """Ordered set of hooks; lower priority values wrap further out."""

    def __init__(self) -> None:
        self._registrations: list[HookRegistration] = []

    def register(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        kinds: Iterable[ResultKind] | None = None,
        predicate: Callable[[QueryEvent], bool] | None = None,
    ) -> HookRegistration:
        """
        Add *hook* to the pipeline.

        Args:
            priority: Sort key; equal priorities keep registration order.
            kinds: Only wrap executions of these result kinds.
            predicate: Only wrap executions for which this returns True.
        """
        registration = HookRegistration(
            hook, priority=priority, kinds=kinds, predicate=predicate
        )
        self._registrations.append(registration)
        self._registrations.sort(key=lambda r: r.priority)
        logger.debug(
            "Registered instrumentation hook %s (priority=%d)",
            type(hook).__name__,
            priority,
        )
        return registration

    async def execute_all(
        self,
        event: QueryEvent,
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run *next_handler* inside every hook that matches *event*."""
        matching = [r for r in self._registrations if r.matches(event)]

        async def pipeline(index: int = 0) -> Any:
            if index >= len(matching):
                return await next_handler()
            return await matching[index].hook(event, lambda: pipeline(index + 1))

        return await pipeline()


_hook_registry_var: ContextVar[HookRegistry | None] = ContextVar(
    "deployment_query_hook_registry", default=None
)


def get_hook_registry() -> HookRegistry:
    """Registry for the current context, created on first access.

    Executors built without an explicit ``hooks=`` use this one.
    """
    registry = _hook_registry_var.get()
    if registry is None:
        registry = HookRegistry()
        _hook_registry_var.set(registry)
    return registry


def set_hook_registry(registry: HookRegistry) -> None:
    _hook_registry_var.set(registry)
