"""
Shared execution flow for storage adapters.

Adapters implement two primitives, ``_fetch`` (filtered, ordered,
optionally windowed rows) and ``_count``.  The base class maps each
:class:`ExecutionMode` onto them, enforces single-result uniqueness,
applies the configured default ordering, and wraps every call in
logging and instrumentation hooks.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .config import QueryExecutorConfig
from .criteria import OrderSpec
from .exceptions import NonUniqueResultError
from .fields import SortDirection
from .instrumentation import QueryEvent, get_hook_registry
from .ports import IQueryExecutor, ResultKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .criteria import Predicate
    from .domain import FormDeployment
    from .instrumentation import HookRegistry
    from .ports import ExecutionMode

logger = logging.getLogger("form_deployment_query.executor")


class BaseQueryExecutor(IQueryExecutor, ABC):
    """Template for :class:`IQueryExecutor` implementations."""

    def __init__(
        self,
        config: QueryExecutorConfig | None = None,
        *,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.config = config or QueryExecutorConfig()
        self._hooks = hooks

    async def execute(
        self,
        predicates: Sequence[Predicate],
        ordering: Sequence[OrderSpec],
        mode: ExecutionMode,
    ) -> Any:
        event = QueryEvent(
            executor=type(self).__name__,
            mode=mode,
            predicate_count=len(predicates),
            order_count=len(ordering),
        )
        registry = self._hooks if self._hooks is not None else get_hook_registry()

        async def handler() -> Any:
            return await self._dispatch(predicates, ordering, mode)

        start = time.perf_counter()
        try:
            result = await registry.execute_all(event, handler)
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception("%s failed after %.2fms", event.operation, elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug(
            "%s completed in %.2fms (%d predicates, %d order keys)",
            event.operation,
            elapsed,
            event.predicate_count,
            event.order_count,
        )
        return result

    async def _dispatch(
        self,
        predicates: Sequence[Predicate],
        ordering: Sequence[OrderSpec],
        mode: ExecutionMode,
    ) -> Any:
        if mode.kind is ResultKind.COUNT:
            return await self._count(predicates)

        effective = self.effective_ordering(ordering)
        if mode.kind is ResultKind.LIST:
            return await self._fetch(predicates, effective)
        if mode.kind is ResultKind.PAGE:
            return await self._fetch(
                predicates, effective, offset=mode.offset, limit=mode.limit
            )
        if mode.kind is ResultKind.SINGLE:
            # Two rows are enough to tell "unique" from "not unique".
            rows = await self._fetch(predicates, effective, limit=2)
            if len(rows) > 1:
                raise NonUniqueResultError()
            return rows[0] if rows else None
        raise ValueError(f"Unsupported execution mode: {mode.kind}")

    def effective_ordering(self, ordering: Sequence[OrderSpec]) -> tuple[OrderSpec, ...]:
        """Committed ordering, or the configured default when none was given."""
        if ordering or self.config.default_order_field is None:
            return tuple(ordering)
        return (OrderSpec(self.config.default_order_field, SortDirection.ASC),)

    @abstractmethod
    async def _fetch(
        self,
        predicates: Sequence[Predicate],
        ordering: Sequence[OrderSpec],
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[FormDeployment]:
        """Return matching deployments, sorted by *ordering* and windowed."""
        ...

    @abstractmethod
    async def _count(self, predicates: Sequence[Predicate]) -> int: ...
