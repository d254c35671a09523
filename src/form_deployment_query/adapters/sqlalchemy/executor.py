"""Runs deployment queries on an async SQLAlchemy session."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from ...executor import BaseQueryExecutor
from .compiler import build_deployment_filter, build_order_clauses
from .models import FormDeploymentModel, to_entity

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from ...config import QueryExecutorConfig
    from ...criteria import OrderSpec, Predicate
    from ...domain import FormDeployment
    from ...instrumentation import HookRegistry

logger = logging.getLogger(__name__)


class SQLAlchemyDeploymentExecutor(BaseQueryExecutor):
    """
    Executes deployment queries with SQLAlchemy.

    Each execution opens its own session from ``session_factory``
    (typically an ``async_sessionmaker``) and closes it afterwards.
    Driver errors propagate unchanged.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        config: QueryExecutorConfig | None = None,
        *,
        hooks: HookRegistry | None = None,
    ) -> None:
        super().__init__(config, hooks=hooks)
        self._session_factory = session_factory

    async def _fetch(
        self,
        predicates: Sequence[Predicate],
        ordering: Sequence[OrderSpec],
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[FormDeployment]:
        stmt = select(FormDeploymentModel)
        where = build_deployment_filter(
            predicates, empty_tenant_is_absent=self.config.empty_tenant_is_absent
        )
        if where is not None:
            stmt = stmt.where(where)
        order_clauses = build_order_clauses(ordering)
        if order_clauses:
            stmt = stmt.order_by(*order_clauses)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        logger.debug("Executing %s", stmt)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [to_entity(m) for m in result.scalars().all()]

    async def _count(self, predicates: Sequence[Predicate]) -> int:
        stmt = select(func.count()).select_from(FormDeploymentModel)
        where = build_deployment_filter(
            predicates, empty_tenant_is_absent=self.config.empty_tenant_is_absent
        )
        if where is not None:
            stmt = stmt.where(where)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())
