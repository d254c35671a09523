"""List-backed deployment executor for tests and fakes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..executor import BaseQueryExecutor
from ..operators_memory import PredicateEvaluator

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable, Sequence

    from ..config import QueryExecutorConfig
    from ..criteria import OrderSpec, Predicate
    from ..domain import FormDeployment
    from ..instrumentation import HookRegistry


class InMemoryDeploymentExecutor(BaseQueryExecutor):
    """Evaluates deployment queries against deployments held in memory.

    Deployments are kept in insertion order, which is the result order
    when neither the query nor the config supplies an ordering.  Adding a
    deployment whose id is already stored replaces it in place.
    """

    def __init__(
        self,
        deployments: Iterable[FormDeployment] = (),
        config: QueryExecutorConfig | None = None,
        *,
        evaluator: PredicateEvaluator | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        super().__init__(config, hooks=hooks)
        self._evaluator = evaluator or PredicateEvaluator.from_config(self.config)
        self._store: dict[str, FormDeployment] = {}
        for deployment in deployments:
            self.add(deployment)

    def add(self, deployment: FormDeployment) -> None:
        self._store[deployment.id] = deployment

    @staticmethod
    def sort(
        deployments: builtins.list[FormDeployment],
        ordering: Sequence[OrderSpec],
    ) -> builtins.list[FormDeployment]:
        """Stable multi-key sort; ``None`` sorts before any value."""
        result = list(deployments)
        # Least significant key first so earlier keys win.
        for spec in reversed(ordering):
            result.sort(
                key=lambda d, attr=spec.attribute: _sort_key(getattr(d, attr, None)),
                reverse=spec.descending,
            )
        return result

    def _matching(
        self, predicates: Sequence[Predicate]
    ) -> builtins.list[FormDeployment]:
        matches = self._evaluator.matches
        return [d for d in self._store.values() if matches(d, predicates)]

    # -- BaseQueryExecutor --------------------------------------------------

    async def _fetch(
        self,
        predicates: Sequence[Predicate],
        ordering: Sequence[OrderSpec],
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> builtins.list[FormDeployment]:
        matched = self.sort(self._matching(predicates), ordering)
        start = offset or 0
        end = start + limit if limit is not None else None
        return matched[start:end]

    async def _count(self, predicates: Sequence[Predicate]) -> int:
        return len(self._matching(predicates))


def _sort_key(value: Any) -> tuple[bool, Any]:
    return (value is not None, value if value is not None else 0)
