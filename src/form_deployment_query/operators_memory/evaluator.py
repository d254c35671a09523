"""Evaluates deployment predicates against in-memory entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .null import AbsentOperator, IsNullOperator
from .standard import EqualOperator, NotEqualOperator
from .string import LikeOperator

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..config import QueryExecutorConfig
    from ..criteria import Predicate
    from ..domain import FormDeployment
    from ..operators import QueryOperator
    from .base import MemoryOperator


class PredicateEvaluator:
    """
    Matches :class:`FormDeployment` instances against committed predicates.

    Holds one :class:`MemoryOperator` per :class:`QueryOperator`.  The
    ``is_null`` strategy follows ``empty_tenant_is_absent``: when set, a
    deployment stored with ``tenant_id=""`` counts as having no tenant.

    Usage::

        evaluator = PredicateEvaluator.from_config(config)
        hits = [d for d in deployments if evaluator.matches(d, predicates)]
    """

    def __init__(
        self,
        *,
        empty_tenant_is_absent: bool = True,
        operators: Iterable[MemoryOperator] = (),
    ) -> None:
        self.empty_tenant_is_absent = empty_tenant_is_absent
        null_check = AbsentOperator() if empty_tenant_is_absent else IsNullOperator()
        self._operators: dict[QueryOperator, MemoryOperator] = {}
        for operator in (
            EqualOperator(),
            NotEqualOperator(),
            LikeOperator(),
            null_check,
            *operators,
        ):
            self.register(operator)

    @classmethod
    def from_config(cls, config: QueryExecutorConfig) -> PredicateEvaluator:
        return cls(empty_tenant_is_absent=config.empty_tenant_is_absent)

    def register(self, operator: MemoryOperator) -> None:
        """Install *operator*, replacing any strategy for the same operator."""
        self._operators[operator.name] = operator

    def matches(
        self, deployment: FormDeployment, predicates: Sequence[Predicate]
    ) -> bool:
        """True if *deployment* satisfies every predicate."""
        return all(self.evaluate(predicate, deployment) for predicate in predicates)

    def evaluate(self, predicate: Predicate, deployment: FormDeployment) -> bool:
        """
        Decide a single predicate.

        A collection attribute such as ``form_definition_keys`` is
        satisfied when any element satisfies the operator.

        Raises:
            ValueError: If no strategy handles the predicate's operator.
        """
        operator = self._operators.get(predicate.operator)
        if operator is None:
            raise ValueError(
                f"Unsupported operator for in-memory evaluation: {predicate.operator}"
            )
        value: Any = getattr(deployment, predicate.attribute, None)
        if isinstance(value, list | tuple):
            return any(operator.evaluate(item, predicate.value) for item in value)
        return operator.evaluate(value, predicate.value)
