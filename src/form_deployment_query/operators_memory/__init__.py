"""
In-memory operator strategies and the predicate evaluator built on them.

Usage::

    from form_deployment_query.operators_memory import PredicateEvaluator

    evaluator = PredicateEvaluator(empty_tenant_is_absent=False)
    evaluator.matches(deployment, query.predicates)
"""

from __future__ import annotations

from .base import MemoryOperator
from .evaluator import PredicateEvaluator

__all__ = [
    "MemoryOperator",
    "PredicateEvaluator",
]
