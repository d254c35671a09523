"""
Compile deployment criteria into SQLAlchemy expressions.

``build_deployment_filter`` turns committed predicates into a single
boolean clause (AND of all predicates); ``build_order_clauses`` turns
committed ordering into ``ORDER BY`` clauses.  LIKE patterns are handed
to the database verbatim.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, asc, desc, or_, select

from ...operators import QueryOperator
from .models import FormDefinitionModel, FormDeploymentModel

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import ColumnElement

    from ...criteria import OrderSpec, Predicate

_COLUMNS: dict[str, Any] = {
    "id": FormDeploymentModel.id,
    "name": FormDeploymentModel.name,
    "category": FormDeploymentModel.category,
    "tenant_id": FormDeploymentModel.tenant_id,
    "deployment_time": FormDeploymentModel.deployment_time,
    "parent_deployment_id": FormDeploymentModel.parent_deployment_id,
}

# Attributes stored on a child table; matched through EXISTS.
_CHILD_COLUMNS: dict[str, Any] = {
    "form_definition_keys": FormDefinitionModel.key,
}


def _is_absent(column: Any, empty_is_absent: bool) -> ColumnElement[bool]:
    if empty_is_absent:
        return or_(column.is_(None), column == "")
    return column.is_(None)  # type: ignore[no-any-return]


def _operator_clause(
    op: QueryOperator,
    column: Any,
    value: Any,
    *,
    empty_is_absent: bool,
) -> ColumnElement[bool]:
    builders: dict[QueryOperator, Callable[[], ColumnElement[bool]]] = {
        QueryOperator.EQ: lambda: column == value,
        QueryOperator.NE: lambda: column != value,
        QueryOperator.LIKE: lambda: column.like(value),
        QueryOperator.IS_NULL: lambda: _is_absent(column, empty_is_absent),
    }
    try:
        return builders[op]()
    except KeyError:
        raise ValueError(f"Unsupported operator for SQLAlchemy: {op}") from None


def compile_predicate(
    predicate: Predicate,
    *,
    empty_tenant_is_absent: bool = True,
) -> ColumnElement[bool]:
    """Compile a single predicate against ``form_deployment``."""
    attribute = predicate.attribute
    if attribute in _CHILD_COLUMNS:
        inner = _operator_clause(
            predicate.operator,
            _CHILD_COLUMNS[attribute],
            predicate.value,
            empty_is_absent=empty_tenant_is_absent,
        )
        return (
            select(FormDefinitionModel.id)
            .where(FormDefinitionModel.deployment_id == FormDeploymentModel.id)
            .where(inner)
            .exists()
        )
    if attribute not in _COLUMNS:
        raise ValueError(f"No column mapped for attribute '{attribute}'")
    return _operator_clause(
        predicate.operator,
        _COLUMNS[attribute],
        predicate.value,
        empty_is_absent=empty_tenant_is_absent,
    )


def build_deployment_filter(
    predicates: Sequence[Predicate],
    *,
    empty_tenant_is_absent: bool = True,
) -> ColumnElement[bool] | None:
    """AND of all predicates, or ``None`` when there are none."""
    if not predicates:
        return None
    clauses = [
        compile_predicate(p, empty_tenant_is_absent=empty_tenant_is_absent)
        for p in predicates
    ]
    return clauses[0] if len(clauses) == 1 else and_(*clauses)


def build_order_clauses(ordering: Sequence[OrderSpec]) -> list[Any]:
    """
    ORDER BY clauses in commit order.

    ``id`` is appended as a final tie-breaker (unless already present)
    so that equal sort keys come back in a deterministic order.
    """
    clauses: list[Any] = []
    for spec in ordering:
        column = _COLUMNS[spec.attribute]
        clauses.append(desc(column) if spec.descending else asc(column))
    if ordering and all(spec.attribute != "id" for spec in ordering):
        clauses.append(asc(FormDeploymentModel.id))
    return clauses
