"""
Fluent query builder for form deployments.

Example::

    deployments = await (
        DeploymentQuery(executor)
        .deployment_name_like("Invoice%")
        .deployment_category_not_equals("draft")
        .order_by_deployment_time()
        .desc()
        .list()
    )

Filters added to the same query are combined with AND.  Every
``order_by_*()`` call must be followed by ``asc()`` or ``desc()`` before
another filter, another ``order_by_*()`` or a terminal method is called.
"""

from __future__ import annotations

import builtins
from enum import Enum
from typing import TYPE_CHECKING, Any

from .criteria import OrderSpec, Predicate
from .exceptions import (
    IncompleteQueryError,
    InvalidArgumentError,
    InvalidQueryStateError,
    UnknownFieldError,
)
from .fields import DeploymentField, DeploymentOrderField, SortDirection
from .ports import ExecutionMode

if TYPE_CHECKING:
    from .domain import FormDeployment
    from .ports import IQueryExecutor


class QueryState(str, Enum):
    ACCUMULATING = "accumulating"
    ORDER_PENDING = "order_pending"


class DeploymentQuery:
    """
    Accumulates deployment predicates and ordering, then executes them.

    The builder never performs I/O itself; terminal methods (``list``,
    ``single_result``, ``count``, ``list_page``) hand the committed
    criteria to the injected :class:`IQueryExecutor`.  Terminal methods
    leave the builder untouched, so a query can be executed repeatedly.
    """

    def __init__(self, executor: IQueryExecutor) -> None:
        self._executor = executor
        self._predicates: builtins.list[Predicate] = []
        self._ordering: builtins.list[OrderSpec] = []
        self._pending_order: DeploymentOrderField | None = None

    # -- introspection -------------------------------------------------------

    @property
    def state(self) -> QueryState:
        if self._pending_order is not None:
            return QueryState.ORDER_PENDING
        return QueryState.ACCUMULATING

    @property
    def has_pending_order(self) -> bool:
        return self._pending_order is not None

    @property
    def predicates(self) -> tuple[Predicate, ...]:
        return tuple(self._predicates)

    @property
    def ordering(self) -> tuple[OrderSpec, ...]:
        return tuple(self._ordering)

    # -- filters -------------------------------------------------------------

    def deployment_id(self, deployment_id: str) -> DeploymentQuery:
        """Only select deployments with the given id."""
        return self._filter(DeploymentField.DEPLOYMENT_ID, deployment_id)

    def deployment_name(self, name: str) -> DeploymentQuery:
        """Only select deployments with the given name."""
        return self._filter(DeploymentField.DEPLOYMENT_NAME, name)

    def deployment_name_like(self, name_like: str) -> DeploymentQuery:
        """Only select deployments whose name matches the LIKE pattern."""
        return self._filter(DeploymentField.DEPLOYMENT_NAME_LIKE, name_like)

    def deployment_category(self, category: str) -> DeploymentQuery:
        return self._filter(DeploymentField.CATEGORY, category)

    def deployment_category_not_equals(self, category: str) -> DeploymentQuery:
        """Only select deployments with a category different from the given one."""
        return self._filter(DeploymentField.CATEGORY_NOT_EQUALS, category)

    def deployment_tenant_id(self, tenant_id: str) -> DeploymentQuery:
        return self._filter(DeploymentField.TENANT_ID, tenant_id)

    def deployment_tenant_id_like(self, tenant_id_like: str) -> DeploymentQuery:
        return self._filter(DeploymentField.TENANT_ID_LIKE, tenant_id_like)

    def deployment_without_tenant_id(self) -> DeploymentQuery:
        """Only select deployments that belong to no tenant."""
        return self._filter(DeploymentField.WITHOUT_TENANT_ID, None)

    def form_definition_key(self, key: str) -> DeploymentQuery:
        """Only select deployments containing a form definition with this key."""
        return self._filter(DeploymentField.FORM_DEFINITION_KEY, key)

    def form_definition_key_like(self, key_like: str) -> DeploymentQuery:
        return self._filter(DeploymentField.FORM_DEFINITION_KEY_LIKE, key_like)

    def parent_deployment_id(self, parent_id: str) -> DeploymentQuery:
        return self._filter(DeploymentField.PARENT_DEPLOYMENT_ID, parent_id)

    def parent_deployment_id_like(self, parent_id_like: str) -> DeploymentQuery:
        return self._filter(DeploymentField.PARENT_DEPLOYMENT_ID_LIKE, parent_id_like)

    # -- ordering ------------------------------------------------------------

    def order_by_deployment_id(self) -> DeploymentQuery:
        return self._order_by(DeploymentOrderField.DEPLOYMENT_ID)

    def order_by_deployment_name(self) -> DeploymentQuery:
        return self._order_by(DeploymentOrderField.DEPLOYMENT_NAME)

    def order_by_deployment_time(self) -> DeploymentQuery:
        return self._order_by(DeploymentOrderField.DEPLOYMENT_TIME)

    def order_by_tenant_id(self) -> DeploymentQuery:
        return self._order_by(DeploymentOrderField.TENANT_ID)

    def asc(self) -> DeploymentQuery:
        """Complete the pending order-by field in ascending direction."""
        return self._direction(SortDirection.ASC)

    def desc(self) -> DeploymentQuery:
        """Complete the pending order-by field in descending direction."""
        return self._direction(SortDirection.DESC)

    # -- terminal methods ----------------------------------------------------

    async def list(self) -> builtins.list[FormDeployment]:
        """Return all matching deployments in committed order."""
        return await self._execute(ExecutionMode.list())  # type: ignore[no-any-return]

    async def single_result(self) -> FormDeployment | None:
        """
        Return the only matching deployment, or ``None`` if nothing matches.

        Raises:
            NonUniqueResultError: If more than one deployment matches.
        """
        return await self._execute(ExecutionMode.single())  # type: ignore[no-any-return]

    async def count(self) -> int:
        return await self._execute(ExecutionMode.count())  # type: ignore[no-any-return]

    async def list_page(self, offset: int, limit: int) -> builtins.list[FormDeployment]:
        """
        Return at most *limit* matching deployments, skipping *offset*.

        Raises:
            InvalidArgumentError: If a bound is not an ``int``, ``offset < 0``
                or ``limit <= 0``.
        """
        self._ensure_complete()
        for name, bound in (("offset", offset), ("limit", limit)):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise InvalidArgumentError(
                    name, f"{name} must be an int, got {type(bound).__name__}"
                )
        if offset < 0:
            raise InvalidArgumentError("offset", f"offset must be >= 0, got {offset}")
        if limit <= 0:
            raise InvalidArgumentError("limit", f"limit must be > 0, got {limit}")
        return await self._execute(ExecutionMode.page(offset, limit))  # type: ignore[no-any-return]

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialise the committed criteria to a JSON-compatible dictionary."""
        result: dict[str, Any] = {
            "predicates": [p.to_dict() for p in self._predicates],
            "ordering": [o.to_dict() for o in self._ordering],
        }
        if self._pending_order is not None:
            result["pending_order"] = self._pending_order.value
        return result

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        executor: IQueryExecutor,
    ) -> DeploymentQuery:
        """
        Rebuild a query from :meth:`to_dict` output.

        Every entry is replayed through the fluent methods, so tenant
        conflicts and bad values are rejected exactly as they would be for
        hand-written chains.  A serialised ``op`` must match the operator
        the field implies.
        """
        query = cls(executor)
        for item in data.get("predicates", []):
            field = _lookup(DeploymentField, item.get("field"))
            op = item.get("op")
            if op is not None and op != field.operator.value:
                raise InvalidArgumentError(
                    field.value,
                    f"operator '{op}' does not match '{field.value}', "
                    f"expected '{field.operator.value}'",
                )
            query._filter(field, item.get("val"))
        for item in data.get("ordering", []):
            order_field = _lookup(DeploymentOrderField, item.get("field"))
            direction = _lookup(SortDirection, item.get("direction"))
            query._order_by(order_field)._direction(direction)
        if data.get("pending_order") is not None:
            query._order_by(_lookup(DeploymentOrderField, data["pending_order"]))
        return query

    def reset(self) -> DeploymentQuery:
        """Clear all criteria and return ``self`` for reuse."""
        self._predicates.clear()
        self._ordering.clear()
        self._pending_order = None
        return self

    # -- internals -----------------------------------------------------------

    def _filter(self, field: DeploymentField, value: str | None) -> DeploymentQuery:
        if self._pending_order is not None:
            raise InvalidQueryStateError(
                f"Cannot add filter '{field.value}': order by "
                f"'{self._pending_order.value}' must be followed by asc() or desc()",
                state=self.state.value,
            )
        if not field.operator.takes_value:
            if value is not None:
                raise InvalidArgumentError(
                    field.value, f"{field.value} does not take a value"
                )
        elif value is None:
            raise InvalidArgumentError(field.value, f"{field.value} is null")
        elif not isinstance(value, str):
            raise InvalidArgumentError(
                field.value,
                f"{field.value} must be a string, got {type(value).__name__}",
            )
        if field.is_tenant_scope:
            self._check_tenant_conflict(field)
        self._predicates.append(Predicate.of(field, value))
        return self

    def _check_tenant_conflict(self, field: DeploymentField) -> None:
        for existing in self._predicates:
            if existing.field.is_tenant_scope and existing.field is not field:
                raise InvalidQueryStateError(
                    f"Cannot combine '{field.value}' with '{existing.field.value}': "
                    f"tenant scoping filters are mutually exclusive",
                    state=self.state.value,
                )

    def _order_by(self, field: DeploymentOrderField) -> DeploymentQuery:
        if self._pending_order is not None:
            raise InvalidQueryStateError(
                f"Direction not yet specified for previous order-by field "
                f"'{self._pending_order.value}'",
                state=self.state.value,
            )
        self._pending_order = field
        return self

    def _direction(self, direction: SortDirection) -> DeploymentQuery:
        if self._pending_order is None:
            raise InvalidQueryStateError(
                f"{direction.value}() must follow an order_by_*() call",
                state=self.state.value,
            )
        self._ordering.append(OrderSpec(self._pending_order, direction))
        self._pending_order = None
        return self

    def _ensure_complete(self) -> None:
        if self._pending_order is not None:
            raise IncompleteQueryError(self._pending_order.value)

    async def _execute(self, mode: ExecutionMode) -> Any:
        self._ensure_complete()
        return await self._executor.execute(
            tuple(self._predicates),
            tuple(self._ordering),
            mode,
        )


def _lookup(enum_cls: Any, raw: Any) -> Any:
    """Resolve *raw* to a member of *enum_cls*, with suggestions on failure."""
    try:
        return enum_cls(raw)
    except ValueError:
        raise UnknownFieldError(
            str(raw), [member.value for member in enum_cls]
        ) from None
