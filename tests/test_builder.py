"""Tests for the DeploymentQuery fluent API and its state machine."""

from __future__ import annotations

from typing import Any

import pytest

from form_deployment_query import (
    DeploymentField,
    DeploymentOrderField,
    DeploymentQuery,
    ExecutionMode,
    IncompleteQueryError,
    InvalidArgumentError,
    InvalidQueryStateError,
    OrderSpec,
    QueryOperator,
    QueryState,
    SortDirection,
    UnknownFieldError,
)


class RecordingExecutor:
    """Captures what the builder hands to the storage boundary."""

    def __init__(self, result: Any = None) -> None:
        self.result = result
        self.calls: list[tuple[Any, Any, ExecutionMode]] = []

    async def execute(self, predicates, ordering, mode):
        self.calls.append((predicates, ordering, mode))
        return self.result


@pytest.fixture
def recorder() -> RecordingExecutor:
    return RecordingExecutor(result=[])


@pytest.fixture
def builder(recorder) -> DeploymentQuery:
    return DeploymentQuery(recorder)


# -- Filters -----------------------------------------------------------------


def test_filter_returns_same_instance(builder: DeploymentQuery):
    assert builder.deployment_id("dep-1") is builder


def test_every_filter_appends_one_predicate(builder: DeploymentQuery):
    (
        builder.deployment_id("dep-1")
        .deployment_name("Invoice")
        .deployment_name_like("Inv%")
        .deployment_category("finance")
        .deployment_category_not_equals("draft")
        .deployment_tenant_id("acme")
        .form_definition_key("invoiceForm")
        .form_definition_key_like("invoice%")
        .parent_deployment_id("dep-0")
        .parent_deployment_id_like("dep-%")
    )
    assert len(builder.predicates) == 10
    assert [p.field for p in builder.predicates] == [
        DeploymentField.DEPLOYMENT_ID,
        DeploymentField.DEPLOYMENT_NAME,
        DeploymentField.DEPLOYMENT_NAME_LIKE,
        DeploymentField.CATEGORY,
        DeploymentField.CATEGORY_NOT_EQUALS,
        DeploymentField.TENANT_ID,
        DeploymentField.FORM_DEFINITION_KEY,
        DeploymentField.FORM_DEFINITION_KEY_LIKE,
        DeploymentField.PARENT_DEPLOYMENT_ID,
        DeploymentField.PARENT_DEPLOYMENT_ID_LIKE,
    ]


def test_operator_is_implied_by_method(builder: DeploymentQuery):
    builder.deployment_name_like("Inv%").deployment_category_not_equals("draft")
    builder.deployment_without_tenant_id()
    ops = [p.operator for p in builder.predicates]
    assert ops == [QueryOperator.LIKE, QueryOperator.NE, QueryOperator.IS_NULL]
    assert builder.predicates[-1].value is None


def test_empty_string_is_a_valid_value(builder: DeploymentQuery):
    builder.deployment_category("")
    assert builder.predicates[0].value == ""


def test_none_value_is_rejected(builder: DeploymentQuery):
    with pytest.raises(InvalidArgumentError) as exc_info:
        builder.deployment_id(None)  # type: ignore[arg-type]
    assert exc_info.value.argument == "deploymentId"
    assert builder.predicates == ()


@pytest.mark.parametrize("value", [123, 1.5, b"dep-1", ["dep-1"]])
def test_non_string_value_is_rejected(builder: DeploymentQuery, value):
    with pytest.raises(InvalidArgumentError, match="must be a string") as exc_info:
        builder.deployment_id(value)
    assert exc_info.value.argument == "deploymentId"
    assert builder.predicates == ()


def test_repeated_predicates_accumulate(builder: DeploymentQuery):
    builder.deployment_id("dep-1").deployment_id("dep-2")
    assert [p.value for p in builder.predicates] == ["dep-1", "dep-2"]


# -- Tenant scoping ----------------------------------------------------------


@pytest.mark.parametrize(
    ("first", "second"),
    [
        (lambda q: q.deployment_tenant_id("acme"), lambda q: q.deployment_without_tenant_id()),
        (lambda q: q.deployment_without_tenant_id(), lambda q: q.deployment_tenant_id("acme")),
        (lambda q: q.deployment_tenant_id("acme"), lambda q: q.deployment_tenant_id_like("a%")),
        (lambda q: q.deployment_tenant_id_like("a%"), lambda q: q.deployment_without_tenant_id()),
    ],
)
def test_conflicting_tenant_filters_fail_fast(builder: DeploymentQuery, first, second):
    first(builder)
    with pytest.raises(InvalidQueryStateError):
        second(builder)
    assert len(builder.predicates) == 1


def test_same_tenant_filter_twice_is_allowed(builder: DeploymentQuery):
    builder.deployment_tenant_id("acme").deployment_tenant_id("globex")
    assert len(builder.predicates) == 2


# -- Ordering state machine ---------------------------------------------------


def test_initial_state_is_accumulating(builder: DeploymentQuery):
    assert builder.state is QueryState.ACCUMULATING
    assert builder.has_pending_order is False


def test_order_by_enters_pending_state(builder: DeploymentQuery):
    builder.order_by_deployment_name()
    assert builder.state is QueryState.ORDER_PENDING
    assert builder.ordering == ()


def test_direction_commits_order_spec(builder: DeploymentQuery):
    builder.order_by_deployment_name().asc().order_by_deployment_time().desc()
    assert builder.state is QueryState.ACCUMULATING
    assert builder.ordering == (
        OrderSpec(DeploymentOrderField.DEPLOYMENT_NAME, SortDirection.ASC),
        OrderSpec(DeploymentOrderField.DEPLOYMENT_TIME, SortDirection.DESC),
    )


def test_double_order_by_is_rejected(builder: DeploymentQuery):
    builder.order_by_deployment_id()
    with pytest.raises(InvalidQueryStateError, match="Direction not yet specified"):
        builder.order_by_deployment_id()


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_direction_without_order_by_is_rejected(builder: DeploymentQuery, direction):
    with pytest.raises(InvalidQueryStateError) as exc_info:
        getattr(builder, direction)()
    assert exc_info.value.state == QueryState.ACCUMULATING.value


def test_filter_while_order_pending_is_rejected(builder: DeploymentQuery):
    builder.order_by_tenant_id()
    with pytest.raises(InvalidQueryStateError):
        builder.deployment_name("Invoice")
    assert builder.predicates == ()


# -- Terminal methods ---------------------------------------------------------


@pytest.mark.asyncio
async def test_list_passes_committed_criteria(builder: DeploymentQuery, recorder):
    await builder.deployment_category("finance").order_by_deployment_name().asc().list()

    predicates, ordering, mode = recorder.calls[0]
    assert [p.field for p in predicates] == [DeploymentField.CATEGORY]
    assert ordering == (
        OrderSpec(DeploymentOrderField.DEPLOYMENT_NAME, SortDirection.ASC),
    )
    assert mode == ExecutionMode.list()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda q: q.list(),
        lambda q: q.single_result(),
        lambda q: q.count(),
        lambda q: q.list_page(0, 10),
    ],
)
async def test_terminal_methods_reject_pending_order(builder, recorder, call):
    builder.order_by_deployment_name()
    with pytest.raises(IncompleteQueryError) as exc_info:
        await call(builder)
    assert exc_info.value.pending_field == "deploymentName"
    assert recorder.calls == []


@pytest.mark.asyncio
async def test_modes_passed_to_executor(builder: DeploymentQuery, recorder):
    await builder.single_result()
    await builder.count()
    await builder.list_page(5, 10)
    assert [call[2] for call in recorder.calls] == [
        ExecutionMode.single(),
        ExecutionMode.count(),
        ExecutionMode.page(5, 10),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("offset", "limit", "argument"),
    [
        (-1, 10, "offset"),
        (0, 0, "limit"),
        (0, -3, "limit"),
        (0, 1.5, "limit"),
        (0.5, 2, "offset"),
        ("0", 2, "offset"),
        (True, 2, "offset"),
        (0, True, "limit"),
        (None, 2, "offset"),
    ],
)
async def test_list_page_rejects_bad_bounds(
    builder, recorder, offset, limit, argument
):
    with pytest.raises(InvalidArgumentError) as exc_info:
        await builder.list_page(offset, limit)
    assert exc_info.value.argument == argument
    assert recorder.calls == []


@pytest.mark.asyncio
async def test_execution_does_not_mutate_builder(builder: DeploymentQuery, recorder):
    builder.deployment_id("dep-1").order_by_deployment_id().desc()
    before = builder.to_dict()
    await builder.list()
    await builder.count()
    assert builder.to_dict() == before
    assert recorder.calls[0][0] == recorder.calls[1][0]


# -- Serialisation -------------------------------------------------------------


def test_to_dict(builder: DeploymentQuery):
    builder.deployment_name_like("Inv%").deployment_without_tenant_id()
    builder.order_by_deployment_time().desc().order_by_deployment_name()
    assert builder.to_dict() == {
        "predicates": [
            {"field": "deploymentNameLike", "op": "like", "val": "Inv%"},
            {"field": "withoutTenantId", "op": "is_null", "val": None},
        ],
        "ordering": [{"field": "deploymentTime", "direction": "desc"}],
        "pending_order": "deploymentName",
    }


def test_from_dict_rebuilds_query(builder: DeploymentQuery, recorder):
    builder.deployment_category("finance").deployment_tenant_id_like("ac%")
    builder.order_by_tenant_id().asc()
    rebuilt = DeploymentQuery.from_dict(builder.to_dict(), recorder)
    assert rebuilt.predicates == builder.predicates
    assert rebuilt.ordering == builder.ordering
    assert rebuilt.state is QueryState.ACCUMULATING


def test_from_dict_restores_pending_order(recorder):
    rebuilt = DeploymentQuery.from_dict({"pending_order": "tenantId"}, recorder)
    assert rebuilt.state is QueryState.ORDER_PENDING


def test_from_dict_rechecks_tenant_conflicts(recorder):
    data = {
        "predicates": [
            {"field": "tenantId", "op": "=", "val": "acme"},
            {"field": "withoutTenantId", "op": "is_null", "val": None},
        ]
    }
    with pytest.raises(InvalidQueryStateError):
        DeploymentQuery.from_dict(data, recorder)


def test_from_dict_rejects_value_on_is_null(recorder):
    data = {
        "predicates": [{"field": "withoutTenantId", "op": "is_null", "val": "acme"}]
    }
    with pytest.raises(InvalidArgumentError, match="does not take a value") as exc_info:
        DeploymentQuery.from_dict(data, recorder)
    assert exc_info.value.argument == "withoutTenantId"


def test_from_dict_rejects_mismatched_operator(recorder):
    data = {"predicates": [{"field": "deploymentId", "op": "like", "val": "dep-%"}]}
    with pytest.raises(InvalidArgumentError, match="expected '='"):
        DeploymentQuery.from_dict(data, recorder)


def test_from_dict_rejects_non_string_value(recorder):
    data = {"predicates": [{"field": "deploymentId", "op": "=", "val": 123}]}
    with pytest.raises(InvalidArgumentError):
        DeploymentQuery.from_dict(data, recorder)


def test_from_dict_unknown_field_suggests(recorder):
    data = {"predicates": [{"field": "deploymentNme", "val": "x"}]}
    with pytest.raises(UnknownFieldError) as exc_info:
        DeploymentQuery.from_dict(data, recorder)
    assert "deploymentName" in exc_info.value.suggestions


def test_reset_clears_everything(builder: DeploymentQuery):
    builder.deployment_id("dep-1").order_by_deployment_id().asc().order_by_tenant_id()
    assert builder.reset() is builder
    assert builder.predicates == ()
    assert builder.ordering == ()
    assert builder.state is QueryState.ACCUMULATING
