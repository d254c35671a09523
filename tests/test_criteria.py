"""Tests for the field vocabulary and criteria value objects."""

from __future__ import annotations

import dataclasses

import pytest

from form_deployment_query import (
    TENANT_SCOPE_FIELDS,
    DeploymentField,
    DeploymentOrderField,
    OrderSpec,
    Predicate,
    QueryOperator,
    SortDirection,
)


def test_every_field_has_attribute_and_operator():
    for field in DeploymentField:
        assert field.attribute
        assert isinstance(field.operator, QueryOperator)


def test_every_order_field_has_attribute():
    assert {f.attribute for f in DeploymentOrderField} == {
        "id",
        "name",
        "deployment_time",
        "tenant_id",
    }


def test_tenant_scope_group():
    assert TENANT_SCOPE_FIELDS == {
        DeploymentField.TENANT_ID,
        DeploymentField.TENANT_ID_LIKE,
        DeploymentField.WITHOUT_TENANT_ID,
    }
    assert DeploymentField.CATEGORY.is_tenant_scope is False


def test_predicate_of_uses_implied_operator():
    predicate = Predicate.of(DeploymentField.CATEGORY_NOT_EQUALS, "draft")
    assert predicate.operator is QueryOperator.NE
    assert predicate.attribute == "category"
    assert predicate.to_dict() == {
        "field": "categoryNotEquals",
        "op": "!=",
        "val": "draft",
    }


def test_predicate_is_immutable():
    predicate = Predicate.of(DeploymentField.DEPLOYMENT_ID, "dep-1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        predicate.value = "dep-2"  # type: ignore[misc]


def test_order_spec():
    spec = OrderSpec(DeploymentOrderField.DEPLOYMENT_TIME, SortDirection.DESC)
    assert spec.descending is True
    assert spec.attribute == "deployment_time"
    assert spec.to_dict() == {"field": "deploymentTime", "direction": "desc"}


def test_is_null_takes_no_value():
    assert QueryOperator.IS_NULL.takes_value is False
    assert QueryOperator.LIKE.takes_value is True
