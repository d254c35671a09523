"""
Field vocabulary for deployment queries.

``DeploymentField`` names every filter a :class:`DeploymentQuery` can
record.  Each member knows the entity attribute it targets and the
operator implied by the filter method that creates it, e.g.
``DEPLOYMENT_NAME_LIKE`` → ``name LIKE <pattern>``.

``DeploymentOrderField`` names the sortable attributes.
"""

from __future__ import annotations

from enum import Enum

from .operators import QueryOperator


class DeploymentField(str, Enum):
    """Filterable deployment attributes."""

    DEPLOYMENT_ID = "deploymentId"
    DEPLOYMENT_NAME = "deploymentName"
    DEPLOYMENT_NAME_LIKE = "deploymentNameLike"
    CATEGORY = "category"
    CATEGORY_NOT_EQUALS = "categoryNotEquals"
    TENANT_ID = "tenantId"
    TENANT_ID_LIKE = "tenantIdLike"
    WITHOUT_TENANT_ID = "withoutTenantId"
    FORM_DEFINITION_KEY = "formDefinitionKey"
    FORM_DEFINITION_KEY_LIKE = "formDefinitionKeyLike"
    PARENT_DEPLOYMENT_ID = "parentDeploymentId"
    PARENT_DEPLOYMENT_ID_LIKE = "parentDeploymentIdLike"

    @property
    def attribute(self) -> str:
        """Name of the :class:`FormDeployment` attribute this field filters."""
        return _ATTRIBUTES[self]

    @property
    def operator(self) -> QueryOperator:
        """Operator implied by the filter method."""
        return _OPERATORS[self]

    @property
    def is_tenant_scope(self) -> bool:
        return self in TENANT_SCOPE_FIELDS


class DeploymentOrderField(str, Enum):
    """Sortable deployment attributes."""

    DEPLOYMENT_ID = "deploymentId"
    DEPLOYMENT_NAME = "deploymentName"
    DEPLOYMENT_TIME = "deploymentTime"
    TENANT_ID = "tenantId"

    @property
    def attribute(self) -> str:
        return _ORDER_ATTRIBUTES[self]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_ATTRIBUTES: dict[DeploymentField, str] = {
    DeploymentField.DEPLOYMENT_ID: "id",
    DeploymentField.DEPLOYMENT_NAME: "name",
    DeploymentField.DEPLOYMENT_NAME_LIKE: "name",
    DeploymentField.CATEGORY: "category",
    DeploymentField.CATEGORY_NOT_EQUALS: "category",
    DeploymentField.TENANT_ID: "tenant_id",
    DeploymentField.TENANT_ID_LIKE: "tenant_id",
    DeploymentField.WITHOUT_TENANT_ID: "tenant_id",
    DeploymentField.FORM_DEFINITION_KEY: "form_definition_keys",
    DeploymentField.FORM_DEFINITION_KEY_LIKE: "form_definition_keys",
    DeploymentField.PARENT_DEPLOYMENT_ID: "parent_deployment_id",
    DeploymentField.PARENT_DEPLOYMENT_ID_LIKE: "parent_deployment_id",
}

_OPERATORS: dict[DeploymentField, QueryOperator] = {
    DeploymentField.DEPLOYMENT_ID: QueryOperator.EQ,
    DeploymentField.DEPLOYMENT_NAME: QueryOperator.EQ,
    DeploymentField.DEPLOYMENT_NAME_LIKE: QueryOperator.LIKE,
    DeploymentField.CATEGORY: QueryOperator.EQ,
    DeploymentField.CATEGORY_NOT_EQUALS: QueryOperator.NE,
    DeploymentField.TENANT_ID: QueryOperator.EQ,
    DeploymentField.TENANT_ID_LIKE: QueryOperator.LIKE,
    DeploymentField.WITHOUT_TENANT_ID: QueryOperator.IS_NULL,
    DeploymentField.FORM_DEFINITION_KEY: QueryOperator.EQ,
    DeploymentField.FORM_DEFINITION_KEY_LIKE: QueryOperator.LIKE,
    DeploymentField.PARENT_DEPLOYMENT_ID: QueryOperator.EQ,
    DeploymentField.PARENT_DEPLOYMENT_ID_LIKE: QueryOperator.LIKE,
}

_ORDER_ATTRIBUTES: dict[DeploymentOrderField, str] = {
    DeploymentOrderField.DEPLOYMENT_ID: "id",
    DeploymentOrderField.DEPLOYMENT_NAME: "name",
    DeploymentOrderField.DEPLOYMENT_TIME: "deployment_time",
    DeploymentOrderField.TENANT_ID: "tenant_id",
}

# At most one of these may be set on a single query.
TENANT_SCOPE_FIELDS: frozenset[DeploymentField] = frozenset(
    {
        DeploymentField.TENANT_ID,
        DeploymentField.TENANT_ID_LIKE,
        DeploymentField.WITHOUT_TENANT_ID,
    }
)
