"""Shared fixtures for deployment query tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from form_deployment_query import DeploymentQuery, FormDeployment
from form_deployment_query.adapters import InMemoryDeploymentExecutor
from form_deployment_query.instrumentation import HookRegistry


def build_deployments() -> list[FormDeployment]:
    return [
        FormDeployment(
            id="dep-1",
            name="Invoice Q1",
            category="finance",
            tenant_id="acme",
            deployment_time=datetime(2024, 1, 10),
            form_definition_keys=["invoiceForm"],
        ),
        FormDeployment(
            id="dep-2",
            name="Invoice Q2",
            category="draft",
            tenant_id="acme",
            deployment_time=datetime(2024, 2, 10),
            form_definition_keys=["invoiceForm", "approvalForm"],
        ),
        FormDeployment(
            id="dep-3",
            name="Invoice Q3",
            category="finance",
            tenant_id="",
            deployment_time=datetime(2024, 3, 10),
            parent_deployment_id="dep-1",
            form_definition_keys=["invoiceForm"],
        ),
        FormDeployment(
            id="dep-4",
            name="Onboarding",
            category="hr",
            tenant_id="globex",
            deployment_time=datetime(2024, 1, 20),
            form_definition_keys=["onboardingForm"],
        ),
        FormDeployment(
            id="dep-5",
            name="Invoice Archive",
            category=None,
            tenant_id=None,
            deployment_time=datetime(2023, 12, 1),
            parent_deployment_id="dep-1",
        ),
    ]


@pytest.fixture
def deployments() -> list[FormDeployment]:
    return build_deployments()


@pytest.fixture
def hooks() -> HookRegistry:
    """Isolated hook registry so tests never share instrumentation."""
    return HookRegistry()


@pytest.fixture
def executor(deployments, hooks) -> InMemoryDeploymentExecutor:
    return InMemoryDeploymentExecutor(deployments, hooks=hooks)


@pytest.fixture
def query(executor) -> DeploymentQuery:
    return DeploymentQuery(executor)
