"""Configuration for deployment query executors."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .fields import DeploymentOrderField


class QueryExecutorConfig(BaseModel):
    """Executor behaviour knobs.

    Attributes:
        default_order_field: Sort key applied (ascending) when a query
            commits no ordering, so repeated pages see a stable order.
            ``None`` keeps whatever order the store yields.
        empty_tenant_is_absent: If ``True``, ``deployment_without_tenant_id()``
            matches both ``NULL`` and ``""`` tenant ids.
    """

    model_config = ConfigDict(frozen=True)

    default_order_field: DeploymentOrderField | None = (
        DeploymentOrderField.DEPLOYMENT_ID
    )
    empty_tenant_is_absent: bool = True
