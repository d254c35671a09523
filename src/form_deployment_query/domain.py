"""The deployment record selected by deployment queries."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FormDeployment(BaseModel):
    """A deployed bundle of form definitions.

    ``tenant_id`` defaults to ``""``, the engine's marker for a
    deployment that belongs to no tenant.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    category: str | None = None
    tenant_id: str | None = ""
    deployment_time: datetime | None = None
    parent_deployment_id: str | None = None
    form_definition_keys: list[str] = Field(default_factory=list)
