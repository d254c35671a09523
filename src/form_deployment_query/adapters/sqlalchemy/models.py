"""Relational schema for form deployments and their form definitions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ...domain import FormDeployment


class Base(DeclarativeBase):
    pass


class FormDeploymentModel(Base):
    __tablename__ = "form_deployment"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tenant_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    deployment_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    parent_deployment_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    form_definitions: Mapped[list[FormDefinitionModel]] = relationship(
        back_populates="deployment",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="FormDefinitionModel.position",
    )


class FormDefinitionModel(Base):
    __tablename__ = "form_definition"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    key: Mapped[str] = mapped_column(String(255), index=True)
    position: Mapped[int] = mapped_column(Integer)
    deployment_id: Mapped[str] = mapped_column(
        ForeignKey("form_deployment.id"), index=True
    )

    deployment: Mapped[FormDeploymentModel] = relationship(
        back_populates="form_definitions"
    )


def to_entity(model: FormDeploymentModel) -> FormDeployment:
    """Convert a database row → domain entity."""
    return FormDeployment(
        id=model.id,
        name=model.name,
        category=model.category,
        tenant_id=model.tenant_id,
        deployment_time=model.deployment_time,
        parent_deployment_id=model.parent_deployment_id,
        form_definition_keys=[d.key for d in model.form_definitions],
    )


def to_model(entity: FormDeployment) -> FormDeploymentModel:
    """Convert a domain entity → database row (with its form definitions).

    Definition rows are keyed by position, so a deployment may list the
    same form key more than once.
    """
    return FormDeploymentModel(
        id=entity.id,
        name=entity.name,
        category=entity.category,
        tenant_id=entity.tenant_id,
        deployment_time=entity.deployment_time,
        parent_deployment_id=entity.parent_deployment_id,
        form_definitions=[
            FormDefinitionModel(
                id=f"{entity.id}:{position}", key=key, position=position
            )
            for position, key in enumerate(entity.form_definition_keys)
        ],
    )
