from .compiler import build_deployment_filter, build_order_clauses, compile_predicate
from .executor import SQLAlchemyDeploymentExecutor
from .models import (
    Base,
    FormDefinitionModel,
    FormDeploymentModel,
    to_entity,
    to_model,
)

__all__ = [
    "Base",
    "FormDefinitionModel",
    "FormDeploymentModel",
    "SQLAlchemyDeploymentExecutor",
    "build_deployment_filter",
    "build_order_clauses",
    "compile_predicate",
    "to_entity",
    "to_model",
]
