from .builder import DeploymentQuery, QueryState
from .config import QueryExecutorConfig
from .criteria import OrderSpec, Predicate
from .domain import FormDeployment
from .exceptions import (
    IncompleteQueryError,
    InvalidArgumentError,
    InvalidQueryStateError,
    NonUniqueResultError,
    QueryError,
    UnknownFieldError,
)
from .executor import BaseQueryExecutor
from .fields import (
    TENANT_SCOPE_FIELDS,
    DeploymentField,
    DeploymentOrderField,
    SortDirection,
)
from .instrumentation import (
    HookRegistry,
    InstrumentationHook,
    QueryEvent,
    get_hook_registry,
    set_hook_registry,
)
from .operators import QueryOperator
from .operators_memory import MemoryOperator, PredicateEvaluator
from .ports import ExecutionMode, IQueryExecutor, ResultKind

__all__ = [
    # Builder
    "DeploymentQuery",
    "QueryState",
    # Criteria
    "Predicate",
    "OrderSpec",
    "DeploymentField",
    "DeploymentOrderField",
    "SortDirection",
    "QueryOperator",
    "TENANT_SCOPE_FIELDS",
    # Execution
    "IQueryExecutor",
    "ExecutionMode",
    "ResultKind",
    "BaseQueryExecutor",
    "QueryExecutorConfig",
    "FormDeployment",
    # In-memory evaluation
    "MemoryOperator",
    "PredicateEvaluator",
    # Instrumentation
    "HookRegistry",
    "InstrumentationHook",
    "QueryEvent",
    "get_hook_registry",
    "set_hook_registry",
    # Exceptions
    "QueryError",
    "InvalidQueryStateError",
    "IncompleteQueryError",
    "NonUniqueResultError",
    "InvalidArgumentError",
    "UnknownFieldError",
]
