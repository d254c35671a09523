from enum import Enum


class QueryOperator(str, Enum):
    """Comparison operators a deployment predicate can carry."""

    EQ = "="
    NE = "!="
    LIKE = "like"
    IS_NULL = "is_null"

    @property
    def takes_value(self) -> bool:
        return self is not QueryOperator.IS_NULL
