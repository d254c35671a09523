"""Storage boundary for deployment queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .criteria import OrderSpec, Predicate


class ResultKind(str, Enum):
    LIST = "list"
    SINGLE = "single"
    COUNT = "count"
    PAGE = "page"


@dataclass(frozen=True)
class ExecutionMode:
    """
    What a terminal method asks the executor for.

    ``offset`` and ``limit`` are only set for :attr:`ResultKind.PAGE`.
    """

    kind: ResultKind
    offset: int | None = None
    limit: int | None = None

    @classmethod
    def list(cls) -> ExecutionMode:
        return cls(ResultKind.LIST)

    @classmethod
    def single(cls) -> ExecutionMode:
        return cls(ResultKind.SINGLE)

    @classmethod
    def count(cls) -> ExecutionMode:
        return cls(ResultKind.COUNT)

    @classmethod
    def page(cls, offset: int, limit: int) -> ExecutionMode:
        return cls(ResultKind.PAGE, offset=offset, limit=limit)


@runtime_checkable
class IQueryExecutor(Protocol):
    """
    Executes finalised deployment criteria.

    Predicates are applied conjunctively; ordering is a stable multi-key
    sort in commit order.  The return value depends on ``mode``:

    - ``LIST`` / ``PAGE`` → ``list[FormDeployment]``
    - ``SINGLE`` → ``FormDeployment | None``
      (raises :class:`NonUniqueResultError` on more than one match)
    - ``COUNT`` → ``int``
    """

    async def execute(
        self,
        predicates: Sequence[Predicate],
        ordering: Sequence[OrderSpec],
        mode: ExecutionMode,
    ) -> Any: ...
