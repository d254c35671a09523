"""LIKE pattern matching."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from ..operators import QueryOperator
from .base import MemoryOperator


@lru_cache(maxsize=256)
def like_to_regex(pattern: str) -> re.Pattern[str]:
    """Convert a SQL LIKE pattern (``%``, ``_``) to a compiled regex.

    Every other character matches itself literally.
    """
    parts: list[str] = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


class LikeOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.LIKE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return like_to_regex(str(condition_value)).fullmatch(str(field_value)) is not None
