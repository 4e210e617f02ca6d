"""
Core types and constants for local predictions.

This module provides:
- Optype and Operator enums
- MissingBranchPolicy value object for the missing-data rules

Operators are stored exactly as the exported model documents spell them,
so `Operator(raw)` parses a predicate operator directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Settings


class Optype(str, Enum):
    """Semantic type of a field's values."""

    numeric = "numeric"
    categorical = "categorical"
    text = "text"
    datetime = "datetime"

    @property
    def is_ordered(self) -> bool:
        """Whether ordering operators apply to this optype."""
        return self in (Optype.numeric, Optype.datetime)


class Operator(str, Enum):
    """Predicate comparison operators."""

    LT = "<"
    LE = "<="
    EQ = "="
    NE = "!="
    GE = ">="
    GT = ">"

    @property
    def is_ordering(self) -> bool:
        return self not in (Operator.EQ, Operator.NE)

    @classmethod
    def parse(cls, raw: str) -> "Operator":
        """
        Parse an operator string.

        Accepts `/=` as an alias of `!=`.

        Raises:
            ValueError: If the operator is unknown
        """
        return cls(OPERATOR_ALIASES.get(raw, raw))


OPERATOR_ALIASES: dict[str, str] = {
    "/=": Operator.NE.value,
}


@dataclass(frozen=True)
class MissingBranchPolicy:
    """
    How predicates treat absent field values.

    An absent value never satisfies an ordinary comparison. When `enabled`
    is set, a predicate flagged as a missing branch (operator carrying
    `operator_suffix`, an explicit `"missing": true`, or an `=` test
    against a null operand) is satisfied by an absent value. An empty
    `operator_suffix` turns off suffix recognition.
    """

    enabled: bool = True
    operator_suffix: str = "*"

    @classmethod
    def from_settings(cls, settings: "Settings") -> "MissingBranchPolicy":
        return cls(
            enabled=settings.honor_missing_branches,
            operator_suffix=settings.missing_operator_suffix,
        )


DEFAULT_POLICY = MissingBranchPolicy()
