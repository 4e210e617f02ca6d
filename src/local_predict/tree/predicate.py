"""
Predicates guarding the branches of a decision tree.

A predicate tests one field of the input record. Its operand is tagged at
parse time from the field's optype (NumberOperand for numeric and datetime
fields, TextOperand for categorical and text fields), so evaluation never
probes runtime types of the model document.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from ..core.errors import ConfigurationError, ParseError
from ..core.types import DEFAULT_POLICY, MissingBranchPolicy, Operator, Optype
from .catalog import FieldCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumberOperand:
    value: float

    def __str__(self) -> str:
        return f"{self.value:g}"


@dataclass(frozen=True)
class TextOperand:
    value: str

    def __str__(self) -> str:
        return self.value


Operand = Union[NumberOperand, TextOperand, None]


@dataclass(frozen=True)
class Predicate:
    """
    A single typed test on one field.

    Attributes:
        field: Field id the predicate reads
        operator: Comparison operator
        optype: Optype of the tested field
        operand: Tagged operand, or None for "is missing" / "is not missing" tests
        missing: Whether an absent value also satisfies the predicate
    """

    field: str
    operator: Operator
    optype: Optype
    operand: Operand
    missing: bool = False

    @property
    def is_missing_branch(self) -> bool:
        """True when an absent value can satisfy this predicate."""
        return self.missing or (self.operand is None and self.operator is Operator.EQ)

    def evaluate(self, field_value: Any, policy: MissingBranchPolicy = DEFAULT_POLICY) -> bool:
        return evaluate(self, field_value, policy)

    def to_rule(self, catalog: FieldCatalog | None = None) -> str:
        """Human-readable form, e.g. `petal length > 2.45`."""
        name = self.field
        if catalog is not None:
            name = catalog.name_for_id(self.field) or self.field
        if self.operand is None:
            return f"{name} is {'' if self.operator is Operator.EQ else 'not '}missing"
        rule = f"{name} {self.operator.value} {self.operand}"
        if self.missing:
            rule += " or missing"
        return rule


def parse_predicate(
    raw: Any,
    catalog: FieldCatalog,
    policy: MissingBranchPolicy = DEFAULT_POLICY,
) -> Predicate | None:
    """
    Parse a predicate description from a model document.

    Args:
        raw: `True` for the always-true sentinel, otherwise a mapping with
            `field`, `operator` and `value` (and optionally `missing`)
        catalog: Field catalog of the model
        policy: Missing-branch rules (operator suffix)

    Returns:
        Predicate, or None for the always-true sentinel

    Raises:
        ParseError: If the predicate is not a mapping or lacks a key
        ConfigurationError: If the field is unknown or the operator does not fit
    """
    if raw is True:
        return None
    if not isinstance(raw, Mapping):
        raise ParseError(f"Predicate must be a mapping or true, got {raw!r}")

    for key in ("field", "operator", "value"):
        if key not in raw:
            raise ParseError(f"Predicate is missing '{key}': {dict(raw)!r}")

    field_id = str(raw["field"])
    field = catalog.get(field_id)
    if field is None:
        raise ConfigurationError(f"Predicate references unknown field {field_id}", field_id=field_id)

    raw_operator = str(raw["operator"])
    missing = bool(raw.get("missing", False))
    suffix = policy.operator_suffix
    if suffix and raw_operator.endswith(suffix) and len(raw_operator) > len(suffix):
        raw_operator = raw_operator[: -len(suffix)]
        missing = True

    try:
        operator = Operator.parse(raw_operator)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown operator {raw['operator']!r} on field {field_id}", field_id=field_id
        ) from e

    if operator.is_ordering and not field.optype.is_ordered:
        raise ConfigurationError(
            f"Operator {operator.value} does not apply to {field.optype.value} field {field_id}",
            field_id=field_id,
        )

    if operator.is_ordering and raw["value"] is None:
        raise ConfigurationError(
            f"Operator {operator.value} needs an operand on field {field_id}",
            field_id=field_id,
        )

    return Predicate(
        field=field_id,
        operator=operator,
        optype=field.optype,
        operand=_parse_operand(raw["value"], field.optype, field_id),
        missing=missing,
    )


def _parse_operand(value: Any, optype: Optype, field_id: str) -> Operand:
    if value is None:
        return None
    if optype.is_ordered:
        try:
            return NumberOperand(_to_float(value))
        except (TypeError, ValueError) as e:
            raise ParseError(f"Operand {value!r} for field {field_id} is not numeric") from e
    return TextOperand(str(value))


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    number = float(value)
    if math.isnan(number):
        raise ValueError("NaN is not a valid operand")
    return number


def _value_to_float(value: Any) -> float:
    # NaN inputs are kept; every comparison but != is then false
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    return float(value)


def is_absent(value: Any, optype: Optype) -> bool:
    """None is absent for every optype; an empty string too for numeric/datetime."""
    if value is None:
        return True
    return optype.is_ordered and isinstance(value, str) and not value.strip()


def evaluate(
    predicate: Predicate,
    field_value: Any,
    policy: MissingBranchPolicy = DEFAULT_POLICY,
) -> bool:
    """
    Evaluate a predicate against one field value.

    Args:
        predicate: Predicate to test
        field_value: Value from the input record, None when absent
        policy: Missing-branch rules

    Returns:
        Whether the predicate holds

    Raises:
        ParseError: If a numeric/datetime field receives a non-numeric value
        ConfigurationError: If the operator does not apply to the optype
    """
    if is_absent(field_value, predicate.optype):
        return policy.enabled and predicate.is_missing_branch

    operator = predicate.operator
    operand = predicate.operand

    if operand is None:
        if operator is Operator.EQ:
            return False
        if operator is Operator.NE:
            return True
        raise ConfigurationError(
            f"Operator {operator.value} needs an operand on field {predicate.field}",
            field_id=predicate.field,
        )

    if isinstance(operand, NumberOperand):
        try:
            number = _value_to_float(field_value)
        except (TypeError, ValueError) as e:
            raise ParseError(
                f"Value {field_value!r} for {predicate.optype.value} field {predicate.field} is not numeric"
            ) from e
        return _compare(operator, number, operand.value)

    if operator.is_ordering:
        raise ConfigurationError(
            f"Operator {operator.value} does not apply to {predicate.optype.value} field {predicate.field}",
            field_id=predicate.field,
        )
    text = field_value if isinstance(field_value, str) else str(field_value)
    if operator is Operator.EQ:
        return text == operand.value
    return text != operand.value


def _compare(operator: Operator, value: float, operand: float) -> bool:
    if operator is Operator.LT:
        return value < operand
    if operator is Operator.LE:
        return value <= operand
    if operator is Operator.EQ:
        return value == operand
    if operator is Operator.NE:
        return value != operand
    if operator is Operator.GE:
        return value >= operand
    if operator is Operator.GT:
        return value > operand
    raise ConfigurationError(f"Unknown operator {operator!r}")
