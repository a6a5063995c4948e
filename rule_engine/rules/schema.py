"""Pydantic models for rule documents.

A rule holds exactly one root condition node. Condition nodes form a tagged
union: a conjunction (``all``), a disjunction (``any``) or a leaf comparison.
The loader builds these from raw documents; the models themselves are frozen
so a loaded rule set can be shared between callers.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownOperator


# =============================================================================
# Operators
# =============================================================================


class Operator(str, Enum):
    """Comparison operators for leaf conditions."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"

    @classmethod
    def parse(cls, name: str) -> Operator:
        """Look up an operator by name, ignoring case.

        Raises:
            UnknownOperator: If ``name`` is not one of the known operators.
        """
        if not isinstance(name, str):
            raise UnknownOperator(repr(name))
        try:
            return cls[name.upper()]
        except KeyError:
            raise UnknownOperator(name) from None


class NodeMode(str, Enum):
    """How the loader treats nodes that populate more than one variant."""

    STRICT = "strict"
    PRECEDENCE = "precedence"


# =============================================================================
# Condition Nodes
# =============================================================================

Scalar = Union[bool, int, float, str]


class LeafCondition(BaseModel):
    """A single comparison between a value found at ``path`` and a literal."""

    path: str = Field(..., description="Dotted path, optionally prefixed with '$.'")
    operator: str = Field(..., description="Operator name (case-insensitive)")
    value: Scalar = Field(..., description="Literal compared against the resolved value")

    model_config = ConfigDict(frozen=True)


class AllCondition(BaseModel):
    """Conjunction: every child must hold."""

    all: tuple[ConditionNode, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)


class AnyCondition(BaseModel):
    """Disjunction: at least one child must hold."""

    any: tuple[ConditionNode, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)


ConditionNode = Union[AllCondition, AnyCondition, LeafCondition]


# =============================================================================
# Rules
# =============================================================================


class Rule(BaseModel):
    """A named predicate backed by one root condition node."""

    name: str = Field(..., description="Rule name, unique within a rule set")
    description: str = Field(default="", description="Human-readable description")
    condition: ConditionNode = Field(..., alias="conditions")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RuleSet(BaseModel):
    """An ordered, read-only collection of rules."""

    rules: tuple[Rule, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.rules)

    def get(self, name: str) -> Rule | None:
        """Return the first rule named ``name``, or None."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def names(self) -> list[str]:
        return [rule.name for rule in self.rules]


# Enable forward references for recursive types
AllCondition.model_rebuild()
AnyCondition.model_rebuild()
Rule.model_rebuild()
