"""Condition tree evaluation with optional tracing."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from rule_engine.core.logging import get_logger
from .loader import load_rule_set
from .paths import resolve, to_canonical_string
from .schema import (
    AllCondition,
    AnyCondition,
    ConditionNode,
    LeafCondition,
    NodeMode,
    Operator,
    Rule,
    RuleSet,
)

logger = get_logger(__name__)


class TraceStep(BaseModel):
    """A single leaf comparison made during evaluation."""

    node: str
    condition: str
    result: bool
    value_checked: Any = None


class RuleEvaluation(BaseModel):
    """Result of evaluating one named rule, with its trace."""

    name: str
    found: bool = True
    matched: bool = False
    trace: list[TraceStep] = Field(default_factory=list)


def compare(operator: Operator, actual: str, expected: str) -> bool:
    """Apply ``operator`` to a resolved value and a rule literal."""
    if operator is Operator.EQUAL:
        return actual == expected
    if operator is Operator.NOT_EQUAL:
        return actual != expected
    if operator is Operator.CONTAINS:
        return expected in actual
    if operator is Operator.NOT_CONTAINS:
        return expected not in actual
    if operator is Operator.STARTS_WITH:
        return actual.startswith(expected)
    if operator is Operator.ENDS_WITH:
        return actual.endswith(expected)

    left = _to_number(actual)
    right = _to_number(expected)
    if left is None or right is None:
        return False
    if operator is Operator.GREATER_THAN:
        return left > right
    if operator is Operator.LESS_THAN:
        return left < right
    return False


# Plain ASCII decimals with an optional exponent; no underscores, inf or nan
_NUMBER_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)


def _to_number(text: str) -> float | None:
    if not _NUMBER_RE.fullmatch(text):
        return None
    return float(text)


class RuleEngine:
    """Evaluates a rule set against input records.

    The engine only reads the rule set and the records it is given, so a
    single instance can serve concurrent callers.
    """

    def __init__(self, rules: RuleSet):
        self._rules = rules

    @classmethod
    def from_json(
        cls,
        text: str,
        mode: NodeMode | str = NodeMode.STRICT,
        validate_operators: bool = True,
    ) -> RuleEngine:
        """Build an engine straight from a JSON rule document."""
        return cls(load_rule_set(text, mode=mode, validate_operators=validate_operators))

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def evaluate(self, data: Mapping[str, Any]) -> list[Rule]:
        """Return every rule whose condition holds for ``data``, in rule set order."""
        matched = [
            rule for rule in self._rules.rules
            if self.evaluate_condition(rule.condition, data)
        ]
        logger.debug(
            "rules_evaluated",
            total=len(self._rules),
            matched=[rule.name for rule in matched],
        )
        return matched

    def evaluate_rule(self, name: str, data: Mapping[str, Any]) -> bool:
        """Evaluate a single rule by name. Unknown names evaluate to False."""
        rule = self._rules.get(name)
        if rule is None:
            logger.debug("rule_not_found", rule=name)
            return False
        return self.evaluate_condition(rule.condition, data)

    def explain(self, name: str, data: Mapping[str, Any]) -> RuleEvaluation:
        """Evaluate a rule by name and record each leaf comparison made."""
        rule = self._rules.get(name)
        if rule is None:
            return RuleEvaluation(name=name, found=False)

        trace: list[TraceStep] = []
        matched = self._evaluate_node(rule.condition, data, "conditions", trace)
        return RuleEvaluation(name=name, matched=matched, trace=trace)

    def evaluate_condition(self, node: ConditionNode, data: Mapping[str, Any]) -> bool:
        """Evaluate a condition tree against ``data``."""
        return self._evaluate_node(node, data, "conditions", None)

    def _evaluate_node(
        self,
        node: ConditionNode,
        data: Mapping[str, Any],
        node_id: str,
        trace: list[TraceStep] | None,
    ) -> bool:
        if isinstance(node, AllCondition):
            for i, child in enumerate(node.all):
                if not self._evaluate_node(child, data, f"{node_id}.all[{i}]", trace):
                    return False
            return True

        if isinstance(node, AnyCondition):
            for i, child in enumerate(node.any):
                if self._evaluate_node(child, data, f"{node_id}.any[{i}]", trace):
                    return True
            return False

        result, actual = self._evaluate_leaf(node, data)
        if trace is not None:
            trace.append(
                TraceStep(
                    node=node_id,
                    condition=f"{node.path} {node.operator} {node.value!r}",
                    result=result,
                    value_checked=actual,
                )
            )
        return result

    def _evaluate_leaf(
        self, leaf: LeafCondition, data: Mapping[str, Any]
    ) -> tuple[bool, str | None]:
        operator = Operator.parse(leaf.operator)
        actual = resolve(leaf.path, data)
        if actual is None:
            return False, None

        expected = to_canonical_string(leaf.value)
        if expected is None:
            return False, actual
        return compare(operator, actual, expected), actual
