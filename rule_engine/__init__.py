"""Declarative JSON rule evaluation."""

from rule_engine.rules import (
    InvalidRuleDocument,
    Rule,
    RuleEngine,
    RuleEngineError,
    RuleLoader,
    RuleSet,
    UnknownOperator,
    load_rule_set,
)

__all__ = [
    "InvalidRuleDocument",
    "Rule",
    "RuleEngine",
    "RuleEngineError",
    "RuleLoader",
    "RuleSet",
    "UnknownOperator",
    "load_rule_set",
]
