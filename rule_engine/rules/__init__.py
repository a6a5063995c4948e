"""Rules domain - rule documents, loader, evaluation engine and API routes."""

from .errors import InvalidRuleDocument, RuleEngineError, UnknownOperator
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
from .paths import lookup, resolve, split_path, to_canonical_string
from .loader import RuleLoader, load_rule_set
from .engine import RuleEngine, RuleEvaluation, TraceStep, compare
from .router import router as rules_router, get_engine

__all__ = [
    # Errors
    "RuleEngineError",
    "InvalidRuleDocument",
    "UnknownOperator",
    # Models
    "AllCondition",
    "AnyCondition",
    "ConditionNode",
    "LeafCondition",
    "NodeMode",
    "Operator",
    "Rule",
    "RuleSet",
    # Paths
    "lookup",
    "resolve",
    "split_path",
    "to_canonical_string",
    # Services
    "RuleLoader",
    "load_rule_set",
    "RuleEngine",
    "RuleEvaluation",
    "TraceStep",
    "compare",
    # API
    "rules_router",
    "get_engine",
]
