"""Errors raised while loading or evaluating rules."""

from __future__ import annotations


class RuleEngineError(Exception):
    """Base class for rule engine failures."""

    pass


class InvalidRuleDocument(RuleEngineError, ValueError):
    """Raised when a rule document is malformed or structurally invalid."""

    def __init__(self, message: str, location: str | None = None):
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(message)


class UnknownOperator(RuleEngineError, ValueError):
    """Raised when a leaf condition names an operator that does not exist."""

    def __init__(self, operator: str, location: str | None = None):
        self.operator = operator
        self.location = location
        message = f"Unknown operator: {operator!r}"
        if location:
            message = f"{location}: {message}"
        super().__init__(message)
