"""Pydantic models for rules API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Rule Inspection Models
# =============================================================================


class RuleInfo(BaseModel):
    """Summary information about a rule."""

    name: str
    description: str = ""


class RulesListResponse(BaseModel):
    """Response listing all rules."""

    rules: list[RuleInfo]
    total: int


class RuleDetailResponse(BaseModel):
    """Detailed rule information, including its condition tree."""

    name: str
    description: str = ""
    conditions: dict[str, Any]


# =============================================================================
# Evaluation Models
# =============================================================================


class EvaluateRequest(BaseModel):
    """Input record to evaluate rules against."""

    data: dict[str, Any] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    """Names of every rule that matched, in rule set order."""

    matched: list[str]
    total: int


class TraceStepResponse(BaseModel):
    """A leaf comparison made while evaluating a rule."""

    node: str
    condition: str
    result: bool
    value_checked: Any = None


class RuleEvaluationResponse(BaseModel):
    """Result of evaluating a single named rule."""

    name: str
    found: bool
    matched: bool
    trace: list[TraceStepResponse] = Field(default_factory=list)
