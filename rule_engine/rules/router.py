"""Routes for inspecting and evaluating rules."""

from fastapi import APIRouter, HTTPException

from rule_engine.core.config import get_settings
from rule_engine.core.logging import get_logger
from .engine import RuleEngine
from .errors import UnknownOperator
from .loader import RuleLoader
from .schemas import (
    EvaluateRequest,
    EvaluateResponse,
    RuleDetailResponse,
    RuleEvaluationResponse,
    RuleInfo,
    RulesListResponse,
    TraceStepResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/rules", tags=["Rules"])

# Global instance
_engine: RuleEngine | None = None


def get_engine() -> RuleEngine:
    """Get or create the rule engine from the configured rules file."""
    global _engine
    if _engine is None:
        settings = get_settings()
        loader = RuleLoader(
            mode=settings.node_mode,
            validate_operators=settings.validate_operators,
            max_depth=settings.max_depth,
        )
        _engine = RuleEngine(loader.load_file(settings.rules_file))
    return _engine


@router.get("", response_model=RulesListResponse)
async def list_rules() -> RulesListResponse:
    """List all loaded rules in declared order."""
    engine = get_engine()
    rule_infos = [
        RuleInfo(name=rule.name, description=rule.description)
        for rule in engine.rules.rules
    ]
    return RulesListResponse(rules=rule_infos, total=len(rule_infos))


@router.get("/{name}", response_model=RuleDetailResponse)
async def get_rule(name: str) -> RuleDetailResponse:
    """Get a rule and its condition tree."""
    rule = get_engine().rules.get(name)
    if rule is None:
        raise HTTPException(status_code=404, detail=f"Rule not found: {name}")

    return RuleDetailResponse(
        name=rule.name,
        description=rule.description,
        conditions=rule.condition.model_dump(mode="json"),
    )


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Evaluate every rule against the request data."""
    try:
        matched = get_engine().evaluate(request.data)
    except UnknownOperator as e:
        logger.warning("evaluation_failed", error=str(e))
        raise HTTPException(status_code=422, detail=str(e)) from e

    names = [rule.name for rule in matched]
    return EvaluateResponse(matched=names, total=len(names))


@router.post("/{name}/evaluate", response_model=RuleEvaluationResponse)
async def evaluate_rule(name: str, request: EvaluateRequest) -> RuleEvaluationResponse:
    """Evaluate a single rule and return the comparisons it made."""
    try:
        result = get_engine().explain(name, request.data)
    except UnknownOperator as e:
        logger.warning("evaluation_failed", rule=name, error=str(e))
        raise HTTPException(status_code=422, detail=str(e)) from e

    return RuleEvaluationResponse(
        name=result.name,
        found=result.found,
        matched=result.matched,
        trace=[TraceStepResponse(**step.model_dump()) for step in result.trace],
    )
