"""Rule document loader and validator.

Rule documents are JSON (or YAML) arrays of ``{name, description, conditions}``
objects. Each ``conditions`` value is decoded into exactly one of the
condition node variants; anything that does not fit is rejected with
``InvalidRuleDocument`` and no rule set is produced.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rule_engine.core.logging import get_logger
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

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 100

LEAF_FIELDS = ("path", "operator", "value")
YAML_SUFFIXES = (".yaml", ".yml")


class RuleLoader:
    """Decodes rule documents into immutable rule sets.

    Args:
        mode: ``strict`` rejects condition nodes that populate more than one of
            ``all``/``any``/leaf fields. ``precedence`` accepts them and picks
            ``all`` over ``any`` over the leaf.
        validate_operators: Check every leaf operator name while loading
            instead of waiting for the leaf to be evaluated.
        max_depth: Deepest condition nesting accepted.
    """

    def __init__(
        self,
        mode: NodeMode | str = NodeMode.STRICT,
        validate_operators: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.mode = NodeMode(mode)
        self.validate_operators = validate_operators
        self.max_depth = max_depth

    def load_json(self, text: str | bytes) -> RuleSet:
        """Load a rule set from JSON text."""
        try:
            content = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("rule_document_rejected", error=str(e))
            raise InvalidRuleDocument(f"Malformed JSON: {e.msg} (line {e.lineno})") from e
        except UnicodeDecodeError as e:
            logger.warning("rule_document_rejected", error=str(e))
            raise InvalidRuleDocument(f"Rule document is not valid text: {e.reason}") from e
        except RecursionError as e:
            logger.warning("rule_document_rejected", error="recursion limit")
            raise InvalidRuleDocument("Rule document nested too deeply") from e
        return self.load_data(content)

    def load_yaml(self, text: str) -> RuleSet:
        """Load a rule set from YAML text."""
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.warning("rule_document_rejected", error=str(e))
            raise InvalidRuleDocument("Malformed YAML") from e
        except RecursionError as e:
            logger.warning("rule_document_rejected", error="recursion limit")
            raise InvalidRuleDocument("Rule document nested too deeply") from e
        return self.load_data(content)

    def load_file(self, path: str | Path) -> RuleSet:
        """Load a rule set from a ``.json``, ``.yaml`` or ``.yml`` file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Rule file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            logger.warning("rule_document_rejected", path=str(path), error=str(e))
            raise InvalidRuleDocument(f"Rule file is not valid UTF-8: {path}") from e

        if path.suffix.lower() in YAML_SUFFIXES:
            rule_set = self.load_yaml(text)
        else:
            rule_set = self.load_json(text)
        logger.info("rule_file_loaded", path=str(path), rules=len(rule_set))
        return rule_set

    def load_data(self, content: Any) -> RuleSet:
        """Build a rule set from already-decoded document data."""
        try:
            rule_set = self._parse_rule_set(content)
        except RuleEngineError as e:
            logger.warning("rule_document_rejected", error=str(e))
            raise
        logger.debug("rule_set_loaded", rules=len(rule_set), mode=self.mode.value)
        return rule_set

    def _parse_rule_set(self, content: Any) -> RuleSet:
        # Handle single rule or list of rules
        if isinstance(content, dict):
            content = [content]
        if not isinstance(content, list):
            raise InvalidRuleDocument("Rule document must be an array of rules")

        rules = tuple(
            self._parse_rule(item, f"rules[{i}]") for i, item in enumerate(content)
        )
        return RuleSet(rules=rules)

    def _parse_rule(self, data: Any, location: str) -> Rule:
        """Parse a rule from dictionary data."""
        if not isinstance(data, dict):
            raise InvalidRuleDocument("Rule must be an object", location)

        name = data.get("name")
        if not isinstance(name, str):
            raise InvalidRuleDocument("Rule 'name' must be a string", location)

        description = data.get("description")
        if description is None:
            description = ""
        elif not isinstance(description, str):
            raise InvalidRuleDocument("Rule 'description' must be a string", location)

        if data.get("conditions") is None:
            raise InvalidRuleDocument("Rule is missing 'conditions'", location)
        condition = self._parse_node(data["conditions"], f"{location}.conditions", 1)

        try:
            return Rule(name=name, description=description, condition=condition)
        except ValidationError as e:
            raise InvalidRuleDocument(str(e), location) from e

    def _parse_node(self, data: Any, location: str, depth: int) -> ConditionNode:
        """Parse a condition node into its single variant."""
        if depth > self.max_depth:
            raise InvalidRuleDocument(
                f"Condition nesting exceeds maximum depth of {self.max_depth}", location
            )
        if not isinstance(data, dict):
            raise InvalidRuleDocument("Condition node must be an object", location)

        has_all = data.get("all") is not None
        has_any = data.get("any") is not None
        has_leaf = any(data.get(field) is not None for field in LEAF_FIELDS)

        variants = [
            variant
            for variant, present in (("all", has_all), ("any", has_any), ("leaf", has_leaf))
            if present
        ]
        if not variants:
            raise InvalidRuleDocument(
                "Condition node must define 'all', 'any' or a leaf comparison", location
            )
        if len(variants) > 1 and self.mode is NodeMode.STRICT:
            raise InvalidRuleDocument(
                f"Ambiguous condition node populates {', '.join(variants)}", location
            )

        if has_all:
            return AllCondition(all=self._parse_children(data["all"], f"{location}.all", depth))
        if has_any:
            return AnyCondition(any=self._parse_children(data["any"], f"{location}.any", depth))
        return self._parse_leaf(data, location)

    def _parse_children(
        self, items: Any, location: str, depth: int
    ) -> tuple[ConditionNode, ...]:
        if not isinstance(items, list):
            raise InvalidRuleDocument("Combinator children must be a list", location)
        return tuple(
            self._parse_node(item, f"{location}[{i}]", depth + 1)
            for i, item in enumerate(items)
        )

    def _parse_leaf(self, data: dict, location: str) -> LeafCondition:
        missing = [field for field in LEAF_FIELDS if data.get(field) is None]
        if missing:
            raise InvalidRuleDocument(
                f"Leaf condition is missing {', '.join(repr(f) for f in missing)}", location
            )

        path = data["path"]
        operator = data["operator"]
        value = data["value"]
        if not isinstance(path, str):
            raise InvalidRuleDocument("Leaf 'path' must be a string", location)
        if not isinstance(operator, str):
            raise InvalidRuleDocument("Leaf 'operator' must be a string", location)
        if not isinstance(value, (str, int, float, bool)):
            raise InvalidRuleDocument(
                "Leaf 'value' must be a string, number or boolean", location
            )

        if self.validate_operators:
            try:
                Operator.parse(operator)
            except UnknownOperator:
                raise UnknownOperator(operator, location) from None

        return LeafCondition(path=path, operator=operator, value=value)


def load_rule_set(
    text: str | bytes,
    mode: NodeMode | str = NodeMode.STRICT,
    validate_operators: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RuleSet:
    """Load a rule set from a JSON document.

    Raises:
        InvalidRuleDocument: If the JSON is malformed or a node is invalid.
        UnknownOperator: If ``validate_operators`` is set and a leaf names an
            unknown operator.
    """
    loader = RuleLoader(mode=mode, validate_operators=validate_operators, max_depth=max_depth)
    return loader.load_json(text)
