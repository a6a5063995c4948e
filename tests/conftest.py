"""Pytest fixtures for test suite."""

import pytest
from pathlib import Path

from rule_engine.rules import RuleEngine, RuleLoader, RuleSet


SHOW_WITHOUT_VAT_JSON = """[
    {
        "name": "ShowWithoutVAT",
        "description": "show without VAT in subscriptions",
        "conditions": {
            "all": [
                {
                    "path": "$.product.category",
                    "value": "RATEPLANS",
                    "operator": "not_contains"
                },
                {
                    "any": [
                        {
                            "path": "$.context.serviceType",
                            "value": "prepaid",
                            "operator": "equal"
                        },
                        {
                            "path": "$.context.serviceType",
                            "value": "quicknet_prepaid",
                            "operator": "equal"
                        },
                        {
                            "all": [
                                {
                                    "path": "$.context.serviceType",
                                    "value": "flex",
                                    "operator": "equal"
                                },
                                {
                                    "path": "$.product.isEndUserControl",
                                    "value": true,
                                    "operator": "equal"
                                }
                            ]
                        }
                    ]
                }
            ]
        }
    }
]"""


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def rules_dir() -> Path:
    """Path to the bundled rules directory."""
    return Path(__file__).parent.parent / "rule_engine" / "rules" / "data"


@pytest.fixture
def show_without_vat_json() -> str:
    """Rule document with the single ShowWithoutVAT rule."""
    return SHOW_WITHOUT_VAT_JSON


@pytest.fixture
def rule_set(show_without_vat_json: str) -> RuleSet:
    """Rule set loaded from the ShowWithoutVAT document."""
    return RuleLoader().load_json(show_without_vat_json)


@pytest.fixture
def engine(rule_set: RuleSet) -> RuleEngine:
    """Rule engine over the ShowWithoutVAT rule set."""
    return RuleEngine(rule_set)


@pytest.fixture
def flex_subscription() -> dict:
    """Input record for an end-user controlled flex addon."""
    return {
        "product": {
            "category": "Addons",
            "isEndUserControl": True,
        },
        "context": {
            "serviceType": "flex",
        },
    }
