"""ability_manager — in-process authorization rules.

Rules are declared per actor type and re-evaluated on every check.  Matching
rules run in registration order and the last one decides.
"""

from ability_manager.exceptions import (
    AbilityConfigError,
    AbilityError,
    UnauthorizedError,
)
from ability_manager.manager import AbilityManager
from ability_manager.registry import AbilityRegistry
from ability_manager.result import Verdict
from ability_manager.rule import Rule, RuleBuilder
from ability_manager.types import ALL, MANAGE, type_tag

__all__ = [
    "ALL",
    "MANAGE",
    "AbilityConfigError",
    "AbilityError",
    "AbilityManager",
    "AbilityRegistry",
    "Rule",
    "RuleBuilder",
    "UnauthorizedError",
    "Verdict",
    "type_tag",
]
