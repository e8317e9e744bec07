"""Verdict — the outcome of evaluating one check against the rule list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ability_manager.rule import Rule


@dataclass(frozen=True)
class Verdict:
    """Immutable result of ``AbilityManager.check``.

    Attributes:
        result: Raw value of the last matching rule.  ``True`` for an
                unconditional rule, ``True``/``False`` for an attribute
                condition, or whatever a validator returned.  ``False`` when
                no rule matched.
        rule:   The rule that produced ``result``, ``None`` if nothing matched.
    """

    result: Any = False
    rule: Rule | None = None

    @property
    def allowed(self) -> bool:
        return bool(self.result)

    @property
    def granted(self) -> bool:
        """Strict form of ``allowed`` used by ``authorize``: only ``True`` grants."""
        return self.result is True

    @property
    def matched(self) -> bool:
        return self.rule is not None

    @staticmethod
    def no_match() -> Verdict:
        return Verdict(result=False, rule=None)
