"""AbilityManager — evaluates checks against the registered ability definitions."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from ability_manager.exceptions import UnauthorizedError
from ability_manager.registry import AbilityRegistry
from ability_manager.result import Verdict
from ability_manager.rule import RuleBuilder
from ability_manager.types import type_tag

if TYPE_CHECKING:
    from ability_manager.registry import AbilityDefinition
    from ability_manager.rule import Rule


class AbilityManager:
    """Answers "may this actor perform this action on this subject?".

    Every check re-runs the actor's ability definitions to collect a fresh
    rule list, so definitions may close over live actor state.  Matching
    rules are evaluated in **registration order** and the **last** matching
    rule decides.  No rule matching means denial with a ``False`` result.

    Parameters:
        registry: Store of ability definitions.  A new empty
                  :class:`AbilityRegistry` is created when omitted.
    """

    def __init__(self, registry: AbilityRegistry | None = None) -> None:
        self._registry = registry if registry is not None else AbilityRegistry()

    # ── configuration ────────────────────────────────────────

    def configure(self, actor_type: Any, definition: AbilityDefinition) -> AbilityManager:
        """Register *definition* for *actor_type*.  Returns ``self`` for chaining."""
        self._registry.configure(actor_type, definition)
        return self

    def reset(self) -> AbilityManager:
        """Clear all definitions.  Returns ``self`` for chaining."""
        self._registry.reset()
        return self

    # ── evaluation ───────────────────────────────────────────

    async def rules_for(self, actor: Any) -> list[Rule]:
        """Run the actor's definitions and return their rules in declaration order."""
        builder = RuleBuilder()
        for definition in self._registry.resolve_definitions(actor):
            outcome = definition(builder, actor)
            if inspect.isawaitable(outcome):
                await outcome
        return builder.rules

    async def check(self, actor: Any, action: str, subject: Any, *args: Any) -> Verdict:
        """Evaluate every matching rule in order and keep the last result.

        Validators receive *subject* followed by *args*.  Async validators are
        awaited one at a time; nothing is evaluated concurrently.
        """
        verdict = Verdict.no_match()
        for rule in await self.rules_for(actor):
            if not rule.applies_to(action, subject):
                continue
            result = await rule.evaluate(subject, *args)
            verdict = Verdict(result=result, rule=rule)
        return verdict

    async def can(self, actor: Any, action: str, subject: Any, *args: Any) -> Any:
        """Return the raw outcome of the check.

        The value is not coerced: a validator returning a message string
        yields that string.
        """
        verdict = await self.check(actor, action, subject, *args)
        return verdict.result

    async def cannot(self, actor: Any, action: str, subject: Any, *args: Any) -> bool:
        """Return ``True`` when the check's outcome is falsy."""
        verdict = await self.check(actor, action, subject, *args)
        return not verdict.allowed

    async def authorize(self, actor: Any, action: str, subject: Any, *args: Any) -> Any:
        """Return *subject* if granted, otherwise raise :class:`UnauthorizedError`.

        Only an outcome of exactly ``True`` grants.  Any other value, such as
        a message string returned by a validator, is a denial and becomes the
        raised error's ``result`` unchanged.
        """
        verdict = await self.check(actor, action, subject, *args)
        if not verdict.granted:
            raise UnauthorizedError(
                verdict.result,
                actor=actor,
                action=action,
                subject=subject,
            )
        return subject

    # ── introspection ────────────────────────────────────────

    async def export(self, actor: Any) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the rules that apply to *actor*."""
        rules = [rule.export() for rule in await self.rules_for(actor)]
        return {
            "actor_type": type_tag(actor),
            "rules": rules,
            "rule_count": len(rules),
        }

    @property
    def registry(self) -> AbilityRegistry:
        return self._registry
