"""AbilityRegistry — ability definitions stored per actor type."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from ability_manager.exceptions import AbilityConfigError
from ability_manager.types import type_tag

if TYPE_CHECKING:
    from ability_manager.rule import RuleBuilder

logger = logging.getLogger(__name__)

# Called with the per-check RuleBuilder and the actor instance.
AbilityDefinition = Callable[["RuleBuilder", Any], None] | Callable[
    ["RuleBuilder", Any], Awaitable[None]
]


class AbilityRegistry:
    """Ordered ability definitions keyed by actor type tag.

    Definitions are never invoked here; the manager calls them on every
    check.  Resolution is by exact type tag of the actor, so definitions for a
    parent class do not apply to instances of a subclass.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, list[AbilityDefinition]] = defaultdict(list)

    def configure(self, actor_type: Any, definition: AbilityDefinition) -> AbilityRegistry:
        """Append *definition* for *actor_type* (a class or type tag)."""
        if not callable(definition):
            raise AbilityConfigError(
                f"Ability definition must be callable, got {type(definition).__name__}"
            )
        tag = type_tag(actor_type)
        self._definitions[tag].append(definition)
        logger.debug("Configured ability definition #%d for %s", len(self._definitions[tag]), tag)
        return self

    def reset(self) -> AbilityRegistry:
        """Forget every registered definition."""
        self._definitions.clear()
        logger.debug("Ability registry reset")
        return self

    def resolve_definitions(self, actor: Any) -> list[AbilityDefinition]:
        """Return the definitions registered for the actor's exact type."""
        return list(self._definitions.get(type_tag(actor), ()))

    # ── introspection ────────────────────────────────────────

    def actor_types(self) -> list[str]:
        """Return the tags of all configured actor types, in first-seen order."""
        return [tag for tag, defs in self._definitions.items() if defs]

    def __contains__(self, actor_type: Any) -> bool:
        return bool(self._definitions.get(type_tag(actor_type)))

    def __len__(self) -> int:
        return sum(len(defs) for defs in self._definitions.values())
