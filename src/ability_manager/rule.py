"""Rule and RuleBuilder — the declarations made inside an ability definition."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ability_manager.exceptions import AbilityConfigError
from ability_manager.types import ALL, MANAGE, type_tag

# A validator receives the subject followed by any extra check arguments.
# It may be sync, async, or return an awaitable.
Validator = Callable[..., Any] | Callable[..., Awaitable[Any]]
Condition = Mapping[str, Any] | Validator

_MISSING = object()


def _normalize_actions(actions: Any) -> tuple[str, ...]:
    if isinstance(actions, str):
        items: tuple[Any, ...] = (actions,)
    elif isinstance(actions, Iterable):
        items = tuple(actions)
    else:
        raise AbilityConfigError(f"Actions must be a name or a list of names, got {actions!r}")
    if not items:
        raise AbilityConfigError("A rule needs at least one action")
    for action in items:
        if not isinstance(action, str) or not action:
            raise AbilityConfigError(f"Actions must be non-empty strings, got {action!r}")
    return items


def _normalize_subjects(subjects: Any) -> tuple[str, ...]:
    if isinstance(subjects, (str, type)):
        items: tuple[Any, ...] = (subjects,)
    elif isinstance(subjects, Iterable):
        items = tuple(subjects)
    else:
        raise AbilityConfigError(f"Subjects must be classes or type names, got {subjects!r}")
    if not items:
        raise AbilityConfigError("A rule needs at least one subject type")
    return tuple(type_tag(s) for s in items)


def _read_attribute(subject: Any, key: str) -> Any:
    if isinstance(subject, Mapping):
        return subject.get(key, _MISSING)
    # Entities may keep their attributes behind a ``get(key)`` accessor.
    getter = getattr(subject, "get", None)
    if callable(getter) and not isinstance(subject, type):
        return getter(key)
    return getattr(subject, key, _MISSING)


@dataclass(frozen=True)
class Rule:
    """One action/subject/condition permission record.

    Attributes:
        actions:   Action names this rule grants.  ``"manage"`` grants all.
        subjects:  Subject type tags.  ``"all"`` covers every type.
        condition: ``None`` (unconditional), a mapping of attribute values the
                   subject must carry, or a validator callable.
    """

    actions: tuple[str, ...]
    subjects: tuple[str, ...]
    condition: Condition | None = None

    @classmethod
    def create(
        cls,
        actions: str | Iterable[str],
        subjects: Any,
        condition: Condition | None = None,
    ) -> Rule:
        """Build a rule from loosely-typed arguments, validating each one."""
        if condition is not None and not isinstance(condition, Mapping):
            if not callable(condition):
                raise AbilityConfigError(
                    f"Condition must be a mapping or a callable, got {type(condition).__name__}"
                )
        if isinstance(condition, Mapping):
            condition = dict(condition)
        return cls(
            actions=_normalize_actions(actions),
            subjects=_normalize_subjects(subjects),
            condition=condition,
        )

    # ── matching ─────────────────────────────────────────────

    def matches_action(self, action: str) -> bool:
        return MANAGE in self.actions or action in self.actions

    def matches_subject(self, subject: Any) -> bool:
        return ALL in self.subjects or type_tag(subject) in self.subjects

    def applies_to(self, action: str, subject: Any) -> bool:
        return self.matches_action(action) and self.matches_subject(subject)

    # ── evaluation ───────────────────────────────────────────

    async def evaluate(self, subject: Any, *args: Any) -> Any:
        """Return this rule's raw result for *subject*.

        Awaits the validator's result when it is awaitable.  Exceptions raised
        by a validator propagate unchanged.
        """
        if self.condition is None:
            return True

        if isinstance(self.condition, Mapping):
            return all(
                _read_attribute(subject, key) == expected
                for key, expected in self.condition.items()
            )

        result = self.condition(subject, *args)
        if inspect.isawaitable(result):
            result = await result
        return result

    # ── introspection ────────────────────────────────────────

    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of this rule."""
        if self.condition is None:
            condition: dict[str, Any] = {"type": "none"}
        elif isinstance(self.condition, Mapping):
            condition = {"type": "attributes", "values": dict(self.condition)}
        else:
            name = getattr(self.condition, "__name__", type(self.condition).__name__)
            condition = {"type": "validator", "name": name}
        return {
            "actions": list(self.actions),
            "subjects": list(self.subjects),
            "condition": condition,
        }


class RuleBuilder:
    """Collects the rules declared by ability definitions during one check.

    An instance is passed as the first argument to every ability definition.
    ``can`` and ``add_rule`` are interchangeable.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    def can(
        self,
        actions: str | Iterable[str],
        subjects: Any,
        condition: Condition | None = None,
    ) -> Rule:
        """Declare that the actor may perform *actions* on *subjects*."""
        rule = Rule.create(actions, subjects, condition)
        self._rules.append(rule)
        return rule

    add_rule = can

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
