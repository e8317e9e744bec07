# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Definition factory for building ability definitions from configuration.

Uses a name → validator registry so configuration can reference predicate
logic that has to live in Python.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ability_manager.exceptions import AbilityConfigError
from ability_manager.rule import Rule

from .schema import AbilitiesConfigSchema, AbilitySchema, RuleSchema

if TYPE_CHECKING:
    from ability_manager.manager import AbilityManager
    from ability_manager.registry import AbilityDefinition
    from ability_manager.rule import Condition, RuleBuilder, Validator

logger = logging.getLogger(__name__)


class DefinitionFactoryError(AbilityConfigError):
    """Raised when configuration cannot be turned into ability definitions."""

    pass


class DefinitionFactory:
    """Creates ability definitions from configuration.

    Validators referenced by name must be registered before ``build`` is
    called; names are resolved eagerly so a typo fails at load time rather
    than on the first check.

    Example:
        factory = DefinitionFactory()
        factory.register("is_owner", lambda post, user: post.author_id == user.id)
        factory.apply(manager, {
            "abilities": [
                {"actor": "User", "rules": [
                    {"actions": "read", "subjects": "Post", "conditions": {"published": True}},
                    {"actions": ["update", "destroy"], "subjects": "Post",
                     "validator": "is_owner"},
                ]},
            ]
        })
    """

    def __init__(self, validators: dict[str, Validator] | None = None) -> None:
        """Initialize factory with optional named validators.

        Args:
            validators: Initial name → validator mapping
        """
        self._validators: dict[str, Validator] = dict(validators or {})

    def register(self, name: str, validator: Validator) -> None:
        """Register a validator under *name*.

        Raises:
            DefinitionFactoryError: If validator is not callable
        """
        if not callable(validator):
            raise DefinitionFactoryError(f"Validator '{name}' must be callable")
        self._validators[name] = validator

    def registered_validators(self) -> list[str]:
        """Return the names of registered validators."""
        return list(self._validators.keys())

    def build(self, schema: AbilitySchema) -> AbilityDefinition:
        """Create one ability definition from its schema.

        Args:
            schema: Rules for one actor type

        Returns:
            A definition callable that declares the configured rules

        Raises:
            DefinitionFactoryError: If a rule references an unknown validator
                or is otherwise malformed
        """
        declared: list[Rule] = []
        for index, rule in enumerate(schema.rules):
            try:
                declared.append(Rule.create(rule.actions, rule.subjects, self._condition(rule)))
            except AbilityConfigError as e:
                raise DefinitionFactoryError(
                    f"Rule #{index} for actor '{schema.actor}': {e}"
                ) from e

        def definition(rules: RuleBuilder, actor: Any) -> None:
            for rule in declared:
                rules.can(rule.actions, rule.subjects, rule.condition)

        definition.__name__ = f"configured_{schema.actor}"
        return definition

    def apply(
        self,
        manager: AbilityManager,
        config: AbilitiesConfigSchema | dict[str, Any] | str,
    ) -> AbilityManager:
        """Configure *manager* with every ability in *config*.

        Args:
            manager: Manager to configure
            config: Parsed schema, plain dict, or JSON text

        Returns:
            The manager, for chaining

        Raises:
            DefinitionFactoryError: If configuration is invalid
        """
        parsed = self._parse(config)
        definitions = [(ability.actor, self.build(ability)) for ability in parsed.abilities]
        for actor, definition in definitions:
            manager.configure(actor, definition)
        logger.debug("Applied %d configured ability definition(s)", len(definitions))
        return manager

    def load_file(self, manager: AbilityManager, path: str | Path) -> AbilityManager:
        """Read a JSON configuration file and apply it to *manager*."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise DefinitionFactoryError(f"Cannot read ability config '{path}': {e}") from e
        return self.apply(manager, text)

    def _parse(self, config: AbilitiesConfigSchema | dict[str, Any] | str) -> AbilitiesConfigSchema:
        if isinstance(config, AbilitiesConfigSchema):
            return config
        try:
            if isinstance(config, str):
                return AbilitiesConfigSchema.model_validate_json(config)
            return AbilitiesConfigSchema.model_validate(config)
        except ValidationError as e:
            raise DefinitionFactoryError(f"Invalid ability configuration: {e}") from e

    def _condition(self, rule: RuleSchema) -> Condition | None:
        if rule.validator is None:
            return rule.conditions
        validator = self._validators.get(rule.validator)
        if validator is None:
            available = ", ".join(sorted(self._validators)) or "none"
            raise DefinitionFactoryError(
                f"Unknown validator: '{rule.validator}'. Available validators: {available}"
            )
        return validator
