# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for declarative ability configuration.

These Pydantic models describe rules as plain data so they can be kept in
JSON next to the application instead of in Python code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class RuleSchema(BaseModel):
    """Single rule declaration.

    Attributes:
        actions: One action name or a list of them ("manage" grants all)
        subjects: One subject type tag or a list of them ("all" covers all)
        conditions: Attribute values the subject must carry
        validator: Name of a validator registered with the factory
    """

    actions: str | list[str]
    subjects: str | list[str]
    conditions: dict[str, Any] | None = None
    validator: str | None = None

    @model_validator(mode="after")
    def _one_condition_kind(self) -> RuleSchema:
        if self.conditions is not None and self.validator is not None:
            raise ValueError("A rule may set 'conditions' or 'validator', not both")
        return self


class AbilitySchema(BaseModel):
    """Rules granted to one actor type.

    Attributes:
        actor: Actor type tag (class name or ``__ability_type__``)
        rules: Rules in declaration order
    """

    actor: str
    rules: list[RuleSchema] = Field(default_factory=list)


class AbilitiesConfigSchema(BaseModel):
    """Top-level configuration document.

    Attributes:
        abilities: One entry per ability definition, applied in order
    """

    abilities: list[AbilitySchema] = Field(default_factory=list)
