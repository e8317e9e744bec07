# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Declarative ability configuration.

Exports:
    DefinitionFactory: Builds ability definitions from configuration
    AbilitiesConfigSchema: Top-level configuration document
    AbilitySchema: Rules for one actor type
    RuleSchema: Single rule declaration
"""

from .factory import DefinitionFactory, DefinitionFactoryError
from .schema import AbilitiesConfigSchema, AbilitySchema, RuleSchema

__all__ = [
    "AbilitiesConfigSchema",
    "AbilitySchema",
    "DefinitionFactory",
    "DefinitionFactoryError",
    "RuleSchema",
]
