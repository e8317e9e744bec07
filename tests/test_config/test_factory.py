"""Tests for the definition factory."""

import json

import pytest

from ability_manager import AbilityConfigError, AbilityManager
from ability_manager.config import (
    AbilitiesConfigSchema,
    AbilitySchema,
    DefinitionFactory,
    DefinitionFactoryError,
    RuleSchema,
)


class Entity:
    def __init__(self, **attrs):
        self.__dict__.update(attrs)


class User(Entity):
    pass


class Product(Entity):
    pass


CONFIG = {
    "abilities": [
        {
            "actor": "User",
            "rules": [
                {"actions": "read", "subjects": "Product", "conditions": {"published": True}},
                {"actions": ["update", "destroy"], "subjects": "Product", "validator": "is_owner"},
            ],
        },
    ]
}


def is_owner(product, user):
    return product.owner == user.name


@pytest.fixture
def factory():
    return DefinitionFactory(validators={"is_owner": is_owner})


class TestDefinitionFactory:
    """Tests for DefinitionFactory."""

    def test_register_validator(self):
        factory = DefinitionFactory()
        factory.register("always", lambda subject: True)
        assert factory.registered_validators() == ["always"]

    def test_register_non_callable_raises(self):
        factory = DefinitionFactory()
        with pytest.raises(DefinitionFactoryError):
            factory.register("bad", "nope")

    def test_factory_error_is_config_error(self):
        assert issubclass(DefinitionFactoryError, AbilityConfigError)

    async def test_apply_dict(self, factory):
        abilities = AbilityManager()
        assert factory.apply(abilities, CONFIG) is abilities

        alice = User(name="alice")
        product = Product(published=True, owner="alice")

        assert await abilities.can(alice, "read", product) is True
        assert await abilities.can(alice, "read", Product(published=False)) is False
        assert await abilities.can(alice, "update", product, alice) is True
        assert await abilities.can(alice, "destroy", product, User(name="bob")) is False
        assert await abilities.can(alice, "create", product) is False

    async def test_apply_json(self, factory):
        abilities = factory.apply(AbilityManager(), json.dumps(CONFIG))
        assert await abilities.can(User(), "read", Product(published=True)) is True

    async def test_apply_schema(self, factory):
        schema = AbilitiesConfigSchema(
            abilities=[
                AbilitySchema(
                    actor="User",
                    rules=[RuleSchema(actions="manage", subjects="all")],
                )
            ]
        )
        abilities = factory.apply(AbilityManager(), schema)
        assert await abilities.can(User(), "anything", Product()) is True

    async def test_configured_rules_follow_code_rules(self, factory):
        abilities = AbilityManager()
        abilities.configure(User, lambda rules, user: rules.can("read", Product))
        factory.apply(abilities, CONFIG)

        # The configured rule is registered later and therefore decides.
        assert await abilities.can(User(), "read", Product(published=False)) is False

    async def test_load_file(self, factory, tmp_path):
        path = tmp_path / "abilities.json"
        path.write_text(json.dumps(CONFIG))

        abilities = factory.load_file(AbilityManager(), path)
        assert await abilities.can(User(), "read", Product(published=True)) is True

    def test_load_missing_file(self, factory, tmp_path):
        with pytest.raises(DefinitionFactoryError) as exc_info:
            factory.load_file(AbilityManager(), tmp_path / "missing.json")
        assert "Cannot read" in str(exc_info.value)

    def test_unknown_validator_raises(self):
        factory = DefinitionFactory()
        with pytest.raises(DefinitionFactoryError) as exc_info:
            factory.apply(AbilityManager(), CONFIG)

        message = str(exc_info.value)
        assert "Unknown validator" in message
        assert "is_owner" in message
        assert "Rule #1" in message

    def test_invalid_document_raises(self, factory):
        with pytest.raises(DefinitionFactoryError) as exc_info:
            factory.apply(AbilityManager(), {"abilities": [{"rules": []}]})
        assert "Invalid ability configuration" in str(exc_info.value)

    def test_invalid_json_raises(self, factory):
        with pytest.raises(DefinitionFactoryError):
            factory.apply(AbilityManager(), "{not json")

    def test_malformed_rule_raises_at_build(self, factory):
        schema = AbilitySchema(actor="User", rules=[RuleSchema(actions=[], subjects="Product")])
        with pytest.raises(DefinitionFactoryError) as exc_info:
            factory.build(schema)
        assert "Rule #0" in str(exc_info.value)

    def test_failed_apply_configures_nothing(self):
        factory = DefinitionFactory()
        abilities = AbilityManager()
        config = {
            "abilities": [
                {"actor": "User", "rules": [{"actions": "read", "subjects": "Product"}]},
                {"actor": "User", "rules": [{"actions": "read", "subjects": "Product",
                                             "validator": "missing"}]},
            ]
        }
        with pytest.raises(DefinitionFactoryError):
            factory.apply(abilities, config)
        assert len(abilities.registry) == 0

    async def test_export_names_configured_validator(self, factory):
        abilities = factory.apply(AbilityManager(), CONFIG)
        data = await abilities.export(User())
        assert data["rule_count"] == 2
        assert data["rules"][1]["condition"] == {"type": "validator", "name": "is_owner"}
