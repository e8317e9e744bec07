"""
ability_manager — Hello World

Declare what each actor type can do, then ask at runtime.  Matching rules
run in registration order and the last one decides.
"""

import asyncio

from ability_manager import AbilityManager, UnauthorizedError
from ability_manager.config import DefinitionFactory

# ─── Your domain classes (anything — the framework only reads their type) ───


class User:
    def __init__(self, name: str, admin: bool = False) -> None:
        self.name = name
        self.admin = admin


class Product:
    def __init__(self, title: str, owner: str, published: bool = False) -> None:
        self.title = title
        self.owner = owner
        self.published = published


async def in_stock(product: Product, warehouse: dict) -> bool:
    await asyncio.sleep(0)  # pretend to ask an inventory service
    return warehouse.get(product.title, 0) > 0


def user_abilities(rules, user: User) -> None:
    rules.can("read", Product, {"published": True})
    rules.can(
        ["update", "destroy"],
        Product,
        lambda product: True if product.owner == user.name else "Only the owner may change this",
    )
    rules.can("buy", Product, in_stock)
    if user.admin:
        rules.can("manage", "all")


async def main():
    # ──────────────────────────────────────
    #  1. Create the manager and declare rules
    # ──────────────────────────────────────
    abilities = AbilityManager()
    abilities.configure(User, user_abilities)

    alice = User("alice")
    bob = User("bob")
    root = User("root", admin=True)

    draft = Product("gizmo", owner="alice")
    listed = Product("widget", owner="alice", published=True)

    # ──────────────────────────────────────
    #  2. Boolean checks
    # ──────────────────────────────────────
    print("=== can / cannot ===\n")
    print(f"  bob reads listed product:  {await abilities.can(bob, 'read', listed)}")
    print(f"  bob reads draft product:   {await abilities.can(bob, 'read', draft)}")
    print(f"  root reads draft product:  {await abilities.can(root, 'read', draft)}")
    print(f"  bob cannot read draft:     {await abilities.cannot(bob, 'read', draft)}")
    print(f"  bob update result:         {await abilities.can(bob, 'update', listed)!r}")

    warehouse = {"widget": 3}
    print(f"  bob buys widget:           {await abilities.can(bob, 'buy', listed, warehouse)}")
    print(f"  bob buys gizmo:            {await abilities.can(bob, 'buy', draft, warehouse)}")

    # ──────────────────────────────────────
    #  3. Authorize-or-raise
    # ──────────────────────────────────────
    print("\n=== authorize ===\n")
    product = await abilities.authorize(alice, "update", listed)
    print(f"  alice may update '{product.title}'")

    try:
        await abilities.authorize(bob, "destroy", listed)
    except UnauthorizedError as e:
        print(f"  [DENIED] status={e.status}  result={e.result!r}")

    # ──────────────────────────────────────
    #  4. Rules from configuration
    # ──────────────────────────────────────
    print("\n=== configured rules ===\n")
    configured = DefinitionFactory().apply(
        AbilityManager(),
        {
            "abilities": [
                {"actor": "User", "rules": [{"actions": "read", "subjects": "all"}]},
            ]
        },
    )
    print(f"  bob reads draft product:   {await configured.can(bob, 'read', draft)}")
    print(f"  rules for bob:             {await configured.export(bob)}")


if __name__ == "__main__":
    asyncio.run(main())
