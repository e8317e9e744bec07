"""Type tags and synonym tokens shared by rules and the registry."""

from __future__ import annotations

from typing import Any

MANAGE = "manage"
"""Action synonym matching every requested action."""

ALL = "all"
"""Subject synonym matching every subject type."""


def type_tag(value: Any) -> str:
    """Return the type tag used to match actors and subjects.

    * A ``str`` is already a tag and is returned as is.
    * A class is tagged by its own ``__ability_type__`` attribute when it
      declares one, otherwise by its ``__name__``.
    * Any other object is tagged by its class.

    The attribute is read from the class ``__dict__`` so a subclass does not
    inherit its parent's tag.
    """
    if isinstance(value, str):
        return value
    cls = value if isinstance(value, type) else type(value)
    tag = cls.__dict__.get("__ability_type__")
    return tag if isinstance(tag, str) else cls.__name__
