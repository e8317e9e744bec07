"""Custom exceptions for the ability_manager package."""

from __future__ import annotations

from typing import Any


class AbilityError(Exception):
    """Base exception for all ability-related errors."""


class UnauthorizedError(AbilityError):
    """Raised by ``authorize`` when a check is denied.

    Attributes:
        status: Always ``401``.
        kind:   Always ``"unauthorized"``.
        result: Raw value produced by the last matching rule, or ``False``
                when no rule matched.  A validator may return a message here
                to explain the denial.
    """

    status = 401
    kind = "unauthorized"

    def __init__(
        self,
        result: Any = False,
        *,
        actor: Any = None,
        action: str = "",
        subject: Any = None,
    ) -> None:
        self.result = result
        self.actor = actor
        self.action = action
        self.subject = subject
        msg = f"Not authorized to '{action}'" if action else "Not authorized"
        if isinstance(result, str) and result:
            msg += f": {result}"
        super().__init__(msg)


class AbilityConfigError(AbilityError):
    """Raised when a rule or ability definition is malformed."""
