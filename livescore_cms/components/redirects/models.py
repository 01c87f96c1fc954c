"""
Redirects component models.

Rules, validation errors and the action the resolver hands back to the HTTP edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

REDIRECT_TYPES = frozenset({301, 302, 307, 308})
TERMINAL_TYPES = frozenset({410, 451})

TERMINAL_BODIES = {
    410: "",
    451: "Unavailable For Legal Reasons",
}


# --- Rule ---


@dataclass(frozen=True)
class RedirectRule:
    """Stored mapping from a source path to a destination plus status semantics."""

    id: UUID
    source: str
    destination: str
    type: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    hits: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.type in TERMINAL_TYPES


# --- Validation Error ---


@dataclass(frozen=True)
class RedirectValidationError:
    """Redirect validation error."""

    code: str
    message: str
    field: str | None = None


# --- Resolver Action ---


class ActionKind(str, Enum):
    PASS = "pass"
    REDIRECT = "redirect"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class RedirectAction:
    """What the edge should do with a request."""

    kind: ActionKind
    status: int | None = None
    location: str | None = None
    body: str | None = None
    rule: RedirectRule | None = None

    @classmethod
    def pass_through(cls) -> RedirectAction:
        return cls(kind=ActionKind.PASS)

    @classmethod
    def redirect(cls, location: str, status: int, rule: RedirectRule) -> RedirectAction:
        return cls(kind=ActionKind.REDIRECT, status=status, location=location, rule=rule)

    @classmethod
    def terminal(cls, status: int, rule: RedirectRule) -> RedirectAction:
        return cls(
            kind=ActionKind.TERMINAL,
            status=status,
            body=TERMINAL_BODIES.get(status, ""),
            rule=rule,
        )

    @property
    def is_pass(self) -> bool:
        return self.kind is ActionKind.PASS
