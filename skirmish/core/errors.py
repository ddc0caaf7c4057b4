"""
Error taxonomy for engine operations.

Every rejected operation raises an ``IllegalOperation`` before any state is
committed, so the session is always left unchanged. ``TerminalState`` is the
rejection used once the game is over. ``UntrustedActionRejected`` is never
raised out of the engine; it records an externally supplied action that was
dropped while a plan was being applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from .actions import Action


class SkirmishError(Exception):
    """Base class for all engine errors."""


class IllegalOperation(SkirmishError):
    """
    Operation rejected at the point of call.

    Attributes:
        code: Stable machine-readable reason (e.g. "OCCUPIED")
        message: Human-readable explanation
    """

    def __init__(self, code: str, message: str):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class TerminalState(IllegalOperation):
    """The game is over; gameplay operations are no longer accepted."""

    def __init__(self, message: str = "The game is over"):
        super().__init__("GAME_OVER", message)


@dataclass
class UntrustedActionRejected:
    """An externally supplied action that failed validation and was dropped."""

    action: "Action"
    code: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.to_dict(),
            "code": self.code,
            "reason": self.reason,
        }
