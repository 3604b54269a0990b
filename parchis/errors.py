from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import MoveRejection


class GameError(Exception):
    """Base exception for rejected engine operations."""

    pass


class SetupError(GameError, ValueError):
    """Raised when a game cannot be created from the requested counts."""

    pass


class PhaseError(GameError):
    """Raised when an operation is invoked outside its phase."""

    pass


class UnknownOptionError(GameError, KeyError):
    """Raised when a turn option id is not among the current options."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnknownPieceError(GameError, KeyError):
    """Raised when a piece id does not belong to the acting player."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class IllegalMoveError(GameError):
    """Raised when a move fails re-validation at execution time."""

    def __init__(self, message: str, reason: "MoveRejection | None" = None):
        super().__init__(message)
        self.reason = reason


class IllegalBonusError(IllegalMoveError):
    """Raised when a bonus is applied to a piece that cannot take it."""

    pass
