from .board import Board
from .config import config
from .dice import QueuedRandom, roll_die
from .errors import (
    GameError,
    IllegalBonusError,
    IllegalMoveError,
    PhaseError,
    SetupError,
    UnknownOptionError,
    UnknownPieceError,
)
from .game import (
    apply_bonus_move,
    apply_turn_option,
    create_game,
    get_bonus_choices,
    get_piece_locations,
    roll_dice,
    skip_bonus,
)
from .piece import Piece
from .player import Player
from .rules import can_move, execute_move
from .session import GameSession
from .state import GameState
from .types import (
    BonusChoice,
    Color,
    MoveCheck,
    MoveRejection,
    MoveResult,
    OptionKind,
    Phase,
    PieceLocation,
    PlannedMove,
    TurnOption,
    Zone,
)

__all__ = [
    "config",
    "Board",
    "Piece",
    "Player",
    "GameState",
    "GameSession",
    "QueuedRandom",
    "roll_die",
    "can_move",
    "execute_move",
    "create_game",
    "roll_dice",
    "apply_turn_option",
    "get_bonus_choices",
    "apply_bonus_move",
    "skip_bonus",
    "get_piece_locations",
    "BonusChoice",
    "Color",
    "MoveCheck",
    "MoveRejection",
    "MoveResult",
    "OptionKind",
    "Phase",
    "PieceLocation",
    "PlannedMove",
    "TurnOption",
    "Zone",
    "GameError",
    "SetupError",
    "PhaseError",
    "UnknownOptionError",
    "UnknownPieceError",
    "IllegalMoveError",
    "IllegalBonusError",
]
