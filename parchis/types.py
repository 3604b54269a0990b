from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


class Color(IntEnum):
    RED = 0
    YELLOW = 1
    BLUE = 2
    GREEN = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class Phase(str, Enum):
    AWAIT_ROLL = "await_roll"
    AWAIT_ACTION = "await_action"
    AWAIT_BONUS = "await_bonus"
    GAME_OVER = "game_over"


class Zone(str, Enum):
    NEST = "nest"
    TRACK = "track"
    HOME_LANE = "home_lane"
    HOME = "home"


class OptionKind(str, Enum):
    COMBINED = "combined"
    SPLIT = "split"
    SINGLE = "single"


class MoveRejection(str, Enum):
    """Why a piece cannot move a given number of steps."""

    INVALID_STEPS = "invalid_steps"
    ALREADY_FINISHED = "already_finished"
    NEED_FIVE_TO_EXIT = "need_five_to_exit"
    START_BLOCKED_BY_BARRIER = "start_blocked_by_barrier"
    START_HAS_OWN_BARRIER = "start_has_own_barrier"
    NEEDS_EXACT_ROLL = "needs_exact_roll"
    BLOCKED_BY_BARRIER = "blocked_by_barrier"
    CANNOT_STACK_MORE_THAN_TWO = "cannot_stack_more_than_two"


@dataclass(frozen=True, slots=True)
class MoveCheck:
    destination_progress: int
    destination_track_index: Optional[int]
    from_nest: bool


@dataclass(frozen=True, slots=True)
class MoveResult:
    piece_id: str
    piece_slot: int
    from_progress: int
    to_progress: int
    captured: int
    reached_home: bool


@dataclass(frozen=True, slots=True)
class PlannedMove:
    piece_id: str
    steps: int


@dataclass(frozen=True, slots=True)
class TurnOption:
    option_id: str
    kind: OptionKind
    moves: Tuple[PlannedMove, ...]
    label: str

    @property
    def signature(self) -> str:
        moves = "|".join(f"{mv.piece_id}:{mv.steps}" for mv in self.moves)
        return f"{self.kind.value}:{moves}"


@dataclass(frozen=True, slots=True)
class BonusChoice:
    piece_id: str
    piece_slot: int
    label: str


@dataclass(frozen=True, slots=True)
class PieceLocation:
    player_index: int
    piece_id: str
    slot: int
    zone: Zone
    track_index: Optional[int]
    lane_index: Optional[int]
