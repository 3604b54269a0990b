from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from loguru import logger

from . import game
from .describe import describe_dice, describe_status
from .dice import QueuedRandom, RandomSource
from .errors import GameError
from .state import GameState
from .types import BonusChoice, PieceLocation


@dataclass(slots=True)
class GameSession:
    """Holds the authoritative state for an input layer.

    Every action goes through ``_transition``: a rejected action is logged,
    the held state is left as it was, and the error is re-raised so the
    caller can surface it.
    """

    rng: RandomSource = field(default_factory=QueuedRandom)
    _state: GameState = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._state = game.create_game()

    @property
    def state(self) -> GameState:
        return self._state

    def start(
        self, player_count: Optional[int] = None, pieces_per_player: Optional[int] = None
    ) -> GameState:
        return self._transition("start", lambda: game.create_game(player_count, pieces_per_player))

    def roll(self) -> GameState:
        return self._transition("roll", lambda: game.roll_dice(self._state, self.rng))

    def choose(self, option_id: str) -> GameState:
        return self._transition(
            f"choose {option_id}", lambda: game.apply_turn_option(self._state, option_id)
        )

    def apply_bonus(self, piece_id: str) -> GameState:
        return self._transition(
            f"bonus {piece_id}", lambda: game.apply_bonus_move(self._state, piece_id)
        )

    def skip_bonus(self) -> GameState:
        return self._transition("skip bonus", lambda: game.skip_bonus(self._state))

    # --- Read accessors ---
    def locations(self) -> Tuple[PieceLocation, ...]:
        return game.get_piece_locations(self._state)

    def bonus_choices(self) -> Tuple[BonusChoice, ...]:
        return game.get_bonus_choices(self._state)

    def status(self) -> str:
        return f"{describe_status(self._state)} | {describe_dice(self._state)}"

    def _transition(self, action: str, updater: Callable[[], GameState]) -> GameState:
        try:
            new_state = updater()
        except GameError as e:
            logger.warning(f"Rejected '{action}': {e}")
            raise
        self._state = new_state
        return new_state
