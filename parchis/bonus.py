from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from loguru import logger

from .board import Board
from .config import config
from .describe import piece_label, player_label
from .rules import legal_destination
from .state import GameState
from .types import BonusChoice, MoveResult, Phase


def bonuses_for(result: MoveResult) -> Tuple[int, ...]:
    """Bonus steps earned by one executed move, in queue order."""
    earned = (config.CAPTURE_BONUS,) * result.captured
    if result.reached_home:
        earned += (config.HOME_BONUS,)
    return earned


def legal_bonus_choices(state: GameState, amount: int) -> Tuple[BonusChoice, ...]:
    """Pieces of the current player that can legally take ``amount`` steps."""
    player_index = state.current_player_index
    board = Board(state.players)
    return tuple(
        BonusChoice(piece_id=pc.piece_id, piece_slot=pc.slot, label=f"{piece_label(pc)} by {amount}")
        for pc in state.players[player_index].pieces
        if legal_destination(state, player_index, pc, amount, board=board) is not None
    )


def resolve_pending_bonuses(state: GameState) -> GameState:
    """Discard unusable bonuses from the front of the queue.

    Stops in ``await_bonus`` at the first bonus with a legal recipient. When
    the queue runs dry the returned state has no pending bonuses and the
    caller finishes the turn.
    """
    while state.pending_bonuses:
        amount = state.pending_bonuses[0]
        if legal_bonus_choices(state, amount):
            return replace(state, phase=Phase.AWAIT_BONUS)
        logger.debug(f"Bonus {amount} has no legal recipient; discarding")
        state = replace(state, pending_bonuses=state.pending_bonuses[1:]).with_log(
            f"{player_label(state, state.current_player_index)} cannot use bonus {amount}; skipping it"
        )
    return state
