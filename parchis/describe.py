"""
Human-readable text for the event log and the input layer.
"""

from __future__ import annotations

from .config import config
from .piece import Piece
from .state import GameState
from .types import Phase, PieceLocation, Zone

_PHASE_TEXT = {
    Phase.AWAIT_ROLL: "roll dice",
    Phase.AWAIT_ACTION: "pick move",
    Phase.AWAIT_BONUS: "apply bonus",
}


def player_label(state: GameState, player_index: int) -> str:
    player = state.players[player_index]
    return f"Player {player_index + 1} ({player.color.label})"


def piece_label(piece: Piece) -> str:
    return f"piece {piece.slot + 1}"


def describe_phase(phase: Phase) -> str:
    return _PHASE_TEXT.get(phase, phase.value)


def describe_status(state: GameState) -> str:
    """One-line summary of whose turn it is, or who won."""
    if state.phase == Phase.GAME_OVER and state.winner_index is not None:
        return f"Winner: {player_label(state, state.winner_index)}"
    return (
        f"{player_label(state, state.current_player_index)} | "
        f"phase: {describe_phase(state.phase)} | "
        f"doubles streak: {state.double_chain_count}"
    )


def describe_dice(state: GameState) -> str:
    if state.dice is None:
        return "Dice: not rolled"
    return f"Dice: {state.dice[0]} + {state.dice[1]}"


def describe_location(location: PieceLocation) -> str:
    """Bare description of where a piece is, e.g. for tooltips."""
    if location.zone == Zone.NEST:
        return "in nest"
    if location.zone == Zone.TRACK:
        return f"on track square {location.track_index}"
    if location.zone == Zone.HOME_LANE:
        return f"home lane step {location.lane_index + 1} of {config.HOME_LENGTH}"
    return "home"
