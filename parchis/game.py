"""
Turn sequencing and the public operations of the engine.

Every operation takes a ``GameState`` and returns a new one; a raised
``GameError`` means the input state is still the authoritative value.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Optional, Tuple

from loguru import logger

from .bonus import bonuses_for, legal_bonus_choices, resolve_pending_bonuses
from .config import config
from .describe import piece_label, player_label
from .dice import RandomSource, roll_pair
from .errors import IllegalBonusError, PhaseError, UnknownOptionError, UnknownPieceError
from .options import build_turn_options
from .piece import Piece
from .player import Player
from .rules import execute_move
from .state import GameState, validate_counts
from .types import BonusChoice, MoveResult, Phase, PieceLocation, Zone


def create_game(
    player_count: Optional[int] = None, pieces_per_player: Optional[int] = None
) -> GameState:
    """Set up a new game; counts default to the configured NUM_PLAYERS/PIECES_PER_PLAYER."""
    player_count = config.NUM_PLAYERS if player_count is None else player_count
    pieces_per_player = config.PIECES_PER_PLAYER if pieces_per_player is None else pieces_per_player
    validate_counts(player_count, pieces_per_player)

    players = tuple(Player.create(i, pieces_per_player) for i in range(player_count))
    logger.debug(f"New game: {player_count} players x {pieces_per_player} piece(s)")
    return GameState(
        player_count=player_count,
        pieces_per_player=pieces_per_player,
        players=players,
        log=(
            f"Game ready for {player_count} players with {pieces_per_player} piece(s) each",
            f"Players need a {config.EXIT_ROLL} to leave nest",
        ),
    )


# --- Phase helpers ---
def _require_phase(state: GameState, phase: Phase, action: str) -> None:
    if state.phase == Phase.GAME_OVER:
        raise PhaseError(f"The game is over; {action} is not accepted")
    if state.phase != phase:
        raise PhaseError(f"{action} is only allowed during {phase.value} phase (now {state.phase.value})")


def _front_bonus(state: GameState, action: str) -> int:
    _require_phase(state, Phase.AWAIT_BONUS, action)
    if not state.pending_bonuses:
        raise PhaseError(f"{action} needs a pending bonus")
    return state.pending_bonuses[0]


def _pass_turn(state: GameState) -> GameState:
    nxt = state.next_player_index
    logger.debug(f"Turn passes from player {state.current_player_index + 1} to {nxt + 1}")
    state = replace(
        state,
        current_player_index=nxt,
        phase=Phase.AWAIT_ROLL,
        dice=None,
        turn_options=(),
        pending_bonuses=(),
        double_chain_count=0,
        last_roll_was_double=False,
    )
    return state.with_log(f"Turn passes to {player_label(state, nxt)}")


def finish_turn(state: GameState) -> GameState:
    """Close the current roll: go again after a double, otherwise hand over."""
    if state.last_roll_was_double:
        state = replace(
            state,
            phase=Phase.AWAIT_ROLL,
            dice=None,
            turn_options=(),
            double_chain_count=state.double_chain_count + 1,
            last_roll_was_double=False,
        )
        return state.with_log(
            f"{player_label(state, state.current_player_index)} rolled doubles and goes again"
        )
    return _pass_turn(state)


def _set_winner(state: GameState, player_index: int) -> GameState:
    logger.debug(f"Player {player_index + 1} wins")
    state = replace(
        state,
        phase=Phase.GAME_OVER,
        winner_index=player_index,
        dice=None,
        turn_options=(),
        pending_bonuses=(),
        last_roll_was_double=False,
    )
    return state.with_log(f"{player_label(state, player_index)} wins the game")


def _record_move(state: GameState, player_index: int, result: MoveResult) -> GameState:
    """Log a move and enqueue the bonuses it earned."""
    who = player_label(state, player_index)
    piece = state.players[player_index].piece(result.piece_id)
    state = state.with_log(
        f"{who} moved {piece_label(piece)} by {result.to_progress - result.from_progress}"
    )
    if result.captured:
        state = state.with_log(
            f"{who} captured {result.captured} pawn(s) and earned "
            f"{result.captured * config.CAPTURE_BONUS} bonus steps"
        )
    if result.reached_home:
        state = state.with_log(
            f"{who} got a pawn home and earned a {config.HOME_BONUS}-step bonus"
        )
    return replace(state, pending_bonuses=state.pending_bonuses + bonuses_for(result))


def _settle_bonuses(state: GameState) -> GameState:
    state = resolve_pending_bonuses(state)
    if state.pending_bonuses:
        return state
    return finish_turn(state)


def _most_advanced_track_piece(player: Player) -> Piece | None:
    # Pieces in the home lane are out of reach of the penalty.
    on_track = [pc for pc in player.pieces if pc.on_track]
    if not on_track:
        return None
    return max(on_track, key=lambda pc: (pc.progress, pc.slot))


# --- Public operations ---
def roll_dice(state: GameState, rng: RandomSource = random.random) -> GameState:
    """Roll two dice for the current player and enumerate their options."""
    _require_phase(state, Phase.AWAIT_ROLL, "Rolling dice")

    die_a, die_b = roll_pair(rng)
    idx = state.current_player_index
    who = player_label(state, idx)
    is_double = die_a == die_b
    logger.debug(f"Player {idx + 1} rolled {die_a}+{die_b}")

    state = replace(state, dice=(die_a, die_b), last_roll_was_double=is_double).with_log(
        f"{who} rolled {die_a} and {die_b}"
    )

    if is_double and state.double_chain_count == config.MAX_DOUBLE_CHAIN:
        state = state.with_log(f"{who} rolled three doubles in a row")
        player = state.players[idx]
        punished = _most_advanced_track_piece(player)
        if punished is not None:
            state = state.with_player(player.with_piece(punished.sent_to_nest()))
            state = state.with_log(f"{who} sent {piece_label(punished)} back to nest")
        else:
            state = state.with_log("No eligible piece on track for triple-doubles penalty")
        return _pass_turn(state)

    options = build_turn_options(state, idx, (die_a, die_b))
    if not options:
        return finish_turn(state.with_log(f"{who} has no legal move"))

    return replace(state, phase=Phase.AWAIT_ACTION, turn_options=options)


def apply_turn_option(state: GameState, option_id: str) -> GameState:
    """Play every move of the chosen option, then resolve earned bonuses.

    A move that fails re-validation raises and nothing of the option is kept.
    """
    _require_phase(state, Phase.AWAIT_ACTION, "Applying a turn option")

    option = next((opt for opt in state.turn_options if opt.option_id == option_id), None)
    if option is None:
        raise UnknownOptionError(f"Turn option {option_id} was not found")

    idx = state.current_player_index
    logger.debug(f"Player {idx + 1} chose {option.option_id}: {option.label}")
    state = replace(state, turn_options=())
    for mv in option.moves:
        state, result = execute_move(state, idx, mv.piece_id, mv.steps)
        state = _record_move(state, idx, result)
        if state.players[idx].has_won:
            return _set_winner(state, idx)

    return _settle_bonuses(state)


def get_bonus_choices(state: GameState) -> Tuple[BonusChoice, ...]:
    if state.phase != Phase.AWAIT_BONUS or not state.pending_bonuses:
        return ()
    return legal_bonus_choices(state, state.pending_bonuses[0])


def apply_bonus_move(state: GameState, piece_id: str) -> GameState:
    """Spend the front bonus on one of the currently legal pieces."""
    amount = _front_bonus(state, "Applying a bonus")

    idx = state.current_player_index
    if state.players[idx].piece(piece_id) is None:
        raise UnknownPieceError(f"Piece {piece_id} does not belong to player {idx + 1}")

    if not any(choice.piece_id == piece_id for choice in legal_bonus_choices(state, amount)):
        raise IllegalBonusError(f"Piece {piece_id} is not a legal target for bonus {amount}")

    state = replace(state, pending_bonuses=state.pending_bonuses[1:])
    state, result = execute_move(state, idx, piece_id, amount)
    state = _record_move(state, idx, result)
    if state.players[idx].has_won:
        return _set_winner(state, idx)

    return _settle_bonuses(state)


def skip_bonus(state: GameState) -> GameState:
    """Discard the front bonus without moving."""
    skipped = _front_bonus(state, "Skipping a bonus")
    state = replace(state, pending_bonuses=state.pending_bonuses[1:]).with_log(
        f"{player_label(state, state.current_player_index)} skipped bonus {skipped}"
    )
    return _settle_bonuses(state)


def get_piece_locations(state: GameState) -> Tuple[PieceLocation, ...]:
    """Zone and board indices of every piece, derived from progress alone."""
    out = []
    for player_index, player in enumerate(state.players):
        for pc in player.pieces:
            if pc.in_nest:
                zone, track_index, lane_index = Zone.NEST, None, None
            elif pc.on_track:
                zone, track_index, lane_index = Zone.TRACK, pc.track_index(player.start_index), None
            elif pc.in_home_lane:
                zone, track_index, lane_index = Zone.HOME_LANE, None, pc.progress - config.TRACK_LENGTH
            else:
                zone, track_index, lane_index = Zone.HOME, None, config.HOME_LENGTH
            out.append(
                PieceLocation(
                    player_index=player_index,
                    piece_id=pc.piece_id,
                    slot=pc.slot,
                    zone=zone,
                    track_index=track_index,
                    lane_index=lane_index,
                )
            )
    return tuple(out)
