from __future__ import annotations

from typing import Union

from loguru import logger

from .board import Board, is_safe_track_index, track_index_for_progress
from .config import config
from .errors import IllegalMoveError, UnknownPieceError
from .piece import Piece
from .state import GameState
from .types import MoveCheck, MoveRejection, MoveResult

MoveOutcome = Union[MoveCheck, MoveRejection]


def _valid_steps(steps: object) -> bool:
    return isinstance(steps, int) and not isinstance(steps, bool) and steps > 0


def can_move(
    state: GameState,
    player_index: int,
    piece: Piece,
    steps: int,
    board: Board | None = None,
) -> MoveOutcome:
    """Decide whether ``piece`` may move ``steps`` and where it would land.

    Returns a ``MoveCheck`` for a legal move or the ``MoveRejection`` of the
    first rule that fails. ``board`` may be passed in to reuse occupancy
    counts for the same state.
    """
    if not _valid_steps(steps):
        return MoveRejection.INVALID_STEPS

    if piece.finished:
        return MoveRejection.ALREADY_FINISHED

    board = board if board is not None else Board(state.players)
    player = state.players[player_index]

    if piece.in_nest:
        if steps != config.EXIT_ROLL:
            return MoveRejection.NEED_FIVE_TO_EXIT
        start = player.start_index
        owners = board.barrier_owners(start)
        if owners and player_index not in owners:
            return MoveRejection.START_BLOCKED_BY_BARRIER
        if board.count_at(player_index, start) >= config.STACK_LIMIT:
            return MoveRejection.START_HAS_OWN_BARRIER
        return MoveCheck(destination_progress=0, destination_track_index=start, from_nest=True)

    destination = piece.progress + steps
    if destination > config.MAX_PROGRESS:
        return MoveRejection.NEEDS_EXACT_ROLL

    # Barriers block passage as well as landing; the home lane is private.
    for traversed in range(piece.progress + 1, destination + 1):
        if traversed >= config.TRACK_LENGTH:
            break
        if board.has_barrier(track_index_for_progress(player.start_index, traversed)):
            return MoveRejection.BLOCKED_BY_BARRIER

    if destination < config.TRACK_LENGTH:
        dest_index = track_index_for_progress(player.start_index, destination)
        own = board.count_at(player_index, dest_index, exclude_piece_id=piece.piece_id)
        if own >= config.STACK_LIMIT:
            return MoveRejection.CANNOT_STACK_MORE_THAN_TWO
        return MoveCheck(
            destination_progress=destination,
            destination_track_index=dest_index,
            from_nest=False,
        )

    return MoveCheck(
        destination_progress=destination, destination_track_index=None, from_nest=False
    )


def execute_move(
    state: GameState, player_index: int, piece_id: str, steps: int
) -> tuple[GameState, MoveResult]:
    """Apply one move to a copy of ``state`` and resolve captures.

    The move is re-validated against the given state; a stale option never
    slips through because the board may have changed since it was built.
    """
    player = state.players[player_index]
    piece = player.piece(piece_id)
    if piece is None:
        raise UnknownPieceError(f"Piece {piece_id} does not belong to player {player_index + 1}")

    board = Board(state.players)
    outcome = can_move(state, player_index, piece, steps, board=board)
    if isinstance(outcome, MoveRejection):
        raise IllegalMoveError(
            f"Move failed for piece {piece_id} by {steps}: {outcome.value}", reason=outcome
        )

    new_state = state.with_player(player.with_piece(piece.moved_to(outcome.destination_progress)))

    captured = 0
    dest_index = outcome.destination_track_index
    if dest_index is not None and not is_safe_track_index(dest_index):
        for victim_index, victim in board.pieces_at(dest_index, exclude_player=player_index):
            victim_player = new_state.players[victim_index]
            new_state = new_state.with_player(victim_player.with_piece(victim.sent_to_nest()))
            captured += 1
        if captured:
            logger.debug(f"{piece_id} captured {captured} piece(s) on track square {dest_index}")

    return new_state, MoveResult(
        piece_id=piece_id,
        piece_slot=piece.slot,
        from_progress=piece.progress,
        to_progress=outcome.destination_progress,
        captured=captured,
        reached_home=outcome.destination_progress == config.MAX_PROGRESS,
    )


def legal_destination(
    state: GameState, player_index: int, piece: Piece, steps: int, board: Board | None = None
) -> MoveCheck | None:
    """Convenience wrapper: the ``MoveCheck`` for a legal move, else None."""
    outcome = can_move(state, player_index, piece, steps, board=board)
    return None if isinstance(outcome, MoveRejection) else outcome
