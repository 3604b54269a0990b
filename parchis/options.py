from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

from loguru import logger

from .board import Board
from .describe import piece_label
from .errors import GameError
from .rules import execute_move, legal_destination
from .state import GameState
from .types import MoveResult, OptionKind, PlannedMove, TurnOption


def _simulate(
    state: GameState, player_index: int, piece_id: str, steps: int
) -> tuple[GameState, MoveResult] | None:
    """Play a move on a hypothetical branch; None when it is illegal.

    States are frozen, so each branch is an independent value and nothing
    leaks back into ``state``.
    """
    try:
        return execute_move(state, player_index, piece_id, steps)
    except GameError:
        return None


def _single_moves(
    state: GameState, player_index: int, steps: int
) -> List[Tuple[str, str]]:
    """(piece_id, label) for every piece that can legally move ``steps``."""
    board = Board(state.players)
    return [
        (pc.piece_id, piece_label(pc))
        for pc in state.players[player_index].pieces
        if legal_destination(state, player_index, pc, steps, board=board) is not None
    ]


def _split_options(
    state: GameState, player_index: int, first: int, second: int
) -> List[TurnOption]:
    options: List[TurnOption] = []
    for first_id, first_label in _single_moves(state, player_index, first):
        branch = _simulate(state, player_index, first_id, first)
        if branch is None:
            continue
        branch_state, _ = branch
        for second_id, second_label in _single_moves(branch_state, player_index, second):
            options.append(
                TurnOption(
                    option_id="",
                    kind=OptionKind.SPLIT,
                    moves=(PlannedMove(first_id, first), PlannedMove(second_id, second)),
                    label=f"{first_label} by {first}, then {second_label} by {second}",
                )
            )
    return options


def build_turn_options(
    state: GameState, player_index: int, dice: Sequence[int]
) -> Tuple[TurnOption, ...]:
    """Enumerate the distinct move choices a dice pair offers this turn.

    Order: the combined total per piece, then both split orderings (one on a
    double), then single-die moves only when nothing else is legal.
    Duplicates are dropped by signature and ids are assigned in discovery
    order (``opt-1``, ``opt-2``, ...). An empty result means no legal move.
    """
    die_a, die_b = dice
    options: List[TurnOption] = []

    combined = die_a + die_b
    for piece_id, label in _single_moves(state, player_index, combined):
        options.append(
            TurnOption(
                option_id="",
                kind=OptionKind.COMBINED,
                moves=(PlannedMove(piece_id, combined),),
                label=f"{label} by {combined} (dice total)",
            )
        )

    orders = [(die_a, die_b)] if die_a == die_b else [(die_a, die_b), (die_b, die_a)]
    for first, second in orders:
        options.extend(_split_options(state, player_index, first, second))

    if not options:
        for steps in dict.fromkeys((die_a, die_b)):
            for piece_id, label in _single_moves(state, player_index, steps):
                options.append(
                    TurnOption(
                        option_id="",
                        kind=OptionKind.SINGLE,
                        moves=(PlannedMove(piece_id, steps),),
                        label=f"{label} by {steps} (fallback single die)",
                    )
                )

    seen: set[str] = set()
    deduped: List[TurnOption] = []
    for opt in options:
        if opt.signature in seen:
            continue
        seen.add(opt.signature)
        deduped.append(replace(opt, option_id=f"opt-{len(deduped) + 1}"))

    logger.debug(
        f"Player {player_index + 1} dice {die_a}+{die_b}: {len(deduped)} option(s)"
    )
    return tuple(deduped)
