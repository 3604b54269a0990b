from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .config import config
from .piece import Piece
from .player import Player


def track_index_for_progress(start_index: int, progress: int) -> int | None:
    """Map a player's relative progress to an absolute track index (0..67)."""
    if not 0 <= progress < config.TRACK_LENGTH:
        return None
    return (start_index + progress) % config.TRACK_LENGTH


def is_safe_track_index(track_index: int) -> bool:
    return track_index in config.SAFE_INDICES


@dataclass(slots=True)
class Board:
    """Occupancy view over a set of players (no rule logic).

    The players are immutable, so the per-square counts are built once.
    """

    players: Sequence[Player]
    _counts: np.ndarray = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        # rows follow player order, columns are absolute track indices
        self._counts = np.zeros((len(self.players), config.TRACK_LENGTH), dtype=np.int8)
        for row, player in enumerate(self.players):
            for abs_pos in player.track_positions():
                self._counts[row, abs_pos] += 1

    def count_at(
        self, player_index: int, track_index: int, *, exclude_piece_id: str | None = None
    ) -> int:
        count = int(self._counts[player_index, track_index])
        if exclude_piece_id is not None:
            player = self.players[player_index]
            moving = player.piece(exclude_piece_id)
            if moving is not None and moving.track_index(player.start_index) == track_index:
                count -= 1
        return count

    def barrier_owners(self, track_index: int) -> set[int]:
        column = self._counts[:, track_index]
        return {int(i) for i in np.flatnonzero(column >= config.STACK_LIMIT)}

    def has_barrier(self, track_index: int) -> bool:
        return bool((self._counts[:, track_index] >= config.STACK_LIMIT).any())

    def pieces_at(
        self, track_index: int, *, exclude_player: int | None = None
    ) -> list[tuple[int, Piece]]:
        out: list[tuple[int, Piece]] = []
        for idx, player in enumerate(self.players):
            if idx == exclude_player or not self._counts[idx, track_index]:
                continue
            for pc in player.pieces:
                if pc.track_index(player.start_index) == track_index:
                    out.append((idx, pc))
        return out

    def occupancy(self) -> np.ndarray:
        """Return a copy of the (players, TRACK_LENGTH) count matrix."""
        return self._counts.copy()
