from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from .config import config
from .piece import Piece
from .types import Color


def piece_id_for(player_index: int, slot: int) -> str:
    return f"p{player_index}-{slot}"


@dataclass(frozen=True, slots=True)
class Player:
    index: int
    color: Color
    start_index: int
    pieces: Tuple[Piece, ...]

    @classmethod
    def create(cls, index: int, pieces_per_player: int) -> "Player":
        color = Color(index)
        pieces = tuple(
            Piece(piece_id=piece_id_for(index, slot), slot=slot)
            for slot in range(pieces_per_player)
        )
        return cls(
            index=index,
            color=color,
            start_index=config.START_INDICES[int(color)],
            pieces=pieces,
        )

    @property
    def has_won(self) -> bool:
        return all(p.finished for p in self.pieces)

    def piece(self, piece_id: str) -> Piece | None:
        return next((p for p in self.pieces if p.piece_id == piece_id), None)

    def track_positions(self) -> list[int]:
        """Absolute track indices of the pieces currently on the shared track."""
        out: list[int] = []
        for p in self.pieces:
            idx = p.track_index(self.start_index)
            if idx is not None:
                out.append(idx)
        return out

    def with_piece(self, piece: Piece) -> "Player":
        pieces = tuple(piece if p.piece_id == piece.piece_id else p for p in self.pieces)
        return replace(self, pieces=pieces)
