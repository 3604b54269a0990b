from __future__ import annotations

from dataclasses import dataclass, replace

from .config import config


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece model. Holds state only.

    ``progress`` is the single source of truth for location: -1 = nest,
    0..67 = shared track relative to the owner's start, 68..74 = home lane,
    75 = finished. Rule logic lives in ``parchis.rules``.
    """

    piece_id: str  # "p{player}-{slot}"
    slot: int
    progress: int = config.NEST

    @property
    def in_nest(self) -> bool:
        return self.progress == config.NEST

    @property
    def on_track(self) -> bool:
        return 0 <= self.progress < config.TRACK_LENGTH

    @property
    def in_home_lane(self) -> bool:
        return config.TRACK_LENGTH <= self.progress < config.MAX_PROGRESS

    @property
    def finished(self) -> bool:
        return self.progress == config.MAX_PROGRESS

    def track_index(self, start_index: int) -> int | None:
        """Absolute track index for this piece, None off the shared track."""
        if not self.on_track:
            return None
        return (start_index + self.progress) % config.TRACK_LENGTH

    def moved_to(self, progress: int) -> "Piece":
        return replace(self, progress=progress)

    def sent_to_nest(self) -> "Piece":
        return replace(self, progress=config.NEST)
