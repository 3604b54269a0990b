import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class Config:
    # --- Board topology ---
    TRACK_LENGTH: int = 68  # shared loop, absolute indices 0..67
    HOME_LENGTH: int = 7  # private lane per color

    # Absolute start squares in seat order (red, yellow, blue, green)
    START_INDICES: tuple[int, ...] = (0, 17, 34, 51)
    SAFE_INDICES: frozenset[int] = field(
        default_factory=lambda: frozenset(
            {0, 8, 13, 17, 25, 30, 34, 42, 47, 51, 59, 64}
        )
    )

    # --- Rules (fixed, not read from env) ---
    NEST: int = -1
    EXIT_ROLL: int = 5
    STACK_LIMIT: int = 2  # a barrier caps same-owner pieces per square
    CAPTURE_BONUS: int = 20
    HOME_BONUS: int = 10
    MAX_DOUBLE_CHAIN: int = 2  # a double on top of this chain is punished
    LOG_LIMIT: int = 120

    MIN_PLAYERS: int = 2
    MAX_PLAYERS: int = 4
    MIN_PIECES: int = 1
    MAX_PIECES: int = 4

    # Defaults for new games
    NUM_PLAYERS: int = int(os.getenv("NUM_PLAYERS", 4))
    PIECES_PER_PLAYER: int = int(os.getenv("PIECES_PER_PLAYER", 4))

    # Derived (populated in __post_init__ due to slots)
    MAX_PROGRESS: int = 0

    def __post_init__(self):
        # 0..67 track, 68..74 home lane, 75 finished
        self.MAX_PROGRESS = self.TRACK_LENGTH + self.HOME_LENGTH

        if not self.MIN_PLAYERS <= self.NUM_PLAYERS <= self.MAX_PLAYERS:
            raise ValueError("NUM_PLAYERS must be between 2 and 4")
        if not self.MIN_PIECES <= self.PIECES_PER_PLAYER <= self.MAX_PIECES:
            raise ValueError("PIECES_PER_PLAYER must be between 1 and 4")


config = Config()
