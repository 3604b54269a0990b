from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from .config import config
from .errors import SetupError
from .piece import Piece
from .player import Player
from .types import Color, OptionKind, Phase, PlannedMove, TurnOption


@dataclass(frozen=True, slots=True)
class GameState:
    """Root aggregate of a game. Frozen: transitions build new values."""

    player_count: int
    pieces_per_player: int
    players: Tuple[Player, ...]
    current_player_index: int = 0
    phase: Phase = Phase.AWAIT_ROLL
    dice: Optional[Tuple[int, int]] = None
    turn_options: Tuple[TurnOption, ...] = ()
    pending_bonuses: Tuple[int, ...] = ()
    double_chain_count: int = 0
    last_roll_was_double: bool = False
    winner_index: Optional[int] = None
    log: Tuple[str, ...] = ()

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def next_player_index(self) -> int:
        return (self.current_player_index + 1) % self.player_count

    def with_player(self, player: Player) -> "GameState":
        players = tuple(player if p.index == player.index else p for p in self.players)
        return replace(self, players=players)

    def with_log(self, *messages: str) -> "GameState":
        """Append messages, keeping only the newest LOG_LIMIT entries."""
        return replace(self, log=(self.log + messages)[-config.LOG_LIMIT :])

    # --- Serialisation ---
    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_count": self.player_count,
            "pieces_per_player": self.pieces_per_player,
            "players": [
                {
                    "index": pl.index,
                    "color": pl.color.label,
                    "start_index": pl.start_index,
                    "pieces": [
                        {"piece_id": pc.piece_id, "slot": pc.slot, "progress": pc.progress}
                        for pc in pl.pieces
                    ],
                }
                for pl in self.players
            ],
            "current_player_index": self.current_player_index,
            "phase": self.phase.value,
            "dice": list(self.dice) if self.dice is not None else None,
            "turn_options": [
                {
                    "option_id": opt.option_id,
                    "kind": opt.kind.value,
                    "moves": [
                        {"piece_id": mv.piece_id, "steps": mv.steps} for mv in opt.moves
                    ],
                    "label": opt.label,
                }
                for opt in self.turn_options
            ],
            "pending_bonuses": list(self.pending_bonuses),
            "double_chain_count": self.double_chain_count,
            "last_roll_was_double": self.last_roll_was_double,
            "winner_index": self.winner_index,
            "log": list(self.log),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        try:
            players = tuple(
                Player(
                    index=int(pl["index"]),
                    color=Color[str(pl["color"]).upper()],
                    start_index=int(pl["start_index"]),
                    pieces=tuple(
                        Piece(
                            piece_id=str(pc["piece_id"]),
                            slot=int(pc["slot"]),
                            progress=int(pc["progress"]),
                        )
                        for pc in pl["pieces"]
                    ),
                )
                for pl in data["players"]
            )
            options = tuple(
                TurnOption(
                    option_id=str(opt["option_id"]),
                    kind=OptionKind(opt["kind"]),
                    moves=tuple(
                        PlannedMove(piece_id=str(mv["piece_id"]), steps=int(mv["steps"]))
                        for mv in opt["moves"]
                    ),
                    label=str(opt["label"]),
                )
                for opt in data.get("turn_options", [])
            )
            dice = data.get("dice")
            state = cls(
                player_count=int(data["player_count"]),
                pieces_per_player=int(data["pieces_per_player"]),
                players=players,
                current_player_index=int(data.get("current_player_index", 0)),
                phase=Phase(data.get("phase", Phase.AWAIT_ROLL.value)),
                dice=(int(dice[0]), int(dice[1])) if dice is not None else None,
                turn_options=options,
                pending_bonuses=tuple(int(b) for b in data.get("pending_bonuses", [])),
                double_chain_count=int(data.get("double_chain_count", 0)),
                last_roll_was_double=bool(data.get("last_roll_was_double", False)),
                winner_index=data.get("winner_index"),
                log=tuple(str(line) for line in data.get("log", [])),
            )
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise SetupError(f"Malformed game state: {e}") from e
        validate_state(state)
        return state


def validate_counts(player_count: Any, pieces_per_player: Any) -> None:
    # bool is an int subclass but never a count
    if (
        not isinstance(player_count, int)
        or isinstance(player_count, bool)
        or not config.MIN_PLAYERS <= player_count <= config.MAX_PLAYERS
    ):
        raise SetupError("player_count must be an integer between 2 and 4")
    if (
        not isinstance(pieces_per_player, int)
        or isinstance(pieces_per_player, bool)
        or not config.MIN_PIECES <= pieces_per_player <= config.MAX_PIECES
    ):
        raise SetupError("pieces_per_player must be an integer between 1 and 4")


def validate_state(state: GameState) -> None:
    """Check counts, ranges and phase invariants of a state built from outside data."""
    validate_counts(state.player_count, state.pieces_per_player)
    if len(state.players) != state.player_count:
        raise SetupError("player_count does not match the number of players")
    if not 0 <= state.current_player_index < state.player_count:
        raise SetupError("current_player_index out of range")

    seen_ids: set[str] = set()
    for seat, player in enumerate(state.players):
        if player.index != seat:
            raise SetupError(f"Player at seat {seat + 1} has index {player.index}")
        if len(player.pieces) != state.pieces_per_player:
            raise SetupError(f"Player {player.index + 1} has the wrong number of pieces")
        for pc in player.pieces:
            if pc.piece_id in seen_ids:
                raise SetupError(f"Duplicate piece id {pc.piece_id}")
            seen_ids.add(pc.piece_id)
            if not config.NEST <= pc.progress <= config.MAX_PROGRESS:
                raise SetupError(f"{pc.piece_id} has progress {pc.progress} out of range")

    if state.dice is not None and not all(1 <= d <= 6 for d in state.dice):
        raise SetupError(f"Dice {state.dice} out of range")
    if state.pending_bonuses and state.phase != Phase.AWAIT_BONUS:
        raise SetupError("Pending bonuses outside await_bonus phase")
    if state.phase == Phase.AWAIT_BONUS and not state.pending_bonuses:
        raise SetupError("await_bonus phase without a pending bonus")
    if any(b not in (config.CAPTURE_BONUS, config.HOME_BONUS) for b in state.pending_bonuses):
        raise SetupError(f"Unknown bonus amount in {state.pending_bonuses}")
    if state.turn_options and state.phase != Phase.AWAIT_ACTION:
        raise SetupError("Turn options outside await_action phase")
    if state.phase == Phase.AWAIT_ACTION and not state.turn_options:
        raise SetupError("await_action phase without turn options")
    if state.winner_index is not None:
        if state.phase != Phase.GAME_OVER:
            raise SetupError("A winner is recorded but the game is not over")
        if not 0 <= state.winner_index < state.player_count:
            raise SetupError("winner_index out of range")
        if not state.players[state.winner_index].has_won:
            raise SetupError(f"Player {state.winner_index + 1} has not finished every piece")
    elif state.phase == Phase.GAME_OVER:
        raise SetupError("game_over phase without a winner")
