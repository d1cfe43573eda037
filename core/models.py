from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

Address = Tuple[str, int]


class Move(str, Enum):
    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"

    def __str__(self) -> str:
        return self.value


class RoundOutcome(str, Enum):
    PLAYER1_WINS = "PLAYER1_WINS"
    PLAYER2_WINS = "PLAYER2_WINS"
    TIE = "TIE"


class MatchPhase(str, Enum):
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


@dataclass
class MatchConfig:
    host: str = "0.0.0.0"
    port: int = 5000
    tick_interval: float = 0.0005  # seconds
    match_duration: float = 20.0  # seconds
    recv_bytes: int = 128
    matchmaking_timeout: Optional[float] = None
    idle_sleep: float = 0.0

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if self.match_duration <= 0:
            raise ValueError("match_duration must be positive")
        if self.recv_bytes <= 0:
            raise ValueError("recv_bytes must be positive")
        if self.matchmaking_timeout is not None and self.matchmaking_timeout < 0:
            raise ValueError("matchmaking_timeout cannot be negative")
        if self.idle_sleep < 0:
            raise ValueError("idle_sleep cannot be negative")


@dataclass
class PlayerSlots:
    """The two player identities, each bound to the address that claimed it."""

    player1: Optional[Address] = None
    player2: Optional[Address] = None

    def claim(self, addr: Address) -> Optional[int]:
        """Bind ``addr`` to the first free slot.

        Returns the slot number (1 or 2) that was claimed, or ``None`` when the
        address already holds a slot or both slots are taken.
        """
        if self.player1 is None:
            self.player1 = addr
            return 1
        if self.player2 is None and addr != self.player1:
            self.player2 = addr
            return 2
        return None

    def is_full(self) -> bool:
        return self.player1 is not None and self.player2 is not None

    def slot_of(self, addr: Address) -> Optional[int]:
        if addr == self.player1:
            return 1
        if addr == self.player2:
            return 2
        return None

    def addresses(self) -> Tuple[Address, Address]:
        if self.player1 is None or self.player2 is None:
            raise RuntimeError("Both player slots must be claimed")
        return self.player1, self.player2


@dataclass
class MatchState:
    started_at: float
    last_tick_at: float
    player1_move: Move = Move.ROCK
    player2_move: Move = Move.ROCK
    player1_score: int = 0
    player2_score: int = 0
    ticks: int = 0
    phase: MatchPhase = MatchPhase.RUNNING


@dataclass
class StateMessage:
    player1_move: Move
    player2_move: Move
    player1_score: int
    player2_score: int
    time_left: int
    result: Optional[str] = field(default=None)

    @property
    def is_final(self) -> bool:
        return self.result is not None
