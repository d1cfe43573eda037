from __future__ import annotations

import math
from typing import Optional

from .models import MatchConfig, MatchPhase, MatchState, Move, RoundOutcome, StateMessage
from .rules import judge_round, result_message

# MatchEngine keeps the whole match in memory. No networking lives here, only
# the clock arithmetic, scoring and the state machine. Every method takes the
# current monotonic time so callers (and tests) own the clock.


class MatchEngine:
    """Timed two-player Rock-Paper-Scissors match."""

    def __init__(self, config: MatchConfig, now: float) -> None:
        self.config = config
        self.state = MatchState(started_at=now, last_tick_at=now)

    # Clock -----------------------------------------------------------

    def elapsed(self, now: float) -> float:
        return max(0.0, now - self.state.started_at)

    def time_left(self, elapsed: float) -> int:
        return max(0, math.floor(self.config.match_duration - elapsed))

    def is_expired(self, elapsed: float) -> bool:
        return elapsed >= self.config.match_duration

    def is_finished(self) -> bool:
        return self.state.phase is MatchPhase.FINISHED

    def tick_due(self, now: float) -> bool:
        return now - self.state.last_tick_at >= self.config.tick_interval

    # Moves -----------------------------------------------------------

    def set_move(self, slot: int, move: Move) -> None:
        self._require_running()
        if slot == 1:
            self.state.player1_move = move
        elif slot == 2:
            self.state.player2_move = move
        else:
            raise ValueError(f"Unknown player slot: {slot}")

    def move_of(self, slot: int) -> Move:
        if slot == 1:
            return self.state.player1_move
        if slot == 2:
            return self.state.player2_move
        raise ValueError(f"Unknown player slot: {slot}")

    # Scoring ---------------------------------------------------------

    def tick(self, now: float) -> RoundOutcome:
        """Score the current pair of moves and restart the tick timer."""
        self._require_running()
        self.state.last_tick_at = now
        self.state.ticks += 1
        outcome = judge_round(self.state.player1_move, self.state.player2_move)
        if outcome is RoundOutcome.PLAYER1_WINS:
            self.state.player1_score += 1
        elif outcome is RoundOutcome.PLAYER2_WINS:
            self.state.player2_score += 1
        return outcome

    def finish(self) -> str:
        self._require_running()
        self.state.phase = MatchPhase.FINISHED
        return self.result()

    def result(self) -> str:
        return result_message(self.state.player1_score, self.state.player2_score)

    # Payloads --------------------------------------------------------

    def snapshot(self, elapsed: float, result: Optional[str] = None) -> StateMessage:
        # The terminal broadcast always reports zero seconds left.
        time_left = 0 if result is not None else self.time_left(elapsed)
        return StateMessage(
            player1_move=self.state.player1_move,
            player2_move=self.state.player2_move,
            player1_score=self.state.player1_score,
            player2_score=self.state.player2_score,
            time_left=time_left,
            result=result,
        )

    def _require_running(self) -> None:
        if self.state.phase is not MatchPhase.RUNNING:
            raise RuntimeError("Match already finished")
