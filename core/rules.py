from __future__ import annotations

from typing import Dict, Optional

from .models import Move, RoundOutcome

MOVE_TOKENS: Dict[str, Move] = {
    "r": Move.ROCK,
    "p": Move.PAPER,
    "s": Move.SCISSORS,
}

# Each move and the one it defeats.
BEATS: Dict[Move, Move] = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}

RESULT_PLAYER1 = "Player 1 wins!"
RESULT_PLAYER2 = "Player 2 wins!"
RESULT_DRAW = "It's a draw!"


def parse_move(token: str) -> Optional[Move]:
    """Map a one-character token (``r``/``p``/``s``, any case) to a move."""
    if len(token) != 1 or not token.isascii():
        return None
    return MOVE_TOKENS.get(token.lower())


def compare(a: Move, b: Move) -> int:
    """Return 1 if ``a`` beats ``b``, -1 if ``b`` beats ``a``, 0 on a tie."""
    if a == b:
        return 0
    if BEATS[a] == b:
        return 1
    return -1


def judge_round(player1: Move, player2: Move) -> RoundOutcome:
    cmp = compare(player1, player2)
    if cmp > 0:
        return RoundOutcome.PLAYER1_WINS
    if cmp < 0:
        return RoundOutcome.PLAYER2_WINS
    return RoundOutcome.TIE


def result_message(player1_score: int, player2_score: int) -> str:
    if player1_score > player2_score:
        return RESULT_PLAYER1
    if player2_score > player1_score:
        return RESULT_PLAYER2
    return RESULT_DRAW
