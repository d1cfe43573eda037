from __future__ import annotations

import re
from typing import Optional

from .models import Move, StateMessage
from .rules import parse_move

# Wire format shared by the arbiter and its clients. Inbound datagrams carry a
# single move character; outbound datagrams carry one human-readable line.

STATE_TEMPLATE = (
    "Player 1: {move1}, Player 2: {move2}, "
    "SCORES => Player 1: {score1}, Player 2: {score2} | Time Left: {time_left} sec"
)
RESULT_SEPARATOR = " | "

# Unicode White_Space characters. str.strip() with no argument also drops the
# U+001C..U+001F separators, which are not whitespace on the wire.
WHITE_SPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

_MOVE_NAMES = "|".join(move.value for move in Move)
_STATE_RE = re.compile(
    rf"^Player 1: (?P<move1>{_MOVE_NAMES}), Player 2: (?P<move2>{_MOVE_NAMES}), "
    r"SCORES => Player 1: (?P<score1>\d+), Player 2: (?P<score2>\d+) "
    r"\| Time Left: (?P<time_left>\d+) sec"
    r"(?: \| (?P<result>.+))?$"
)


def decode_move(payload: bytes) -> Optional[Move]:
    """Interpret a datagram as a move selection.

    Invalid UTF-8 is replaced rather than rejected, surrounding whitespace is
    ignored and only the first character counts, so ``b" rock\\n"`` selects
    Rock. Returns ``None`` for anything that does not start with a move token.
    """
    text = payload.decode("utf-8", errors="replace").strip(WHITE_SPACE)
    if not text:
        return None
    return parse_move(text[0])


def encode_move(move: Move) -> bytes:
    return move.value[0].lower().encode("ascii")


def format_state(
    player1_move: Move,
    player2_move: Move,
    player1_score: int,
    player2_score: int,
    time_left: int,
    result: Optional[str] = None,
) -> str:
    line = STATE_TEMPLATE.format(
        move1=player1_move,
        move2=player2_move,
        score1=player1_score,
        score2=player2_score,
        time_left=time_left,
    )
    if result is not None:
        line += RESULT_SEPARATOR + result
    return line


def encode_state(message: StateMessage) -> bytes:
    return format_state(
        message.player1_move,
        message.player2_move,
        message.player1_score,
        message.player2_score,
        message.time_left,
        message.result,
    ).encode("utf-8")


def parse_state_line(raw: bytes | str) -> StateMessage:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    match = _STATE_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Unrecognised state line: {text!r}")
    return StateMessage(
        player1_move=Move(match["move1"]),
        player2_move=Move(match["move2"]),
        player1_score=int(match["score1"]),
        player2_score=int(match["score2"]),
        time_left=int(match["time_left"]),
        result=match["result"],
    )
