"""Rock-Paper-Scissors match primitives shared by the arbiter and its clients."""

from .game import MatchEngine
from .models import Address, MatchConfig, MatchPhase, MatchState, Move, PlayerSlots, RoundOutcome, StateMessage
from .protocol import decode_move, encode_move, encode_state, format_state, parse_state_line
from .rules import compare, judge_round, parse_move, result_message

__all__ = [
    "Address",
    "MatchConfig",
    "MatchEngine",
    "MatchPhase",
    "MatchState",
    "Move",
    "PlayerSlots",
    "RoundOutcome",
    "StateMessage",
    "compare",
    "decode_move",
    "encode_move",
    "encode_state",
    "format_state",
    "judge_round",
    "parse_move",
    "parse_state_line",
    "result_message",
]
