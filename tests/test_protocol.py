import pytest

from core.models import Move, StateMessage
from core.protocol import decode_move, encode_move, encode_state, format_state, parse_state_line


@pytest.mark.parametrize(
    "payload, expected",
    [
        (b"r", Move.ROCK),
        (b"P", Move.PAPER),
        (b"  s\n", Move.SCISSORS),
        (b"rock", Move.ROCK),
        (b"Scissors please", Move.SCISSORS),
        (b"x", None),
        (b"", None),
        (b"   \t\n", None),
        (b"\xffr", None),
        (b"\x1cr", None),
        (b"\x1f s", None),
        ("\u00a0p".encode("utf-8"), Move.PAPER),
        ("\u3000s\u2028".encode("utf-8"), Move.SCISSORS),
    ],
)
def test_decode_move_uses_first_non_whitespace_character(payload, expected):
    assert decode_move(payload) is expected


def test_decode_move_tolerates_invalid_utf8_after_the_token():
    assert decode_move(b"p\xff\xfe") is Move.PAPER


def test_encode_move_emits_lowercase_token():
    assert encode_move(Move.ROCK) == b"r"
    assert encode_move(Move.PAPER) == b"p"
    assert encode_move(Move.SCISSORS) == b"s"
    for move in Move:
        assert decode_move(encode_move(move)) is move


def test_format_state_matches_wire_template():
    line = format_state(Move.ROCK, Move.SCISSORS, 12, 3, 17)
    assert line == "Player 1: Rock, Player 2: Scissors, SCORES => Player 1: 12, Player 2: 3 | Time Left: 17 sec"


def test_format_state_appends_result_only_when_given():
    line = format_state(Move.PAPER, Move.PAPER, 0, 0, 0, "It's a draw!")
    assert line == (
        "Player 1: Paper, Player 2: Paper, SCORES => Player 1: 0, Player 2: 0 | Time Left: 0 sec | It's a draw!"
    )


def test_encode_state_is_utf8_line():
    message = StateMessage(Move.SCISSORS, Move.ROCK, 1, 5, 9)
    assert encode_state(message) == (
        b"Player 1: Scissors, Player 2: Rock, SCORES => Player 1: 1, Player 2: 5 | Time Left: 9 sec"
    )


def test_parse_state_line_reads_intermediate_and_final_lines():
    message = parse_state_line(
        b"Player 1: Paper, Player 2: Rock, SCORES => Player 1: 40, Player 2: 2 | Time Left: 11 sec"
    )
    assert message == StateMessage(Move.PAPER, Move.ROCK, 40, 2, 11)
    assert not message.is_final

    final = parse_state_line(
        "Player 1: Rock, Player 2: Paper, SCORES => Player 1: 3, Player 2: 8 | Time Left: 0 sec | Player 2 wins!"
    )
    assert final.is_final
    assert final.result == "Player 2 wins!"
    assert final.player2_score == 8


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"hello",
        b"Player 1: Lizard, Player 2: Rock, SCORES => Player 1: 0, Player 2: 0 | Time Left: 1 sec",
        b"Player 1: Rock, Player 2: Rock, SCORES => Player 1: -1, Player 2: 0 | Time Left: 1 sec",
    ],
)
def test_parse_state_line_rejects_other_text(raw):
    with pytest.raises(ValueError, match="Unrecognised state line"):
        parse_state_line(raw)
