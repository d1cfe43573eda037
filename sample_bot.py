#!/usr/bin/env python3
"""
Starter bot template for the Rock-Paper-Scissors arbiter.

Usage:
    python -m arbiter                      # in another terminal
    python sample_bot.py --slot 1
    python sample_bot.py --slot 2

This script shows the core loop:
  * send a hello datagram until the arbiter starts broadcasting
  * decode every state line the arbiter sends
  * pick a move from the decoded state
  * send the move only when it changes (the arbiter keeps the last one)

Slots are handed out in connection order, so start the bots in the same
order as their ``--slot`` values.

Replace the `choose_move` function with your custom strategy.
"""

from __future__ import annotations

import argparse
import logging
import socket
from dataclasses import dataclass
from typing import Optional

from core.models import Move, StateMessage
from core.protocol import encode_move, parse_state_line
from core.rules import BEATS

LOGGER = logging.getLogger("sample_bot")
STREAM_HANDLER = logging.StreamHandler()
STREAM_HANDLER.setFormatter(logging.Formatter("%(message)s"))
if not LOGGER.handlers:
    LOGGER.addHandler(STREAM_HANDLER)
LOGGER.propagate = False

HELLO = b"hello"


@dataclass
class MoveContext:
    slot: int
    my_move: Move
    opponent_move: Move
    my_score: int
    opponent_score: int
    time_left: int  # seconds


def context_for(slot: int, message: StateMessage) -> MoveContext:
    if slot == 1:
        return MoveContext(
            slot=slot,
            my_move=message.player1_move,
            opponent_move=message.player2_move,
            my_score=message.player1_score,
            opponent_score=message.player2_score,
            time_left=message.time_left,
        )
    return MoveContext(
        slot=slot,
        my_move=message.player2_move,
        opponent_move=message.player1_move,
        my_score=message.player2_score,
        opponent_score=message.player1_score,
        time_left=message.time_left,
    )


def choose_move(ctx: MoveContext) -> Move:
    """
    Counter whatever the opponent is currently showing.

    The opponent sees our move too, so two of these bots chase each other
    around the cycle. Replace this function with your custom strategy!
    """
    for move, beaten in BEATS.items():
        if beaten == ctx.opponent_move:
            return move
    return ctx.my_move


class SampleBot:
    def __init__(self, slot: int, host: str, port: int, timeout: float = 1.0) -> None:
        self.slot = slot
        self.server = (host, port)
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.settimeout(timeout)
        self.last_sent: Optional[Move] = None
        self.started = False

    def run(self) -> Optional[str]:
        self.sock.sendto(HELLO, self.server)
        LOGGER.info("Sent hello to %s:%s as player %s", self.server[0], self.server[1], self.slot)
        try:
            while True:
                try:
                    raw, _ = self.sock.recvfrom(1024)
                except socket.timeout:
                    if not self.started:
                        # Hello may have been lost or sent before the arbiter was up.
                        self.sock.sendto(HELLO, self.server)
                    continue
                result = self.handle(raw)
                if result is not None:
                    return result
        finally:
            self.sock.close()

    def handle(self, raw: bytes) -> Optional[str]:
        try:
            message = parse_state_line(raw)
        except ValueError:
            LOGGER.debug("Ignoring unexpected datagram: %r", raw)
            return None
        if not self.started:
            self.started = True
            LOGGER.info("Match started")
        ctx = context_for(self.slot, message)
        if message.is_final:
            LOGGER.info("Final score %s-%s | %s", ctx.my_score, ctx.opponent_score, message.result)
            return message.result
        move = choose_move(ctx)
        if move != self.last_sent:
            self.sock.sendto(encode_move(move), self.server)
            self.last_sent = move
            LOGGER.info("[%ss left] %s vs %s -> playing %s", ctx.time_left, ctx.my_move, ctx.opponent_move, move)
        return None


def main() -> None:
    parser = argparse.ArgumentParser(description="Sample Rock-Paper-Scissors bot")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--slot", type=int, choices=[1, 2], default=1, help="Player slot this bot expects to hold")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    LOGGER.setLevel(logging.DEBUG if args.verbose else logging.INFO)
    SampleBot(args.slot, args.host, args.port).run()


if __name__ == "__main__":
    main()
