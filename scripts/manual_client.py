#!/usr/bin/env python3
from __future__ import annotations

import argparse
import socket
import sys
import threading
from typing import Optional, Tuple

from core.models import StateMessage
from core.protocol import parse_state_line
from core.rules import parse_move

# ManualClient plays one slot from the terminal: type r, p or s and press enter.
# The arbiter broadcasts thousands of lines per second, so only lines whose
# moves or clock changed are printed.

HELLO = b"hello"


class ManualClient:
    def __init__(self, host: str, port: int) -> None:
        self.server = (host, port)
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.settimeout(0.5)
        self.finished = threading.Event()
        self.last_view: Optional[Tuple[object, ...]] = None

    def run(self) -> None:
        self.sock.sendto(HELLO, self.server)
        print(f"Connected to {self.server[0]}:{self.server[1]}. Waiting for an opponent...")
        receiver = threading.Thread(target=self._receive_loop, daemon=True)
        receiver.start()
        try:
            self._input_loop()
        finally:
            self.finished.set()
            receiver.join(timeout=1.0)
            self.sock.close()

    def _input_loop(self) -> None:
        while not self.finished.is_set():
            try:
                choice = input("Move [r/p/s] (h=help): ").strip()
            except EOFError:
                return
            if self.finished.is_set():
                return
            if choice.casefold() == "h":
                print("  r → Rock, p → Paper, s → Scissors. Your last move stays in play until you change it.")
                continue
            if not choice or parse_move(choice[0]) is None:
                print("Unknown move. Try again.")
                continue
            self.sock.sendto(choice[0].encode("utf-8"), self.server)

    def _receive_loop(self) -> None:
        while not self.finished.is_set():
            try:
                raw, _ = self.sock.recvfrom(1024)
            except socket.timeout:
                continue
            except OSError:
                return
            try:
                message = parse_state_line(raw)
            except ValueError:
                continue
            self._print_message(message)
            if message.is_final:
                print("Match ended. Press enter to exit.")
                self.finished.set()

    def _print_message(self, message: StateMessage) -> None:
        view = (message.player1_move, message.player2_move, message.time_left, message.result)
        if view == self.last_view:
            return
        self.last_view = view
        line = (
            f"\n[{message.time_left:>2}s] P1 {message.player1_move} ({message.player1_score})"
            f"  vs  P2 {message.player2_move} ({message.player2_score})"
        )
        if message.result:
            line += f"  >>> {message.result}"
        print(line)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rock-Paper-Scissors arbiter manual client")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    return parser.parse_args(argv)


def main(argv: list[str]) -> None:
    args = parse_args(argv)
    client = ManualClient(host=args.host, port=args.port)
    try:
        client.run()
    except KeyboardInterrupt:
        print("\nSession closed")


if __name__ == "__main__":
    main(sys.argv[1:])
