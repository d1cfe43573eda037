from __future__ import annotations

import logging
import socket
import time
from typing import Any, Callable, Optional, Tuple

from core.game import MatchEngine
from core.models import Address, MatchConfig, PlayerSlots, StateMessage
from core.protocol import decode_move, encode_state

LOGGER = logging.getLogger("rps_arbiter")

# The arbiter glues the match engine to a non-blocking UDP socket. Every
# network concern lives here; MatchEngine stays pure. Both phases poll the
# socket on a single thread: "no data" is the common case, not an error.

Clock = Callable[[], float]


class MatchmakingTimeout(RuntimeError):
    pass


def open_endpoint(host: str, port: int) -> socket.socket:
    """Bind a non-blocking datagram socket. Bind errors propagate to the caller."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.setblocking(False)
    return sock


def poll_datagram(sock: Any, bufsize: int) -> Optional[Tuple[bytes, Address]]:
    try:
        data, addr = sock.recvfrom(bufsize)
    except BlockingIOError:
        return None
    except OSError as exc:
        LOGGER.warning("Error receiving data: %r", exc)
        return None
    return data, addr


class Matchmaker:
    """Assigns the first two distinct senders to the player slots."""

    def __init__(
        self,
        sock: Any,
        config: MatchConfig,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.sock = sock
        self.config = config
        self.clock = clock
        self.sleep = sleep
        self.slots = PlayerSlots()

    def run(self) -> Tuple[Address, Address]:
        # Blocks until two peers appear unless a matchmaking timeout is set.
        started = self.clock()
        timeout = self.config.matchmaking_timeout
        while not self.slots.is_full():
            if timeout is not None and self.clock() - started >= timeout:
                raise MatchmakingTimeout(f"No match after {timeout:g}s ({self._waiting_count()} of 2 players connected)")
            received = poll_datagram(self.sock, self.config.recv_bytes)
            if received is None:
                if self.config.idle_sleep:
                    self.sleep(self.config.idle_sleep)
                continue
            # Payload is ignored: any datagram counts as a hello.
            _, addr = received
            slot = self.slots.claim(addr)
            if slot is not None:
                LOGGER.info("Player %s connected: %s:%s", slot, addr[0], addr[1])
        LOGGER.info("Both players connected! Starting the game...")
        return self.slots.addresses()

    def _waiting_count(self) -> int:
        return sum(1 for addr in (self.slots.player1, self.slots.player2) if addr is not None)


class ArbiterServer:
    def __init__(
        self,
        config: MatchConfig,
        sock: Any = None,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.sock = sock
        self.clock = clock
        self.sleep = sleep
        self.slots: Optional[PlayerSlots] = None
        self.engine: Optional[MatchEngine] = None

    def bind(self) -> None:
        self.sock = open_endpoint(self.config.host, self.config.port)
        LOGGER.info(
            "Server listening on %s:%s... Waiting for players to connect.",
            self.config.host,
            self.config.port,
        )

    def close(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def run(self) -> str:
        """Matchmake, play one match and return the result string."""
        if self.sock is None:
            self.bind()
        matchmaker = Matchmaker(self.sock, self.config, clock=self.clock, sleep=self.sleep)
        matchmaker.run()
        return self.play(matchmaker.slots)

    def play(self, slots: PlayerSlots) -> str:
        slots.addresses()  # raises unless both slots are claimed
        self.slots = slots
        engine = MatchEngine(self.config, now=self.clock())
        self.engine = engine

        while True:
            elapsed = engine.elapsed(self.clock())
            if engine.is_expired(elapsed):
                result = engine.finish()
                self._broadcast(engine.snapshot(elapsed, result=result))
                LOGGER.info("Game ended: %s", result)
                return result

            received = self._poll_move()

            now = self.clock()
            if engine.tick_due(now):
                engine.tick(now)
                self._broadcast(engine.snapshot(elapsed))

            if not received and self.config.idle_sleep:
                self.sleep(self.config.idle_sleep)

    def _poll_move(self) -> bool:
        assert self.slots is not None and self.engine is not None
        received = poll_datagram(self.sock, self.config.recv_bytes)
        if received is None:
            return False
        data, addr = received
        slot = self.slots.slot_of(addr)
        if slot is None:
            LOGGER.debug("Ignoring datagram from unregistered %s:%s", addr[0], addr[1])
            return True
        move = decode_move(data)
        if move is None:
            return True
        self.engine.set_move(slot, move)
        LOGGER.info("Player %s chose %s", slot, move)
        return True

    def _broadcast(self, message: StateMessage) -> None:
        # Best effort: a failed send to one player never affects the other.
        assert self.slots is not None
        payload = encode_state(message)
        for addr in self.slots.addresses():
            try:
                self.sock.sendto(payload, addr)
            except OSError as exc:
                LOGGER.debug("Send to %s:%s failed: %r", addr[0], addr[1], exc)
