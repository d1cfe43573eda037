from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional, Set, Tuple, Union

from core.models import MatchConfig, PlayerSlots

from arbiter.server import ArbiterServer

PLAYER_A = ("10.0.0.1", 40001)
PLAYER_B = ("10.0.0.2", 40002)
STRANGER = ("10.0.0.3", 40003)

Inbound = Union[Tuple[bytes, Tuple[str, int]], BaseException]


# Fake non-blocking socket so the polling loops run without opening real ports.
class FakeEndpoint:
    def __init__(self, inbound: Iterable[Inbound] = ()) -> None:
        self.inbound: deque[Inbound] = deque(inbound)
        self.sent: List[Tuple[bytes, Tuple[str, int]]] = []
        self.recv_sizes: List[int] = []
        self.fail_sends_to: Set[Tuple[str, int]] = set()
        self.closed = False

    def feed(self, data: bytes, addr: Tuple[str, int]) -> None:
        self.inbound.append((data, addr))

    def recvfrom(self, bufsize: int) -> Tuple[bytes, Tuple[str, int]]:
        self.recv_sizes.append(bufsize)
        if not self.inbound:
            raise BlockingIOError(11, "Resource temporarily unavailable")
        item = self.inbound.popleft()
        if isinstance(item, BaseException):
            raise item
        data, addr = item
        return data[:bufsize], addr

    def sendto(self, payload: bytes, addr: Tuple[str, int]) -> int:
        if addr in self.fail_sends_to:
            raise OSError(113, "No route to host")
        self.sent.append((payload, addr))
        return len(payload)

    def lines_to(self, addr: Tuple[str, int]) -> List[str]:
        return [payload.decode("utf-8") for payload, dest in self.sent if dest == addr]

    def close(self) -> None:
        self.closed = True


class FakeClock:
    """Monotonic clock that advances by ``step`` on every read."""

    def __init__(self, start: float = 100.0, step: float = 0.001) -> None:
        self.now = start
        self.step = step
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def hellos(*addrs: Tuple[str, int]) -> List[Inbound]:
    return [(b"hello", addr) for addr in addrs]


def create_server(
    inbound: Iterable[Inbound] = (),
    *,
    match_duration: float = 2.0,
    tick_interval: float = 0.0005,
    idle_sleep: float = 0.0,
    clock: Optional[FakeClock] = None,
) -> Tuple[ArbiterServer, FakeEndpoint, FakeClock]:
    """Instantiate an arbiter wired to a fake endpoint and clock."""
    endpoint = FakeEndpoint(inbound)
    clock = clock or FakeClock()
    config = MatchConfig(match_duration=match_duration, tick_interval=tick_interval, idle_sleep=idle_sleep)
    server = ArbiterServer(config, sock=endpoint, clock=clock, sleep=clock.sleep)
    return server, endpoint, clock


def registered_slots() -> PlayerSlots:
    return PlayerSlots(player1=PLAYER_A, player2=PLAYER_B)
