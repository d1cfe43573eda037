"""UDP arbiter: matchmakes two peers and runs one timed match between them."""

from .server import ArbiterServer, Matchmaker, MatchmakingTimeout, open_endpoint

__all__ = ["ArbiterServer", "Matchmaker", "MatchmakingTimeout", "open_endpoint"]
