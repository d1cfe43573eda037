import argparse
import logging
import sys
from typing import List, Optional

from core.models import MatchConfig
from .server import LOGGER, ArbiterServer, MatchmakingTimeout

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    # Defaults are the reference match settings; every flag is optional.
    parser = argparse.ArgumentParser(description="Two-player Rock-Paper-Scissors arbiter over UDP")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--tick-us", type=int, default=500, help="Scoring tick interval in microseconds")
    parser.add_argument("--duration", type=float, default=20.0, help="Match length in seconds")
    parser.add_argument(
        "--matchmaking-timeout",
        type=float,
        default=None,
        help="Give up waiting for players after this many seconds (default: wait forever)",
    )
    parser.add_argument(
        "--idle-sleep-ms",
        type=float,
        default=0.0,
        help="Sleep after an idle poll to bound CPU usage (default: busy-poll)",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> MatchConfig:
    return MatchConfig(
        host=args.host,
        port=args.port,
        tick_interval=args.tick_us / 1_000_000,
        match_duration=args.duration,
        matchmaking_timeout=args.matchmaking_timeout,
        idle_sleep=args.idle_sleep_ms / 1000,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    server = ArbiterServer(config)
    try:
        server.bind()
    except OSError as exc:
        LOGGER.error("Could not bind %s:%s: %s", config.host, config.port, exc)
        return 1

    try:
        server.run()
    except MatchmakingTimeout as exc:
        LOGGER.error("%s", exc)
        return 2
    except KeyboardInterrupt:
        LOGGER.info("Interrupted, shutting down")
    finally:
        server.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
