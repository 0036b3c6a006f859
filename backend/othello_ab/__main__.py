#!/usr/bin/env python3
"""
Othello Alpha-Beta Engine - Main Entry Point
"""

import argparse
import logging

from .config import EngineConfig
from .game import SelfPlayGame, StalemateError
from .logs import setup_logging
from .protocol import PipePlayer, ProtocolError

logger = logging.getLogger("othello_ab")

def main(argv=None):
    parser = argparse.ArgumentParser(prog="othello_ab", description="Fixed-depth alpha-beta Othello engine")
    parser.add_argument("--depth", type=int, default=None, help="Search depth in plies")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("selfplay", help="Play a full game against itself")
    sub.add_parser("pipe", help="Play over stdin/stdout with the line protocol")
    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    if args.depth is not None and args.depth < 1:
        parser.error("--depth must be at least 1")

    setup_logging(args.log_level)
    config = EngineConfig() if args.depth is None else EngineConfig(search_depth=args.depth)

    if args.command == "selfplay":
        record = SelfPlayGame(config).play()
        black, white = record.board.count()
        print(record.board)
        print(f"Black {black} - White {white}")
    elif args.command == "pipe":
        try:
            PipePlayer(config).run()
        except (ProtocolError, StalemateError) as e:
            logger.error("session aborted: %s", e)
            return 1
    else:
        import uvicorn
        from . import server

        server.configure(config)
        logger.info("Server will be available at: http://%s:%d (docs at /docs)", args.host, args.port)
        uvicorn.run(server.app, host=args.host, port=args.port, log_level=args.log_level.lower())

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
