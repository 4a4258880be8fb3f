import argparse
import asyncio
import logging

from calculator.models import EquityConfig
from .server import EquityServer

logging.basicConfig(level=logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(description="Poker equity WebSocket host")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--workers", type=int, default=1, help="Worker processes per equity request")
    args = parser.parse_args()

    config = EquityConfig(workers=max(1, args.workers))

    server = EquityServer(config)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
