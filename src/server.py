"""Protean Engine runner for the moderation domain.

Only needed when event processing is asynchronous (e.g. a production
overlay with a message broker). The default configuration processes
events synchronously inside each command.

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from moderation.domain import moderation

    moderation.init()
    await Engine(moderation).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
