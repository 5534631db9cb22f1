"""Protean Engine runner for the Alerts domain.

Starts Engine workers that process events asynchronously when
PROTEAN_ENV=production:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads the orders::order stream and invokes OrderEventsHandler

Usage:
    python src/server.py
"""

import asyncio

from alerts.config import get_settings
from alerts.domain import alerts
from alerts.utils.logging import configure_logging
from protean.server.engine import Engine


async def run():
    alerts.init()
    engine = Engine(alerts)
    await engine.run()


def main():
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    asyncio.run(run())


if __name__ == "__main__":
    main()
