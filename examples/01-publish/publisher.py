#!/usr/bin/env python3
"""
Event Publisher

Demonstrates how to publish events to a Sailhouse topic, immediately and
scheduled for later delivery.

Requires SAILHOUSE_TOKEN in the environment (or a .env file).
"""

import asyncio
from datetime import datetime, timedelta, timezone

from sailhouse import PublishOptions, SailhouseClient


async def main():
    """Main entry point."""
    async with SailhouseClient.from_settings() as client:
        result = await client.publish("example-topic", {"message": "Hello world!"})
        print(f"✓ Published event {result.id}")

        reminder = await client.publish(
            "example-topic",
            {"message": "Hello again, an hour later"},
            PublishOptions(
                metadata={"kind": "reminder"},
                send_at=datetime.now(timezone.utc) + timedelta(hours=1),
            ),
        )
        print(f"✓ Scheduled event {reminder.id}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n🛑 Interrupted\n")
