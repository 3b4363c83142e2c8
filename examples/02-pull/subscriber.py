#!/usr/bin/env python3
"""
Event Subscriber

Pulls a page of events from a subscription, prints each one and
acknowledges it once handled.

Requires SAILHOUSE_TOKEN in the environment (or a .env file).
"""

import asyncio
from typing import Optional

from pydantic import BaseModel

from sailhouse import DecodeError, SailhouseClient


class Greeting(BaseModel):
    message: str
    sender: Optional[str] = None


async def main():
    """Main entry point."""
    async with SailhouseClient.from_settings() as client:
        response = await client.get_events(
            "example-topic",
            "example-subscription-sdk-python",
            limit=10,
            offset=0,
        )
        if not response.events:
            print("No events waiting.")
            return

        for event in response.events:
            try:
                greeting = event.deserialize(Greeting)
            except DecodeError:
                print(f"Skipping event {event.id}: unexpected payload {event.data!r}")
                continue
            print(f"📨 {event.id}: {greeting.message}")
            await event.ack()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n🛑 Interrupted\n")
