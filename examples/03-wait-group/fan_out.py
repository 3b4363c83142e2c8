#!/usr/bin/env python3
"""
Wait Group Fan-out

Publishes a batch of work items as one wait group. The service tracks the
batch and can signal once every item has been processed.

Requires SAILHOUSE_TOKEN in the environment (or a .env file).
"""

import asyncio

from sailhouse import SailhouseClient, WaitEvent, WaitGroupError, WaitGroupStage, WaitOptions


async def main():
    """Main entry point."""
    events = [
        WaitEvent(topic="resize-image", body={"image": "cat.png", "width": 320}),
        WaitEvent(topic="resize-image", body={"image": "cat.png", "width": 640}),
        WaitEvent(topic="extract-metadata", body={"image": "cat.png"}),
    ]

    async with SailhouseClient.from_settings() as client:
        try:
            await client.wait("image-processed", events, WaitOptions(ttl="10m"))
        except WaitGroupError as e:
            if e.stage == WaitGroupStage.SETUP:
                print(f"❌ Nothing was published: {e}")
            else:
                print(f"⚠️  {e.published} of {len(events)} events reached wait group "
                      f"{e.wait_group_instance_id} before it failed: {e}")
            raise SystemExit(1)

    print(f"✅ Published {len(events)} events as one wait group")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n🛑 Interrupted\n")
