"""
Wait-group coordination.

A wait group lets the Sailhouse service track a batch of events as one unit
and signal once all of them have been handled. Running one takes three
dependent calls:

1. Create an instance (POST /waitgroups/instances) and receive its id.
2. Publish every event, in order, with ``wait_group_instance_id`` set.
3. Mark the instance complete (PUT /waitgroups/instances/{id}/events).

Events are published strictly one after another: an event is never sent
before every earlier event has been accepted. Wait groups are small batches,
so the ordering is worth more than the throughput of concurrent publishes.

Nothing is retried and nothing is rolled back. When a step fails the run
stops there and raises ``WaitGroupError`` tagged with the failing stage:

- SETUP: nothing was published.
- PUBLISH: the events before ``index`` were published; the instance is left
  open on the service and never completed.
- COMPLETION: all events were published, but the instance may never be
  marked complete.

Callers that need recovery must make it idempotent on their side. A cancelled
run leaves the service in the same state as a failure at the step it reached.
"""
import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from .envelope import build_wait_group_body, decode, ensure_status, ensure_success, segment
from .exceptions import SailhouseError, WaitGroupError, WaitGroupStage
from .models import WaitEvent, WaitGroupInstance, WaitGroupInstanceResponse, WaitOptions

if TYPE_CHECKING:
    from .client import SailhouseClient

logger = logging.getLogger(__name__)


class WaitGroupState(str, Enum):
    """
    Progress of a single wait-group run.

    States are entered in order; COMPLETED, FAILED and CANCELLED are terminal.
    """
    STARTED = "started"
    INSTANCE_CREATED = "instance_created"
    PUBLISHING = "publishing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class WaitGroupRun:
    """Bookkeeping for one ``WaitGroupCoordinator.run`` call."""

    def __init__(self, topic: str, events: Sequence[WaitEvent], ttl: Optional[str] = None):
        self.topic = topic
        self.events = list(events)
        self.ttl = ttl
        self.state = WaitGroupState.STARTED
        self.instance: Optional[WaitGroupInstance] = None
        self.published = 0

    @property
    def instance_id(self) -> Optional[str]:
        return self.instance.wait_group_instance_id if self.instance else None

    def __repr__(self) -> str:
        return (
            f"WaitGroupRun(topic={self.topic!r}, state={self.state.value}, "
            f"instance_id={self.instance_id!r}, published={self.published}/{len(self.events)})"
        )


class WaitGroupCoordinator:
    """
    Runs the wait-group protocol through a ``SailhouseClient``.

    The coordinator keeps no state between runs; each ``run`` call owns its
    instance id for its own duration only.
    """

    def __init__(self, client: "SailhouseClient"):
        self._client = client

    async def run(
        self,
        topic: str,
        events: Sequence[WaitEvent],
        options: Optional[WaitOptions] = None,
    ) -> None:
        """
        Create a wait-group instance, publish ``events`` under it, complete it.

        Args:
            topic: Topic the instance is created for. Each event is published
                to its own ``WaitEvent.topic``.
            events: Events to publish, in order. May be empty.
            options: Optional time-to-live for the instance

        Raises:
            WaitGroupError: If any step fails
        """
        run = WaitGroupRun(topic, events, ttl=options.ttl if options else None)
        logger.debug(f"Starting wait group on {topic} with {len(run.events)} events")

        try:
            await self._create_instance(run)
            await self._publish_events(run)
            await self._complete(run)
        except asyncio.CancelledError:
            run.state = WaitGroupState.CANCELLED
            logger.warning(f"Wait group cancelled: {run!r}")
            raise
        except WaitGroupError:
            run.state = WaitGroupState.FAILED
            logger.debug(f"Wait group failed: {run!r}")
            raise

        logger.info(
            f"Wait group {run.instance_id} on {topic} completed with {run.published} events"
        )

    async def _create_instance(self, run: WaitGroupRun) -> None:
        operation = "create_wait_group"
        try:
            response = await self._client.request(
                "POST",
                "/waitgroups/instances",
                operation,
                json=build_wait_group_body(run.topic, run.ttl),
            )
            ensure_status(response, operation, 200)
            created = decode(WaitGroupInstanceResponse, response, operation)
        except SailhouseError as e:
            logger.error(f"Failed to create wait group instance on {run.topic}: {e}")
            raise WaitGroupError(WaitGroupStage.SETUP, str(e)) from e

        run.instance = WaitGroupInstance(
            topic=run.topic,
            ttl=run.ttl,
            wait_group_instance_id=created.wait_group_instance_id,
        )
        run.state = WaitGroupState.INSTANCE_CREATED
        logger.debug(f"Created wait group instance {run.instance_id} on {run.topic}")

    async def _publish_events(self, run: WaitGroupRun) -> None:
        run.state = WaitGroupState.PUBLISHING
        instance_id = run.instance_id

        # Sequential on purpose, see module docstring
        for index, event in enumerate(run.events):
            try:
                await self._client.publish(
                    event.topic,
                    event.body,
                    event.publish_options(instance_id),
                )
            except SailhouseError as e:
                logger.error(
                    f"Failed to publish event {index} of wait group {instance_id} "
                    f"to {event.topic}: {e}"
                )
                raise WaitGroupError(
                    WaitGroupStage.PUBLISH,
                    f"event {index} to {event.topic}: {e}",
                    wait_group_instance_id=instance_id,
                    index=index,
                    published=run.published,
                ) from e
            run.published += 1

    async def _complete(self, run: WaitGroupRun) -> None:
        operation = "complete_wait_group"
        instance_id = run.instance_id
        try:
            response = await self._client.request(
                "PUT",
                f"/waitgroups/instances/{segment(instance_id)}/events",
                operation,
                json={},
            )
            ensure_success(response, operation)
        except SailhouseError as e:
            logger.error(
                f"Wait group {instance_id} published {run.published} events "
                f"but could not be completed: {e}"
            )
            raise WaitGroupError(
                WaitGroupStage.COMPLETION,
                str(e),
                wait_group_instance_id=instance_id,
                published=run.published,
            ) from e

        run.state = WaitGroupState.COMPLETED
