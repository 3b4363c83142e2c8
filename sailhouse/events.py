"""
Events pulled from a Sailhouse subscription.

An ``Event`` pulled through ``SailhouseClient.get_events`` is bound to an
acknowledgement callable for exactly that topic, subscription and event id, so
a consumer can call ``await event.ack()`` once it has processed it:

    response = await client.get_events("orders", "billing", limit=10)
    for event in response.events:
        order = event.deserialize(Order)
        await handle(order)
        await event.ack()

The callable is borrowed from the client that fetched the event. It is not
serialized with the event and is absent on events constructed directly.
"""
import logging
from typing import Any, Awaitable, Callable, List, Optional, Type, TypeVar

from pydantic import Field, PrivateAttr, TypeAdapter, ValidationError

from .exceptions import DecodeError
from .models import BaseDTO

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Acknowledges one specific event; bound by the client at pull time.
Acknowledger = Callable[[], Awaitable[None]]


class Event(BaseDTO):
    """
    A single event delivered through a subscription.

    Fields:
        id: Server-assigned event identifier
        data: The event payload (any JSON value)
        topic: Topic the event was pulled from
        subscription: Subscription the event was pulled through
    """
    id: str = Field(..., description="Server-assigned event identifier.")
    data: Any = Field(..., description="The event payload, possibly null.")
    topic: str = Field(default="", description="Topic the event was pulled from.")
    subscription: str = Field(default="", description="Subscription the event was pulled through.")

    _acknowledger: Optional[Acknowledger] = PrivateAttr(default=None)

    def bind(self, acknowledger: Acknowledger) -> "Event":
        """Attach the acknowledgement callable for this event. Returns self."""
        self._acknowledger = acknowledger
        return self

    @property
    def is_bound(self) -> bool:
        """Whether this event can be acknowledged over the network."""
        return self._acknowledger is not None

    async def ack(self) -> None:
        """
        Acknowledge this event as processed.

        Events that were not pulled from a live subscription have nothing to
        acknowledge against; for those this is a no-op.
        """
        if self._acknowledger is None:
            logger.debug(f"Event {self.id} has no bound client, skipping acknowledgement")
            return
        await self._acknowledger()

    def deserialize(self, shape: Type[T]) -> T:
        """
        Validate the payload into a caller-defined shape.

        Args:
            shape: Any type pydantic can validate into, e.g. a BaseModel
                subclass, a dataclass, a TypedDict or ``dict``

        Raises:
            DecodeError: If the payload does not fit ``shape``
        """
        try:
            return TypeAdapter(shape).validate_python(self.data)
        except ValidationError as e:
            raise DecodeError("deserialize", f"event {self.id} payload: {e}") from e


class GetEventsResponse(BaseDTO):
    """A page of events pulled from a subscription."""
    events: List[Event] = Field(..., description="Events in server order.")
    offset: int = Field(..., description="Pagination offset echoed by the server.")
    limit: int = Field(..., description="Pagination limit echoed by the server.")
