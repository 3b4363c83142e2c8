"""
Sailhouse client.

This module provides the SailhouseClient class, an asynchronous client for the
Sailhouse publish/subscribe API built on ``httpx``.

Usage:
    from sailhouse import SailhouseClient, PublishOptions

    async with SailhouseClient(token=os.environ["SAILHOUSE_TOKEN"]) as client:
        # Publish events
        await client.publish("orders", {"order_id": "ORD-001"})
        await client.publish(
            "reminders",
            {"order_id": "ORD-001"},
            PublishOptions(send_at=tomorrow, metadata={"kind": "reminder"}),
        )

        # Pull and acknowledge events
        response = await client.get_events("orders", "billing", limit=10)
        for event in response.events:
            print(event.data)
            await event.ack()

Every call is a single request with no retries. A client holds no state that
requests mutate, so one instance can be shared by concurrent tasks.
"""
import logging
from functools import partial
from typing import Any, Dict, Optional, Sequence

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings
from .envelope import build_publish_body, decode, ensure_status, segment
from .events import GetEventsResponse
from .exceptions import ConfigurationError, EncodeError, TransportError
from .models import PublishOptions, PublishResponse, WaitEvent, WaitOptions
from .waitgroups import WaitGroupCoordinator

logger = logging.getLogger(__name__)

# Value of the x-source header identifying this client implementation
SOURCE = "sailhouse-python"


class SailhouseClient:
    """
    Client for publishing, pulling and acknowledging Sailhouse events.

    Attributes:
        base_url: Base URL of the Sailhouse API
        timeout: HTTP request timeout in seconds
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            token: API token, sent verbatim in the Authorization header
            base_url: Base URL of the Sailhouse API (override for testing)
            timeout: HTTP request timeout in seconds
            http_client: Existing httpx client to send requests through. It is
                not closed by ``close()``; its owner remains responsible for it.
        """
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "SailhouseClient":
        """
        Build a client from ``Settings`` (read from the environment when omitted).

        Raises:
            ConfigurationError: If no token is configured
        """
        settings = settings or Settings()
        if not settings.token:
            raise ConfigurationError("No Sailhouse token configured (set SAILHOUSE_TOKEN)")
        return cls(
            token=settings.token,
            base_url=settings.base_url,
            timeout=settings.timeout,
            http_client=http_client,
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SailhouseClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        return f"SailhouseClient(base_url={self.base_url!r})"

    # =========================================================================
    # Transport
    # =========================================================================

    @property
    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {
            "Authorization": self._token,
            "x-source": SOURCE,
        }

    async def request(
        self,
        method: str,
        path: str,
        operation: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request to the API.

        Args:
            method: HTTP method
            path: Path below the base URL, already escaped
            operation: Operation name used in errors and logs
            json: Optional JSON body
            params: Optional query parameters

        Returns:
            The response, whatever its status

        Raises:
            TransportError: If the request could not be sent or failed in flight
            EncodeError: If the JSON body could not be encoded
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                json=json,
                params=params,
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"{operation} request to {url} failed: {e}")
            raise TransportError(operation, str(e) or type(e).__name__) from e
        except (TypeError, ValueError) as e:
            # Raised by httpx while encoding the JSON body, e.g. NaN or infinity
            logger.error(f"{operation} request body could not be encoded: {e}")
            raise EncodeError(operation, f"request body is not valid JSON: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    # =========================================================================
    # Publishing
    # =========================================================================

    async def publish(
        self,
        topic: str,
        data: Any,
        options: Optional[PublishOptions] = None,
    ) -> PublishResponse:
        """
        Publish an event to a topic.

        Args:
            topic: Target topic
            data: Event payload (any JSON-serializable value or pydantic model)
            options: Optional metadata, scheduled delivery time and wait-group
                instance id

        Returns:
            PublishResponse with the server-assigned event id

        Raises:
            TransportError: If the request could not be sent
            EncodeError: If ``data`` cannot be encoded as JSON
            UnexpectedStatusError: If the service did not answer 201
            DecodeError: If the response body is malformed
        """
        response = await self.request(
            "POST",
            f"/topics/{segment(topic)}/events",
            "publish",
            json=build_publish_body(data, options),
        )
        ensure_status(response, "publish", 201)
        result = decode(PublishResponse, response, "publish")
        logger.debug(f"Published event {result.id} to {topic}")
        return result

    # =========================================================================
    # Subscriptions
    # =========================================================================

    async def get_events(
        self,
        topic: str,
        subscription: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> GetEventsResponse:
        """
        Pull events from a subscription.

        Args:
            topic: Topic name
            subscription: Subscription name
            limit: Maximum number of events; server default when omitted
            offset: Pagination offset; server default when omitted

        Returns:
            GetEventsResponse whose events are stamped with ``topic`` and
            ``subscription`` and can be acknowledged with ``event.ack()``

        Raises:
            TransportError: If the request could not be sent
            UnexpectedStatusError: If the service did not answer 200
            DecodeError: If the response body is malformed
        """
        params: Dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        response = await self.request(
            "GET",
            f"/topics/{segment(topic)}/subscriptions/{segment(subscription)}/events",
            "get_events",
            params=params or None,
        )
        ensure_status(response, "get_events", 200)
        result = decode(GetEventsResponse, response, "get_events")

        for event in result.events:
            event.topic = topic
            event.subscription = subscription
            event.bind(partial(self.acknowledge_message, topic, subscription, event.id))

        logger.debug(f"Pulled {len(result.events)} events from {topic}/{subscription}")
        return result

    async def acknowledge_message(self, topic: str, subscription: str, event_id: str) -> None:
        """
        Mark an event as processed for a subscription.

        Raises:
            TransportError: If the request could not be sent
            UnexpectedStatusError: If the service did not answer 200
        """
        response = await self.request(
            "POST",
            f"/topics/{segment(topic)}/subscriptions/{segment(subscription)}/events/{segment(event_id)}",
            "acknowledge",
            json={},
        )
        ensure_status(response, "acknowledge", 200)
        logger.debug(f"Acknowledged event {event_id} on {topic}/{subscription}")

    # =========================================================================
    # Wait groups
    # =========================================================================

    async def wait(
        self,
        topic: str,
        events: Sequence[WaitEvent],
        options: Optional[WaitOptions] = None,
    ) -> None:
        """
        Publish ``events`` as one wait group.

        Creates a wait-group instance on ``topic``, publishes each event (in
        order, to the event's own topic) tagged with the instance id, then
        marks the instance complete.

        Raises:
            WaitGroupError: If any step fails; ``stage`` says which
        """
        await WaitGroupCoordinator(self).run(topic, events, options)
