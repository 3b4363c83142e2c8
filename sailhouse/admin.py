"""
Administrative operations for the Sailhouse API.
"""
import logging
from typing import Optional

from .client import SailhouseClient
from .envelope import build_push_subscription_body, decode, ensure_success, segment
from .models import FilterOption, RegisterResult

logger = logging.getLogger(__name__)


class AdminClient:
    """
    Client for managing subscriptions.

    Wraps an existing SailhouseClient and shares its credentials and HTTP
    connection. Closing remains the wrapped client's job.
    """

    def __init__(self, client: SailhouseClient):
        self.client = client

    async def register_push_subscription(
        self,
        topic: str,
        subscription: str,
        endpoint: str,
        filter: Optional[FilterOption] = None,
    ) -> RegisterResult:
        """
        Create or update a push subscription that delivers events to ``endpoint``.

        Args:
            topic: Topic name
            subscription: Subscription name
            endpoint: URL the service will POST events to
            filter: Optional filter restricting which events are pushed

        Returns:
            RegisterResult whose outcome is "created", "updated" or "none"
        """
        operation = "register_push_subscription"
        response = await self.client.request(
            "PUT",
            f"/topics/{segment(topic)}/subscriptions/{segment(subscription)}",
            operation,
            json=build_push_subscription_body(endpoint, filter),
        )
        ensure_success(response, operation)
        result = decode(RegisterResult, response, operation)
        logger.info(f"Push subscription {topic}/{subscription} -> {endpoint}: {result.outcome}")
        return result
