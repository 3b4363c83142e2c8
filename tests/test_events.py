"""
Tests for the Event model: payload deserialization and acknowledgement.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel, ValidationError

from sailhouse import DecodeError, Event, GetEventsResponse


class Message(BaseModel):
    message: str
    count: int


@dataclass
class Reading:
    sensor: str
    values: List[float]
    note: Optional[str] = None


def make_event(data: Any) -> Event:
    return Event(id="event-1", data=data, topic="test-topic", subscription="test-sub")


class TestDeserialize:
    """Tests for Event.deserialize()."""

    def test_deserialize_into_model(self):
        event = make_event({"message": "test message", "count": 42})

        result = event.deserialize(Message)

        assert result == Message(message="test message", count=42)

    def test_deserialize_into_dataclass(self):
        event = make_event({"sensor": "t1", "values": [1.5, 2.0], "note": None})

        result = event.deserialize(Reading)

        assert result == Reading(sensor="t1", values=[1.5, 2.0], note=None)

    @pytest.mark.parametrize(
        "payload",
        [
            {"nested": {"list": [1, "two", None, {"deep": True}]}, "empty": {}},
            [1, 2.5, "three", False, None],
            "plain string",
            0,
            None,
        ],
    )
    def test_deserialize_any_json_value(self, payload):
        """Any JSON-representable payload comes back unchanged."""
        assert make_event(payload).deserialize(Any) == payload

    def test_deserialize_into_dict_type(self):
        event = make_event({"a": 1, "b": 2})

        assert event.deserialize(Dict[str, int]) == {"a": 1, "b": 2}

    def test_deserialize_mismatch_raises_decode_error(self):
        event = make_event({"message": "missing count"})

        with pytest.raises(DecodeError) as exc_info:
            event.deserialize(Message)

        assert isinstance(exc_info.value, ValueError)
        assert "event-1" in str(exc_info.value)


class TestAck:
    """Tests for Event.ack()."""

    @pytest.mark.asyncio
    async def test_ack_without_bound_client_is_noop(self):
        """Events built outside a pull have nothing to acknowledge against."""
        event = make_event({})

        assert event.is_bound is False
        assert await event.ack() is None

    @pytest.mark.asyncio
    async def test_ack_calls_bound_acknowledger(self):
        acknowledger = AsyncMock(return_value=None)
        event = make_event({}).bind(acknowledger)

        await event.ack()

        assert event.is_bound is True
        acknowledger.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_ack_propagates_errors(self):
        acknowledger = AsyncMock(side_effect=ConnectionError("down"))
        event = make_event({}).bind(acknowledger)

        with pytest.raises(ConnectionError):
            await event.ack()

    def test_acknowledger_is_not_serialized(self):
        event = make_event({"n": 1}).bind(AsyncMock())

        assert event.model_dump() == {
            "id": "event-1",
            "data": {"n": 1},
            "topic": "test-topic",
            "subscription": "test-sub",
        }


class TestGetEventsResponse:
    """Tests for decoding a page of events."""

    def test_preserves_server_order(self):
        page = GetEventsResponse.model_validate({
            "events": [{"id": "c", "data": 3}, {"id": "a", "data": 1}, {"id": "b", "data": 2}],
            "offset": 20,
            "limit": 3,
        })

        assert [event.id for event in page.events] == ["c", "a", "b"]
        assert page.offset == 20
        assert page.limit == 3

    def test_decoded_events_are_unbound(self):
        page = GetEventsResponse.model_validate({"events": [{"id": "a", "data": 1}], "offset": 0, "limit": 1})

        assert page.events[0].is_bound is False

    def test_event_requires_data(self):
        with pytest.raises(ValidationError):
            GetEventsResponse.model_validate({"events": [{"id": "a"}], "offset": 0, "limit": 1})

    def test_null_data_is_accepted(self):
        page = GetEventsResponse.model_validate({"events": [{"id": "a", "data": None}], "offset": 0, "limit": 1})

        assert page.events[0].data is None
