"""Tests for the in-process event channel."""

from __future__ import annotations

import logging

from pantrychef.events import EventChannel, MealLogged, PantryChanged


class TestEventChannel:
    """Tests for EventChannel subscribe and publish."""

    def test_publish_reaches_subscribers_in_order(self):
        channel = EventChannel()
        received = []
        channel.subscribe(PantryChanged, lambda e: received.append(("first", e.item_count)))
        channel.subscribe(PantryChanged, lambda e: received.append(("second", e.item_count)))

        channel.publish(PantryChanged(item_count=3))

        assert received == [("first", 3), ("second", 3)]

    def test_only_matching_event_type(self):
        channel = EventChannel()
        received = []
        channel.subscribe(MealLogged, received.append)

        channel.publish(PantryChanged(item_count=1))

        assert received == []

    def test_unsubscribe(self):
        channel = EventChannel()
        received = []
        unsubscribe = channel.subscribe(PantryChanged, received.append)
        assert channel.handler_count(PantryChanged) == 1

        unsubscribe()
        channel.publish(PantryChanged(item_count=1))

        assert received == []
        assert channel.handler_count(PantryChanged) == 0

    def test_unsubscribe_twice_is_harmless(self):
        channel = EventChannel()
        unsubscribe = channel.subscribe(PantryChanged, lambda e: None)
        unsubscribe()
        unsubscribe()
        assert channel.handler_count(PantryChanged) == 0

    def test_failing_handler_does_not_block_others(self, caplog):
        """Test that a raising handler is logged and later handlers still run."""
        channel = EventChannel()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        channel.subscribe(PantryChanged, broken)
        channel.subscribe(PantryChanged, received.append)

        with caplog.at_level(logging.ERROR, logger="pantrychef.events"):
            channel.publish(PantryChanged(item_count=2))

        assert len(received) == 1
        assert "failed for PantryChanged" in caplog.text
