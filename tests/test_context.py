"""
Tests for QueryContext.
"""

import time

from gqlclient.context import CANCELED, DEADLINE_EXCEEDED, QueryContext


class TestValues:
    """Test value lookup through the context chain."""

    def test_lookup_through_chain(self):
        ctx = QueryContext().with_value("a", 1).with_value("b", 2)
        assert ctx.value("a") == 1
        assert ctx.value("b") == 2
        assert ctx.value("missing") is None
        assert ctx.value("missing", "default") == "default"

    def test_nearest_wins(self):
        parent = QueryContext().with_value("key", "parent")
        child = parent.with_value("key", "child")
        assert child.value("key") == "child"
        assert parent.value("key") == "parent"

    def test_none_is_a_value(self):
        ctx = QueryContext().with_value("key", "outer").with_value("key", None)
        assert ctx.value("key", "default") is None


class TestCancellation:
    """Test cancellation propagation."""

    def test_background_is_live(self):
        ctx = QueryContext.background()
        assert not ctx.cancelled
        assert ctx.error is None
        assert ctx.deadline is None
        assert ctx.remaining() is None

    def test_cancel_reaches_children(self):
        parent = QueryContext()
        child = parent.with_value("k", "v")
        parent.cancel()
        assert child.cancelled
        assert child.error == CANCELED

    def test_cancel_does_not_reach_parent(self):
        parent = QueryContext()
        child = parent.with_timeout(10)
        child.cancel()
        assert child.cancelled
        assert not parent.cancelled

    def test_on_cancel_callback(self):
        parent = QueryContext()
        child = parent.with_value("k", "v")
        calls = []
        child.on_cancel(lambda: calls.append("cancelled"))

        parent.cancel()
        parent.cancel()

        assert calls == ["cancelled"]

    def test_on_cancel_when_already_cancelled(self):
        ctx = QueryContext()
        ctx.cancel()
        calls = []
        ctx.on_cancel(lambda: calls.append("cancelled"))
        assert calls == ["cancelled"]

    def test_removed_callback_not_called(self):
        ctx = QueryContext()
        calls = []
        remove = ctx.with_value("k", "v").on_cancel(lambda: calls.append("cancelled"))
        remove()
        ctx.cancel()
        assert calls == []


class TestDeadline:
    """Test deadlines and timeouts."""

    def test_child_cannot_extend_deadline(self):
        parent = QueryContext(timeout=1.0)
        child = parent.with_timeout(60.0)
        assert child.deadline == parent.deadline

    def test_child_can_shorten_deadline(self):
        parent = QueryContext(timeout=60.0)
        child = parent.with_timeout(1.0)
        assert child.deadline < parent.deadline
        assert 0 < child.remaining() <= 1.0

    def test_expired_deadline(self):
        ctx = QueryContext(timeout=0.01)
        time.sleep(0.02)
        assert ctx.remaining() == 0.0
        assert ctx.error == DEADLINE_EXCEEDED
        assert not ctx.cancelled

    def test_cancel_reported_before_deadline(self):
        ctx = QueryContext(timeout=0)
        ctx.cancel()
        assert ctx.error == CANCELED
