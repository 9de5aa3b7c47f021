"""Application tests for notification fan-out and read flags."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from storefront.errors import NotFound
from storefront.notifications.management import (
    MarkAllNotificationsRead,
    MarkNotificationRead,
    PostSystemNotification,
)
from storefront.notifications.notification import Notification
from storefront.notifications.queries import list_notifications
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _place_order(user_id="user-001"):
    return _process(
        PlaceOrder(
            user_id=user_id,
            items=json.dumps([{"product_id": "prod-001", "size": "M", "quantity": 1, "price": 50.0}]),
            total=50.0,
            full_name="Ada Shopper",
            phone_number="555-0100",
            address="1 Market St",
        )
    )


@pytest.fixture()
def admins(monkeypatch):
    monkeypatch.setenv("STOREFRONT_ADMIN_IDS", "admin-001, admin-002")
    return ["admin-001", "admin-002"]


def _types(user_id):
    return [n["type"] for n in list_notifications(user_id)["notifications"]]


class TestOrderFanOut:
    def test_order_placed_notifies_admins_and_customer(self, admins):
        order_id = _place_order()

        for admin_id in admins:
            notes = list_notifications(admin_id)["notifications"]
            assert [n["type"] for n in notes] == ["new_order"]
            assert notes[0]["related_id"] == order_id
            assert notes[0]["related_model"] == "Order"

        assert _types("user-001") == ["order_status"]
        assert list_notifications("user-001")["notifications"][0]["title"] == "Order Received"

    def test_without_admins_only_customer_is_notified(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_ADMIN_IDS", raising=False)
        _place_order()
        assert len(current_domain.repository_for(Notification)._dao.query.all().items) == 1

    def test_status_change_notifies_customer(self):
        order_id = _place_order()
        _process(UpdateOrderStatus(order_id=order_id, status="delivered", actor_role="admin"))

        latest = list_notifications("user-001")["notifications"][0]
        assert latest["title"] == "Order Status Updated"
        assert "has been delivered" in latest["message"]


class TestReadFlags:
    def test_mark_one_read(self):
        notification_id = _process(PostSystemNotification(user_id="user-001", title="Hi", message="Welcome"))
        _process(MarkNotificationRead(notification_id=notification_id, user_id="user-001"))
        assert list_notifications("user-001")["unread_count"] == 0

    def test_cannot_mark_another_users_notification(self):
        notification_id = _process(PostSystemNotification(user_id="user-001", title="Hi", message="Welcome"))
        with pytest.raises(NotFound):
            _process(MarkNotificationRead(notification_id=notification_id, user_id="user-002"))
        assert list_notifications("user-001")["unread_count"] == 1

    def test_missing_notification(self):
        with pytest.raises(NotFound):
            _process(MarkNotificationRead(notification_id="missing", user_id="user-001"))

    def test_mark_all_read_returns_count(self):
        for title in ("One", "Two", "Three"):
            _process(PostSystemNotification(user_id="user-001", title=title, message="..."))
        _process(PostSystemNotification(user_id="user-002", title="Other", message="..."))

        assert _process(MarkAllNotificationsRead(user_id="user-001")) == 3
        assert list_notifications("user-001")["unread_count"] == 0
        assert list_notifications("user-002")["unread_count"] == 1


class TestListing:
    def test_limit_keeps_total_unread(self):
        for i in range(12):
            _process(PostSystemNotification(user_id="user-001", title=f"Note {i}", message="..."))

        listing = list_notifications("user-001")
        assert len(listing["notifications"]) == 10
        assert listing["unread_count"] == 12

    def test_system_type(self):
        _process(PostSystemNotification(user_id="user-001", title="Hi", message="Welcome"))
        assert _types("user-001") == ["system"]


class TestLargeInbox:
    @pytest.fixture()
    def inbox(self):
        repo = current_domain.repository_for(Notification)
        start = datetime(2024, 1, 1, tzinfo=UTC)
        for i in range(105):
            notification = Notification.create(
                user_id="user-001", notification_type="system", title=f"Note {i}", message="..."
            )
            notification.created_at = start + timedelta(minutes=i)
            repo.add(notification)

    def test_newest_rows_come_first(self, inbox):
        listing = list_notifications("user-001")
        assert [n["title"] for n in listing["notifications"][:2]] == ["Note 104", "Note 103"]
        assert listing["unread_count"] == 105

    def test_mark_all_read_covers_every_row(self, inbox):
        assert _process(MarkAllNotificationsRead(user_id="user-001")) == 105
        assert list_notifications("user-001")["unread_count"] == 0
