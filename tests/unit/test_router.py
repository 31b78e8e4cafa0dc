"""Unit tests for initialize/dispatch and the NotificationRouter."""

from __future__ import annotations

import logging

import pytest

from polynotify.models.notifications import NotificationKind
from polynotify.routing.router import (
    ConfigurationError,
    DispatchTable,
    NotificationRouter,
    RoutingError,
    dispatch,
    initialize,
)
from polynotify.senders import DeliveryError


class _NotASender:
    """Has no applies_to/send at all."""


class _FailingSender:
    applies_to = NotificationKind.SMS

    def send(self, notification):
        raise DeliveryError("gateway unavailable", notification.notification_id)


# ---------------------------------------------------------------------------
# Test: initialize
# ---------------------------------------------------------------------------


class TestInitialize:
    """initialize must build an unambiguous, read-only table."""

    def test_each_sender_is_found_under_its_kind(self, make_sender):
        email = make_sender(NotificationKind.EMAIL)
        sms = make_sender(NotificationKind.SMS)
        table = initialize([email, sms])

        assert table.lookup(NotificationKind.EMAIL) is email
        assert table.lookup(NotificationKind.SMS) is sms
        assert len(table) == 2

    def test_order_is_irrelevant(self, make_sender):
        email = make_sender(NotificationKind.EMAIL)
        sms = make_sender(NotificationKind.SMS)

        forward = initialize([email, sms])
        backward = initialize([sms, email])

        assert dict(forward) == dict(backward)

    def test_initialize_twice_gives_identical_lookups(self, make_sender):
        senders = [make_sender(NotificationKind.EMAIL), make_sender(NotificationKind.SMS)]
        first = initialize(senders)
        second = initialize(senders)

        assert first is not second
        for kind in NotificationKind:
            assert first.lookup(kind) is second.lookup(kind)

    def test_empty_sender_set_gives_empty_table(self):
        table = initialize([])
        assert len(table) == 0
        assert table.lookup(NotificationKind.EMAIL) is None

    def test_two_senders_for_one_kind_rejected(self, make_sender):
        with pytest.raises(ConfigurationError, match="Ambiguous routing for email"):
            initialize([
                make_sender(NotificationKind.EMAIL),
                make_sender(NotificationKind.EMAIL),
            ])

    def test_same_instance_twice_is_not_a_conflict(self, make_sender):
        email = make_sender(NotificationKind.EMAIL)
        table = initialize([email, email])
        assert len(table) == 1
        assert table[NotificationKind.EMAIL] is email

    def test_string_kind_is_coerced(self, make_sender):
        sender = make_sender("sms")
        table = initialize([sender])
        assert table.lookup(NotificationKind.SMS) is sender

    def test_unknown_kind_rejected(self, make_sender):
        with pytest.raises(ConfigurationError, match="unknown notification kind 'push'"):
            initialize([make_sender("push")])

    def test_non_sender_rejected(self):
        with pytest.raises(ConfigurationError, match="does not implement NotificationSender"):
            initialize([_NotASender()])

    def test_logs_each_registration(self, make_sender, caplog):
        with caplog.at_level(logging.INFO, logger="polynotify.routing.router"):
            initialize([make_sender(NotificationKind.EMAIL)])
        assert "Registered email sender" in caplog.text


class TestDispatchTable:
    """DispatchTable must not be mutable after construction."""

    def test_item_assignment_not_supported(self, make_sender):
        table = initialize([make_sender(NotificationKind.EMAIL)])
        with pytest.raises(TypeError):
            table[NotificationKind.SMS] = make_sender(NotificationKind.SMS)  # type: ignore[index]

    def test_source_mapping_changes_do_not_leak(self, make_sender):
        entries = {NotificationKind.EMAIL: make_sender(NotificationKind.EMAIL)}
        table = DispatchTable(entries)
        entries[NotificationKind.SMS] = make_sender(NotificationKind.SMS)

        assert NotificationKind.SMS not in table
        assert table.kinds == frozenset({NotificationKind.EMAIL})

    def test_repr_names_senders(self, make_sender):
        table = initialize([make_sender(NotificationKind.SMS)])
        assert repr(table) == "DispatchTable(sms=RecordingSender)"


# ---------------------------------------------------------------------------
# Test: dispatch
# ---------------------------------------------------------------------------


class TestDispatch:
    """dispatch must invoke exactly one matching sender per notification."""

    def test_each_notification_goes_to_its_sender_once(self, make_sender, make_email, make_sms):
        email_sender = make_sender(NotificationKind.EMAIL)
        sms_sender = make_sender(NotificationKind.SMS)
        table = initialize([email_sender, sms_sender])

        sms = make_sms()
        email = make_email()
        dispatch(table, [sms, email])

        assert email_sender.received == [email]
        assert sms_sender.received == [sms]

    def test_store_order_is_preserved(self, make_sender, make_email, make_sms):
        calls: list[tuple[str, str]] = []
        table = initialize([
            make_sender(NotificationKind.EMAIL, calls),
            make_sender(NotificationKind.SMS, calls),
        ])
        batch = [make_sms(), make_email(), make_sms(), make_email()]

        dispatch(table, batch)

        assert [nid for _, nid in calls] == [n.notification_id for n in batch]

    def test_empty_batch_invokes_nothing(self, make_sender):
        sender = make_sender(NotificationKind.EMAIL)
        dispatch(initialize([sender]), [])
        assert sender.received == []

    def test_unrouted_kind_raises_with_id(self, make_sender, make_sms):
        email_sender = make_sender(NotificationKind.EMAIL)
        table = initialize([email_sender])
        sms = make_sms()

        with pytest.raises(RoutingError) as excinfo:
            dispatch(table, [sms])

        assert excinfo.value.notification_id == sms.notification_id
        assert excinfo.value.kind == "sms"
        assert sms.notification_id in str(excinfo.value)
        assert email_sender.received == []

    def test_unrouted_kind_aborts_rest_of_batch(self, make_sender, make_email, make_sms):
        email_sender = make_sender(NotificationKind.EMAIL)
        table = initialize([email_sender])
        first = make_email()
        later = make_email()

        with pytest.raises(RoutingError):
            dispatch(table, [first, make_sms(), later])

        assert email_sender.received == [first]

    def test_unrouted_kind_is_logged(self, make_sender, make_sms, caplog):
        table = initialize([make_sender(NotificationKind.EMAIL)])
        with caplog.at_level(logging.ERROR, logger="polynotify.routing.router"):
            with pytest.raises(RoutingError):
                dispatch(table, [make_sms()])
        assert "No sender for sms notification" in caplog.text

    def test_delivery_error_propagates(self, make_sender, make_email, make_sms):
        email_sender = make_sender(NotificationKind.EMAIL)
        table = initialize([email_sender, _FailingSender()])
        sms = make_sms()

        with pytest.raises(DeliveryError) as excinfo:
            dispatch(table, [sms, make_email()])

        assert excinfo.value.notification_id == sms.notification_id
        assert email_sender.received == []


class TestNotificationRouter:
    """NotificationRouter builds its table once and counts what it sends."""

    def test_counts_per_kind(self, make_sender, make_email, make_sms):
        router = NotificationRouter([
            make_sender(NotificationKind.EMAIL),
            make_sender(NotificationKind.SMS),
        ])
        counts = router.dispatch([make_email(), make_sms(), make_email()])
        assert counts == {"email": 2, "sms": 1}

    def test_construction_fails_on_conflict(self, make_sender):
        with pytest.raises(ConfigurationError):
            NotificationRouter([
                make_sender(NotificationKind.SMS),
                make_sender(NotificationKind.SMS),
            ])

    def test_table_is_built_once(self, make_sender, make_email):
        router = NotificationRouter([make_sender(NotificationKind.EMAIL)])
        table = router.table
        router.dispatch([make_email()])
        assert router.table is table
