"""Kind-keyed notification routing.

``initialize`` builds a read-only ``DispatchTable`` mapping each
``NotificationKind`` to the one sender registered for it.  ``dispatch``
walks a batch of notifications in the order given and hands each one to
the sender for its kind.

Nothing is silently dropped: a notification whose kind has no sender
raises ``RoutingError`` and aborts the batch.  Sender failures propagate
unchanged and are never retried here.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from polynotify.models.notifications import NotificationBase, NotificationKind
from polynotify.senders import NotificationSender

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when the sender set cannot produce an unambiguous table."""


class RoutingError(RuntimeError):
    """Raised when a notification's kind has no registered sender."""

    def __init__(self, notification_id: str, kind: str) -> None:
        super().__init__(
            f"No sender registered for {kind} notification {notification_id}"
        )
        self.notification_id = notification_id
        self.kind = kind


class DispatchTable(Mapping[NotificationKind, NotificationSender]):
    """Immutable ``NotificationKind -> sender`` mapping.

    Build it with :func:`initialize`.  Once constructed it is never
    mutated, so it can be shared between threads without locking.
    """

    def __init__(self, entries: Mapping[NotificationKind, NotificationSender]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, kind: NotificationKind) -> NotificationSender:
        return self._entries[kind]

    def __iter__(self) -> Iterator[NotificationKind]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(
            f"{kind.value}={type(sender).__name__}"
            for kind, sender in self._entries.items()
        )
        return f"DispatchTable({pairs})"

    def lookup(self, kind: NotificationKind) -> NotificationSender | None:
        """Return the sender for *kind*, or ``None`` if none is registered."""
        return self._entries.get(kind)

    @property
    def kinds(self) -> frozenset[NotificationKind]:
        return frozenset(self._entries)


def _declared_kind(sender: object) -> NotificationKind:
    if not isinstance(sender, NotificationSender):
        raise ConfigurationError(
            f"{type(sender).__name__} does not implement NotificationSender "
            "(needs 'applies_to' and 'send')"
        )
    declared = sender.applies_to
    try:
        return NotificationKind(declared)
    except ValueError:
        raise ConfigurationError(
            f"{type(sender).__name__} applies to unknown notification kind {declared!r}"
        ) from None


def initialize(senders: Iterable[NotificationSender]) -> DispatchTable:
    """Build the dispatch table from the full set of available senders.

    Order of *senders* is irrelevant.  The same instance listed twice is
    registered once.

    Raises
    ------
    ConfigurationError
        If two distinct senders apply to the same kind, a sender applies
        to a kind outside ``NotificationKind``, or an object is not a
        sender at all.
    """
    entries: dict[NotificationKind, NotificationSender] = {}
    for sender in senders:
        kind = _declared_kind(sender)
        existing = entries.get(kind)
        if existing is not None and existing is not sender:
            raise ConfigurationError(
                f"Ambiguous routing for {kind.value} notifications: both "
                f"{type(existing).__name__} and {type(sender).__name__} apply to it"
            )
        entries[kind] = sender
        logger.info("Registered %s sender: %s", kind.value, type(sender).__name__)
    return DispatchTable(entries)


def dispatch(table: DispatchTable, notifications: Iterable[NotificationBase]) -> None:
    """Send each notification through the sender registered for its kind.

    Notifications are handled in iteration order, one sender call each.

    Raises
    ------
    RoutingError
        If a notification's kind is not in *table*.  Earlier notifications
        have already been sent; this one and the rest are not.
    DeliveryError
        Propagated from the sender as-is.
    """
    for notification in notifications:
        _route(table, notification)


def _route(table: DispatchTable, notification: NotificationBase) -> None:
    sender = table.lookup(notification.kind)
    if sender is None:
        logger.error(
            "No sender for %s notification %s, aborting batch",
            notification.kind.value,
            notification.notification_id,
        )
        raise RoutingError(notification.notification_id, notification.kind.value)
    logger.debug(
        "Routing %s notification %s to %s",
        notification.kind.value,
        notification.notification_id,
        type(sender).__name__,
    )
    sender.send(notification)


class NotificationRouter:
    """Holds a dispatch table built once at construction.

    Usage
    -----
    >>> router = NotificationRouter(default_senders())  # doctest: +SKIP
    >>> router.dispatch(store.find_all())               # doctest: +SKIP
    """

    def __init__(self, senders: Iterable[NotificationSender]) -> None:
        self._table = initialize(senders)

    @property
    def table(self) -> DispatchTable:
        return self._table

    def dispatch(self, notifications: Iterable[NotificationBase]) -> dict[str, int]:
        """Dispatch *notifications* and return how many went out per kind."""
        sent: Counter[str] = Counter()
        for notification in notifications:
            _route(self._table, notification)
            sent[notification.kind.value] += 1
        return dict(sent)
