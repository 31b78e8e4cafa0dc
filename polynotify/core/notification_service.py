"""NotificationService: campaign facade over the store and the router.

Callers only ask for a campaign to be sent.  Which channel each recipient
gets is decided by the kind of their stored notification, through the
dispatch table built when the service starts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from polynotify.core.notification_store import NotificationStore
from polynotify.models.campaign import Campaign, CampaignReport
from polynotify.routing.router import DispatchTable, NotificationRouter
from polynotify.senders import NotificationSender

logger = logging.getLogger(__name__)


class NotificationService:
    """Send campaigns to every stored notification.

    Parameters
    ----------
    store:
        Where notifications are read from.
    senders:
        Every sender available to the process, one per notification kind.
        The dispatch table is built here, so a misconfigured sender set
        fails at construction rather than mid-campaign.
    """

    def __init__(
        self,
        store: NotificationStore,
        senders: Iterable[NotificationSender],
    ) -> None:
        self._store = store
        self._router = NotificationRouter(senders)

    @property
    def dispatch_table(self) -> DispatchTable:
        return self._router.table

    def send_campaign(self, name: str, message: str) -> CampaignReport:
        """Fetch every notification and route each to its sender.

        *name* and *message* identify the campaign in logs and in the
        returned report; senders do not receive them.

        Raises
        ------
        RoutingError
            If a stored notification has no sender.  The campaign stops.
        DeliveryError
            If a sender fails.  The campaign stops; nothing is retried.
        """
        campaign = Campaign(name=name, message=message)
        logger.info("Starting campaign %s (%s)", campaign.name, campaign.campaign_id)

        notifications = self._store.find_all()
        by_kind = self._router.dispatch(notifications)

        report = CampaignReport(
            campaign_id=campaign.campaign_id,
            name=campaign.name,
            dispatched=sum(by_kind.values()),
            by_kind=by_kind,
        )
        logger.info(
            "Campaign %s dispatched %d notification(s): %s",
            campaign.name,
            report.dispatched,
            by_kind,
        )
        return report
