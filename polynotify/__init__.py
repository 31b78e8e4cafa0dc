"""polynotify: polymorphic notification storage and kind-keyed dispatch.

Notifications share one base shape and come in channel-specific variants
(email, SMS).  A campaign fetches all of them in one polymorphic read and
routes each to the sender registered for its kind.
"""

__version__ = "0.1.0"
__description__ = "Polymorphic notification storage with kind-keyed sender dispatch"

from polynotify.core.notification_service import NotificationService
from polynotify.routing.router import (
    ConfigurationError,
    DispatchTable,
    RoutingError,
    dispatch,
    initialize,
)
from polynotify.senders import DeliveryError

__all__ = [
    "NotificationService",
    "DispatchTable",
    "initialize",
    "dispatch",
    "ConfigurationError",
    "RoutingError",
    "DeliveryError",
    "__version__",
]
