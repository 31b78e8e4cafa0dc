"""polynotify routing: one sender per notification kind.

The dispatch table is built once from the available senders.  Every
notification is routed to the sender for its kind; a notification with
no matching sender stops the batch instead of being dropped.
"""
