"""Storage and campaign orchestration for polynotify."""
